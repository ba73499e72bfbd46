"""Routes for the bucket blueprint."""

from firebase_admin import firestore
from flask import g, jsonify, request

from bucketlist.auth.decorators import login_required
from bucketlist.errors import ValidationError
from bucketlist.utils import first_form_error

from . import bp
from .forms import BucketTitleForm
from .services import BucketService


@bp.route("", methods=["GET"])
@login_required
def bucket_titles():
    """Return the signed-in user's four bucket titles in slot order."""
    db = firestore.client()
    titles = BucketService.get_ordered_bucket_titles(db, g.user["email"])
    return jsonify({"bucketTitles": titles})


@bp.route("/single", methods=["GET"])
@login_required
def bucket_title():
    bucket_id = request.args.get("bucketId")
    if not bucket_id:
        raise ValidationError("bucketId is required.")

    db = firestore.client()
    return jsonify({"bucketTitle": BucketService.get_bucket_title(db, bucket_id)})


@bp.route("", methods=["POST"])
@login_required
def update_bucket_title():
    """Rename a bucket shared with the signed-in user."""
    form = BucketTitleForm()
    if "bucketTitle" not in (request.get_json(silent=True) or {}):
        raise ValidationError("bucketId and bucketTitle are required.")
    if not form.validate_on_submit():
        raise ValidationError(first_form_error(form))

    db = firestore.client()
    title = BucketService.update_bucket_title(
        db, form.bucketId.data, form.bucketTitle.data or "", g.user["email"]
    )
    return jsonify({"success": True, "bucketTitle": title})
