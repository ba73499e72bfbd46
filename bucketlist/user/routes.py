"""Routes for the user blueprint."""

from flask import g, jsonify

from bucketlist.auth.decorators import login_required

from . import bp
from .models import public_profile


@bp.route("/me", methods=["GET"])
@login_required
def current_user():
    """Return the signed-in user's profile and slot order."""
    return jsonify({"user": public_profile(g.user)})
