"""Routes for the collaboration blueprint."""

from firebase_admin import firestore
from flask import current_app, g, jsonify, request

from bucketlist.auth.decorators import login_required
from bucketlist.errors import ValidationError
from bucketlist.utils import first_form_error

from . import bp
from .forms import GenerateInviteForm, RemoveCollaboratorForm
from .services import InviteService, RosterService, SlotService
from .utils import send_invite_email_background


@bp.route("/generate-invite", methods=["POST"])
@login_required
def generate_invite():
    """Create a shareable invite link for a bucket the user owns."""
    form = GenerateInviteForm()
    if not form.validate_on_submit():
        raise ValidationError(first_form_error(form))

    db = firestore.client()
    invite = InviteService.generate_invite(
        db,
        form.bucketId.data,
        g.user["email"],
        ttl_days=current_app.config["INVITE_TTL_DAYS"],
    )
    base_url = current_app.config.get("INVITE_BASE_URL") or request.host_url
    invite_url = InviteService.build_invite_url(base_url, invite["inviteCode"])

    if form.email.data:
        send_invite_email_background(
            current_app._get_current_object(),  # type: ignore[attr-defined]
            {
                "to": form.email.data.strip().lower(),
                "subject": "You've been invited to a shared bucket list!",
                "template": "email/bucket_invite.html",
                "inviter_name": g.user.get("name") or g.user["email"],
                "bucket_title": invite["bucketTitle"],
                "invite_url": invite_url,
                "invite_expiry": invite["inviteExpiry"],
            },
        )

    return jsonify(
        {
            "success": True,
            "inviteCode": invite["inviteCode"],
            "inviteUrl": invite_url,
        }
    )


@bp.route("/accept-invite", methods=["POST"])
@login_required
def accept_invite():
    """Join a bucket through an invite, choosing the slot that will hold it."""
    data = request.get_json(silent=True) or {}
    invite_code = data.get("inviteCode")
    if not invite_code or not isinstance(invite_code, str):
        raise ValidationError("inviteCode is required.")

    db = firestore.client()
    result = SlotService.accept_invite(
        db, g.user["email"], invite_code, data.get("slotIndex")
    )
    return jsonify(result)


@bp.route("/collaborators/<string:bucket_id>", methods=["GET"])
@login_required
def list_collaborators(bucket_id):
    """List everyone who shares a bucket."""
    db = firestore.client()
    collaborators = RosterService.list_collaborators(db, bucket_id, g.user["email"])
    return jsonify({"success": True, "collaborators": collaborators})


@bp.route("/remove-collaborator", methods=["DELETE"])
@login_required
def remove_collaborator():
    """Remove a collaborator from a bucket (owner only)."""
    form = RemoveCollaboratorForm()
    if not form.validate_on_submit():
        raise ValidationError(first_form_error(form))

    db = firestore.client()
    RosterService.remove_collaborator(
        db, form.bucketId.data, form.collaboratorEmail.data, g.user["email"]
    )
    return jsonify({"success": True, "message": "Collaborator removed"})
