"""Routes for the auth blueprint.

Passwords never reach this server after signup: the client signs in with the
Firebase SDK and exchanges its ID token for a server-side session.
"""

from firebase_admin import auth, firestore
from flask import current_app, jsonify, request, session
from flask_wtf.csrf import generate_csrf

from bucketlist.errors import (
    DuplicateResourceError,
    NotAuthenticated,
    UserNotFound,
    ValidationError,
)
from bucketlist.user.models import public_profile
from bucketlist.user.services import UserService, display_name
from bucketlist.utils import first_form_error, normalize_email

from . import bp
from .forms import SignupForm


@bp.route("/signup", methods=["POST"])
def signup():
    """Create the Firebase account and the user's four buckets."""
    form = SignupForm()
    if not form.validate_on_submit():
        raise ValidationError(first_form_error(form))

    db = firestore.client()
    email = normalize_email(form.email.data)
    if UserService.get_user_by_email(db, email) is not None:
        raise DuplicateResourceError("User already exists.")

    try:
        user_record = auth.create_user(
            email=email,
            password=form.password.data,
            display_name=display_name(form.first.data, form.last.data),
        )
    except auth.EmailAlreadyExistsError:
        raise DuplicateResourceError("User already exists.")

    user = UserService.create_user(
        db, user_record.uid, email, form.first.data.strip(), form.last.data.strip()
    )
    current_app.logger.info(f"New signup: {user_record.uid}")
    return (
        jsonify(
            {"success": True, "message": "Signup successful", "user": public_profile(user)}
        ),
        201,
    )


@bp.route("/session_login", methods=["POST"])
def session_login():
    """Verify a Firebase ID token and open a server-side session."""
    data = request.get_json(silent=True) or {}
    id_token = data.get("idToken")
    if not id_token:
        raise ValidationError("idToken is required.")

    try:
        decoded_token = auth.verify_id_token(id_token)
    except Exception as e:
        current_app.logger.warning(f"Rejected ID token: {e}")
        raise NotAuthenticated("Invalid token.")

    uid = decoded_token["uid"]
    db = firestore.client()
    user = UserService.get_user_by_id(db, uid)
    if user is None:
        raise UserNotFound("User not found in Firestore.")

    session.clear()
    session["user_id"] = uid
    return jsonify({"success": True, "user": public_profile(user)})


@bp.route("/logout", methods=["POST"])
def logout():
    session.clear()
    return jsonify({"success": True, "message": "Logged out"})


@bp.route("/csrf-token", methods=["GET"])
def csrf_token():
    """Hand the client a CSRF token to send back as X-CSRFToken."""
    return jsonify({"csrfToken": generate_csrf()})
