"""Decorators for the auth blueprint."""

from functools import wraps

from flask import g, session

from bucketlist.errors import NotAuthenticated, UserNotFound


def login_required(f):
    """Reject the request unless the session belongs to a known user.

    The resolved user is available as ``g.user`` inside the view.
    """

    @wraps(f)
    def decorated_function(*args, **kwargs):
        if "user_id" not in session:
            raise NotAuthenticated()
        if not g.get("user"):
            raise UserNotFound()
        return f(*args, **kwargs)

    return decorated_function
