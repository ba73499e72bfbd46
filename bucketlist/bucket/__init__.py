"""The bucket blueprint."""

from flask import Blueprint

bp = Blueprint("bucket", __name__, url_prefix="/bucket-action")

from . import routes  # noqa: E402

__all__ = ["routes"]
