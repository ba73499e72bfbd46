"""The collaboration blueprint."""

from flask import Blueprint

bp = Blueprint("collab", __name__, url_prefix="/collab")

from . import routes  # noqa: E402

__all__ = ["routes"]
