"""The prayer request blueprint."""

from flask import Blueprint

bp = Blueprint("prayer_request", __name__, url_prefix="/prayer-request")

from . import routes  # noqa: E402

__all__ = ["routes"]
