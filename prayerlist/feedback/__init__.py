"""The feedback blueprint."""

from flask import Blueprint

bp = Blueprint("feedback", __name__, url_prefix="/feedback")

from . import routes  # noqa: E402

__all__ = ["routes"]
