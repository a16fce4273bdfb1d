"""Routes for the feedback blueprint."""

from firebase_admin import firestore

from prayerlist.utils import api_response

from . import bp
from .forms import FeedbackForm
from .services import FeedbackService


@bp.route("/create", methods=["POST"])
def create_feedback():
    """Leave feedback. No sign-in is needed."""
    form = FeedbackForm().validate_or_raise()
    feedback = FeedbackService.create_feedback(firestore.client(), form.text.data)
    return api_response("Feedback created successfully", feedback, 201)


@bp.route("/get-all", methods=["GET"])
def get_all_feedback():
    """List all feedback, newest first."""
    feedback = FeedbackService.get_all_feedback(firestore.client())
    return api_response("Feedback retrieved successfully", feedback)
