"""Service layer for feedback."""

from __future__ import annotations

from typing import TYPE_CHECKING

from prayerlist.core.constants import FEEDBACK_COLLECTION
from prayerlist.utils import snapshot_to_dict, sort_timestamp, utcnow

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client

    from .models import Feedback


class FeedbackService:
    """Service class for feedback entries."""

    @staticmethod
    def create_feedback(db: Client, text: str) -> Feedback:
        """Store a feedback entry."""
        feedback_ref = db.collection(FEEDBACK_COLLECTION).document()
        feedback_data = {"text": text.strip(), "createdAt": utcnow()}
        feedback_ref.set(feedback_data)
        feedback_data["id"] = feedback_ref.id
        return feedback_data

    @staticmethod
    def get_all_feedback(db: Client) -> list[Feedback]:
        """Return every feedback entry, newest first."""
        entries = [
            snapshot_to_dict(doc)
            for doc in db.collection(FEEDBACK_COLLECTION).stream()
            if doc.exists
        ]
        entries.sort(key=lambda f: sort_timestamp(f.get("createdAt")), reverse=True)
        return entries
