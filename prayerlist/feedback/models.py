"""Data models for the feedback blueprint."""

from prayerlist.core.types import FirestoreDocument


class Feedback(FirestoreDocument, total=False):
    """Free-text feedback left by a visitor."""

    text: str
