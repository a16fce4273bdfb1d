"""Data models for the user blueprint."""

from __future__ import annotations

from typing import Optional

from prayerlist.core.types import FirestoreDocument


class User(FirestoreDocument, total=False):
    """A user document in Firestore, keyed by the identity provider's uid."""

    externalId: str
    firstName: Optional[str]
    lastName: Optional[str]
