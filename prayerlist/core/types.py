"""Core data types for the prayerlist application."""

from typing import Any, Optional, TypedDict


class _FirestoreDocumentBase(TypedDict):
    id: str
    createdAt: Any


class FirestoreDocument(_FirestoreDocumentBase, total=False):
    """Generic Firestore document structure."""

    updatedAt: Any


class PublicProfile(TypedDict):
    """The author fields exposed alongside groups, members and requests."""

    id: str
    firstName: Optional[str]
    lastName: Optional[str]


class _APIResponseBase(TypedDict):
    message: str
    data: Any


class APIResponse(_APIResponseBase, total=False):
    """Envelope returned by every endpoint."""

    error: str
