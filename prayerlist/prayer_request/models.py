"""Data models for the prayer request blueprint."""

from __future__ import annotations

from typing import Any, Literal, Optional, TypedDict

from prayerlist.core.types import FirestoreDocument, PublicProfile

RequestStatus = Literal["active", "under_review", "reviewed"]


class PrayerRequest(FirestoreDocument, total=False):
    """A prayer_requests document in Firestore."""

    text: str
    userId: str
    isAnonymous: bool
    prayerCount: int
    groupId: Optional[str]
    isGroupOnly: bool
    reportCount: int
    status: RequestStatus
    reviewedBy: Optional[str]
    reviewedAt: Any

    # UI and calculated fields
    user: PublicProfile | dict[str, Any]
    groupName: Optional[str]


class PrayerCommitment(TypedDict, total=False):
    """A prayer_commitments document, keyed by `{prayerRequestId}_{userId}`."""

    id: str
    prayerRequestId: str
    userId: str
    createdAt: Any


class PrayerRequestReport(TypedDict, total=False):
    """A prayer_request_reports document, keyed by `{prayerRequestId}_{reportedBy}`."""

    id: str
    prayerRequestId: str
    reportedBy: str
    reason: Optional[str]
    createdAt: Any
