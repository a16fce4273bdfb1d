"""Data models for the group blueprint."""

from __future__ import annotations

from typing import Any, Literal, Optional, TypedDict

from prayerlist.core.types import FirestoreDocument, PublicProfile

Role = Literal["member", "admin"]


class Group(FirestoreDocument, total=False):
    """A group document in Firestore."""

    name: str
    description: str
    code: str
    isPublic: bool
    ownerId: str
    displayName: Optional[str]
    imageUrl: Optional[str]

    # UI and calculated fields
    owner: PublicProfile | dict[str, Any]
    viewerRole: Optional[str]


class Membership(TypedDict, total=False):
    """A group_members document, keyed by `{groupId}_{userId}`."""

    id: str
    groupId: str
    userId: str
    role: Role
    joinedAt: Any

    # UI and calculated fields
    user: PublicProfile | dict[str, Any]


class GroupMessage(FirestoreDocument, total=False):
    """An announcement posted to a group by its owner or an admin."""

    groupId: str
    userId: str
    message: str
    isPinned: bool

    # UI and calculated fields
    user: PublicProfile | dict[str, Any]
