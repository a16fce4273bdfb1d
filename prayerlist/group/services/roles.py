"""Owner, admin and member checks for a (group, user) pair.

Ownership comes only from the group's ``ownerId``; admin and member status
come only from the group_members collection. The owner therefore counts as
owner-or-admin even if their seeded admin membership is missing.

These checks are advisory: callers run them before privileged mutations,
and nothing in the storage layer enforces them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from prayerlist.core.constants import (
    GROUP_MEMBERS_COLLECTION,
    GROUPS_COLLECTION,
    ROLE_ADMIN,
)
from prayerlist.group.utils import membership_id

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client


def get_membership(db: Client, group_id: str, user_id: str) -> dict[str, Any] | None:
    """Return the membership document for the pair, or None."""
    snapshot = (
        db.collection(GROUP_MEMBERS_COLLECTION)
        .document(membership_id(group_id, user_id))
        .get()
    )
    if not snapshot.exists:
        return None
    return snapshot.to_dict()


def is_member(db: Client, group_id: str, user_id: str) -> bool:
    """Return True if the user holds any membership in the group."""
    return get_membership(db, group_id, user_id) is not None


def is_owner(db: Client, group_id: str, user_id: str) -> bool:
    """Return True if the user is the group's recorded owner."""
    snapshot = db.collection(GROUPS_COLLECTION).document(group_id).get()
    if not snapshot.exists:
        return False
    return (snapshot.to_dict() or {}).get("ownerId") == user_id


def is_admin(db: Client, group_id: str, user_id: str) -> bool:
    """Return True if the user's membership carries the admin role."""
    membership = get_membership(db, group_id, user_id)
    return membership is not None and membership.get("role") == ROLE_ADMIN


def is_owner_or_admin(db: Client, group_id: str, user_id: str) -> bool:
    """Return True if the user may perform owner/admin actions."""
    if is_owner(db, group_id, user_id):
        return True
    return is_admin(db, group_id, user_id)


def viewer_role(db: Client, group: dict[str, Any], user_id: str | None) -> str | None:
    """Describe the caller's standing in an already-fetched group."""
    if not user_id:
        return None
    if group.get("ownerId") == user_id:
        return "owner"
    membership = get_membership(db, group["id"], user_id)
    if membership is None:
        return None
    return membership.get("role")
