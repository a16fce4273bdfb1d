"""Service layer for groups, join codes and memberships."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from firebase_admin import firestore
from flask import current_app

from prayerlist.core.constants import (
    GROUP_CODE_MAX_ATTEMPTS,
    GROUP_MEMBERS_COLLECTION,
    GROUPS_COLLECTION,
    ROLE_ADMIN,
    ROLE_MEMBER,
)
from prayerlist.errors import (
    DuplicateResourceError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from prayerlist.group.utils import generate_group_code, membership_id, normalize_code
from prayerlist.prayer_request.services import PrayerRequestService
from prayerlist.user.services import UserService
from prayerlist.utils import (
    delete_in_batches,
    snapshot_to_dict,
    sort_timestamp,
    utcnow,
)

from . import roles

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client

    from prayerlist.group.models import Group, Membership


class GroupService:
    """Service class for group-related operations."""

    @staticmethod
    def create_group(
        db: Client, name: str, description: str, is_public: bool, owner_id: str
    ) -> Group:
        """Create a group and seed the owner's admin membership."""
        groups_ref = db.collection(GROUPS_COLLECTION)
        existing = list(
            groups_ref.where(filter=firestore.FieldFilter("name", "==", name))
            .limit(1)
            .stream()
        )
        if existing:
            raise DuplicateResourceError("Group name already exists")

        now = utcnow()
        group_ref = groups_ref.document()
        group_data = {
            "name": name,
            "description": description,
            "code": GroupService._generate_unique_code(db),
            "isPublic": is_public,
            "ownerId": owner_id,
            "displayName": None,
            "imageUrl": None,
            "createdAt": now,
            "updatedAt": now,
        }
        member_ref = db.collection(GROUP_MEMBERS_COLLECTION).document(
            membership_id(group_ref.id, owner_id)
        )

        batch = db.batch()
        batch.set(group_ref, group_data)
        batch.set(
            member_ref,
            {
                "groupId": group_ref.id,
                "userId": owner_id,
                "role": ROLE_ADMIN,
                "joinedAt": now,
            },
        )
        batch.commit()

        current_app.logger.info(f"Group {group_ref.id} created by {owner_id}")
        group_data["id"] = group_ref.id
        return group_data

    @staticmethod
    def _generate_unique_code(db: Client) -> str:
        """Generate a join code, retrying a bounded number of times on collision.

        Uniqueness is best-effort: nothing at the storage layer stops two
        groups sharing a code.
        """
        groups_ref = db.collection(GROUPS_COLLECTION)
        code = generate_group_code()
        for _ in range(GROUP_CODE_MAX_ATTEMPTS):
            clash = list(
                groups_ref.where(filter=firestore.FieldFilter("code", "==", code))
                .limit(1)
                .stream()
            )
            if not clash:
                break
            code = generate_group_code()
        return code

    @staticmethod
    def get_group(db: Client, group_id: str) -> Group | None:
        """Fetch a group by id."""
        snapshot = db.collection(GROUPS_COLLECTION).document(group_id).get()
        return snapshot_to_dict(snapshot)

    @staticmethod
    def get_group_or_404(db: Client, group_id: str) -> Group:
        """Fetch a group by id, raising NotFoundError if absent."""
        group = GroupService.get_group(db, group_id)
        if group is None:
            raise NotFoundError("Group not found")
        return group

    @staticmethod
    def enrich_groups(db: Client, groups: list[Group]) -> list[Group]:
        """Attach owner display fields to each group."""
        owners = UserService.get_public_profiles(
            db, (group.get("ownerId") for group in groups)
        )
        for group in groups:
            owner_id = group.get("ownerId")
            group["owner"] = owners.get(owner_id) or {
                "id": owner_id,
                "firstName": None,
                "lastName": None,
            }
        return groups

    @staticmethod
    def search_groups(db: Client, term: str) -> list[Group]:
        """Case-insensitive substring search over group names, any visibility."""
        needle = term.strip().lower()
        groups = [
            data
            for data in (
                snapshot_to_dict(doc)
                for doc in db.collection(GROUPS_COLLECTION).stream()
            )
            if data is not None and needle in (data.get("name") or "").lower()
        ]
        groups.sort(key=lambda g: sort_timestamp(g.get("createdAt")), reverse=True)
        return GroupService.enrich_groups(db, groups)

    @staticmethod
    def get_public_groups(db: Client) -> list[Group]:
        """Return all public groups, newest first."""
        query = db.collection(GROUPS_COLLECTION).where(
            filter=firestore.FieldFilter("isPublic", "==", True)
        )
        groups = [snapshot_to_dict(doc) for doc in query.stream()]
        groups.sort(key=lambda g: sort_timestamp(g.get("createdAt")), reverse=True)
        return GroupService.enrich_groups(db, groups)

    @staticmethod
    def get_user_groups(db: Client, user_id: str) -> list[Group]:
        """Return the groups a user belongs to, most recently joined first."""
        query = db.collection(GROUP_MEMBERS_COLLECTION).where(
            filter=firestore.FieldFilter("userId", "==", user_id)
        )
        memberships = [doc.to_dict() for doc in query.stream()]
        memberships.sort(key=lambda m: sort_timestamp(m.get("joinedAt")), reverse=True)
        if not memberships:
            return []

        refs = [
            db.collection(GROUPS_COLLECTION).document(m["groupId"]) for m in memberships
        ]
        found = {doc.id: snapshot_to_dict(doc) for doc in db.get_all(refs) if doc.exists}
        groups = [found[m["groupId"]] for m in memberships if m["groupId"] in found]
        return GroupService.enrich_groups(db, groups)

    @staticmethod
    def join_group(
        db: Client, group_id: str, user_id: str, code: str | None = None
    ) -> Membership:
        """Join a group, validating the join code if the group is private."""
        group = GroupService.get_group_or_404(db, group_id)

        member_ref = db.collection(GROUP_MEMBERS_COLLECTION).document(
            membership_id(group_id, user_id)
        )
        if member_ref.get().exists:
            raise DuplicateResourceError("User is already a member of this group")

        if not group.get("isPublic"):
            if not code or not code.strip():
                raise ValidationError("Code is required to join this group")
            if normalize_code(code) != group.get("code"):
                raise ValidationError("Invalid group code")

        membership = {
            "groupId": group_id,
            "userId": user_id,
            "role": ROLE_MEMBER,
            "joinedAt": utcnow(),
        }
        member_ref.set(membership)
        current_app.logger.info(f"User {user_id} joined group {group_id}")
        membership["id"] = member_ref.id
        return membership

    @staticmethod
    def leave_group(db: Client, group_id: str, user_id: str) -> None:
        """Leave a group. The owner must delete the group instead."""
        member_ref = db.collection(GROUP_MEMBERS_COLLECTION).document(
            membership_id(group_id, user_id)
        )
        if not member_ref.get().exists:
            raise NotFoundError("User is not a member of this group")

        if roles.is_owner(db, group_id, user_id):
            raise ValidationError(
                "Group owner cannot leave the group. Delete the group instead."
            )

        member_ref.delete()
        current_app.logger.info(f"User {user_id} left group {group_id}")

    @staticmethod
    def delete_group(db: Client, group_id: str, user_id: str) -> None:
        """Delete a group with its memberships and prayer requests (owner only)."""
        group_ref = db.collection(GROUPS_COLLECTION).document(group_id)
        if not group_ref.get().exists:
            raise NotFoundError("Group not found")
        if not roles.is_owner(db, group_id, user_id):
            raise PermissionDeniedError("Only the group owner can delete the group")

        member_refs = [
            doc.reference
            for doc in db.collection(GROUP_MEMBERS_COLLECTION)
            .where(filter=firestore.FieldFilter("groupId", "==", group_id))
            .stream()
        ]
        delete_in_batches(db, member_refs)
        removed_requests = PrayerRequestService.delete_group_requests(db, group_id)
        group_ref.delete()

        current_app.logger.info(
            f"Group {group_id} deleted with {len(member_refs)} memberships "
            f"and {removed_requests} prayer requests"
        )

    @staticmethod
    def get_group_members(db: Client, group_id: str) -> list[Membership]:
        """Return a group's members, admins first and then by join order."""
        query = db.collection(GROUP_MEMBERS_COLLECTION).where(
            filter=firestore.FieldFilter("groupId", "==", group_id)
        )
        members = [snapshot_to_dict(doc) for doc in query.stream()]
        members.sort(
            key=lambda m: (m.get("role") != ROLE_ADMIN, sort_timestamp(m.get("joinedAt")))
        )

        profiles = UserService.get_public_profiles(db, (m.get("userId") for m in members))
        for member in members:
            member["user"] = profiles.get(
                member.get("userId"),
                {"id": member.get("userId"), "firstName": None, "lastName": None},
            )
        return members

    @staticmethod
    def make_admin(
        db: Client, group_id: str, target_user_id: str, acting_user_id: str
    ) -> Membership:
        """Promote a member to admin (owner only)."""
        GroupService.get_group_or_404(db, group_id)
        if not roles.is_owner(db, group_id, acting_user_id):
            raise PermissionDeniedError(
                "Only the group owner can make members admins"
            )

        member_ref = db.collection(GROUP_MEMBERS_COLLECTION).document(
            membership_id(group_id, target_user_id)
        )
        snapshot = member_ref.get()
        if not snapshot.exists:
            raise NotFoundError("User is not a member of this group")

        member_ref.update({"role": ROLE_ADMIN})
        current_app.logger.info(
            f"User {target_user_id} promoted to admin in group {group_id}"
        )
        return snapshot_to_dict(member_ref.get())

    @staticmethod
    def remove_member(
        db: Client, group_id: str, target_user_id: str, acting_user_id: str
    ) -> None:
        """Remove a member from a group (owner or admin only)."""
        GroupService.get_group_or_404(db, group_id)
        if not roles.is_owner_or_admin(db, group_id, acting_user_id):
            raise PermissionDeniedError(
                "Only group owners and admins can remove members"
            )
        if roles.is_owner(db, group_id, target_user_id):
            raise ValidationError("Cannot remove the group owner")

        member_ref = db.collection(GROUP_MEMBERS_COLLECTION).document(
            membership_id(group_id, target_user_id)
        )
        if not member_ref.get().exists:
            raise NotFoundError("User is not a member of this group")

        member_ref.delete()
        current_app.logger.info(
            f"User {target_user_id} removed from group {group_id} by {acting_user_id}"
        )

    @staticmethod
    def get_group_code(db: Client, group_id: str) -> str | None:
        """Return a group's join code. Access control is the caller's job."""
        group = GroupService.get_group(db, group_id)
        if group is None:
            return None
        return group.get("code")

    @staticmethod
    def update_display_name(
        db: Client, group_id: str, acting_user_id: str, display_name: str
    ) -> Group:
        """Set the group's display name override (owner or admin only)."""
        GroupService.get_group_or_404(db, group_id)
        if not roles.is_owner_or_admin(db, group_id, acting_user_id):
            raise PermissionDeniedError(
                "Only group owners and admins can update the display name"
            )

        group_ref = db.collection(GROUPS_COLLECTION).document(group_id)
        group_ref.update({"displayName": display_name.strip(), "updatedAt": utcnow()})
        return snapshot_to_dict(group_ref.get())

    @staticmethod
    def with_viewer_role(
        db: Client, group: Group, user_id: str | None
    ) -> dict[str, Any]:
        """Annotate a group with the caller's standing in it."""
        group["viewerRole"] = roles.viewer_role(db, group, user_id)
        return group
