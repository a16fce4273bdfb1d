"""Service layer for group announcements."""

from __future__ import annotations

from typing import TYPE_CHECKING

from firebase_admin import firestore

from prayerlist.core.constants import GROUP_MESSAGES_COLLECTION
from prayerlist.errors import NotFoundError, PermissionDeniedError
from prayerlist.user.services import UserService
from prayerlist.utils import snapshot_to_dict, sort_timestamp, utcnow

from . import roles
from .group_service import GroupService

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client

    from prayerlist.group.models import GroupMessage


def _newest_first(messages: list[GroupMessage]) -> list[GroupMessage]:
    return sorted(
        messages, key=lambda m: sort_timestamp(m.get("createdAt")), reverse=True
    )


class GroupMessageService:
    """Service class for owner/admin-authored group messages."""

    @staticmethod
    def create_message(
        db: Client, group_id: str, user_id: str, message: str, is_pinned: bool = False
    ) -> GroupMessage:
        """Post a message to a group (owner or admin only)."""
        GroupService.get_group_or_404(db, group_id)
        if not roles.is_owner_or_admin(db, group_id, user_id):
            raise PermissionDeniedError(
                "Only group owners and admins can create messages"
            )

        now = utcnow()
        message_ref = db.collection(GROUP_MESSAGES_COLLECTION).document()
        message_data = {
            "groupId": group_id,
            "userId": user_id,
            "message": message.strip(),
            "isPinned": is_pinned,
            "createdAt": now,
            "updatedAt": now,
        }
        message_ref.set(message_data)
        message_data["id"] = message_ref.id
        return GroupMessageService.enrich_messages(db, [message_data])[0]

    @staticmethod
    def get_message(db: Client, message_id: str) -> GroupMessage | None:
        """Fetch a message by id."""
        snapshot = db.collection(GROUP_MESSAGES_COLLECTION).document(message_id).get()
        return snapshot_to_dict(snapshot)

    @staticmethod
    def _get_editable_message(
        db: Client, message_id: str, user_id: str, action: str
    ) -> GroupMessage:
        message = GroupMessageService.get_message(db, message_id)
        if message is None:
            raise NotFoundError("Message not found")
        if not roles.is_owner_or_admin(db, message["groupId"], user_id):
            raise PermissionDeniedError(
                f"Only group owners and admins can {action} messages"
            )
        return message

    @staticmethod
    def update_message(
        db: Client, message_id: str, user_id: str, message: str
    ) -> GroupMessage:
        """Edit a message's text (owner or admin of its group only)."""
        GroupMessageService._get_editable_message(db, message_id, user_id, "update")

        message_ref = db.collection(GROUP_MESSAGES_COLLECTION).document(message_id)
        message_ref.update({"message": message.strip(), "updatedAt": utcnow()})
        updated = snapshot_to_dict(message_ref.get())
        return GroupMessageService.enrich_messages(db, [updated])[0]

    @staticmethod
    def delete_message(db: Client, message_id: str, user_id: str) -> None:
        """Delete a message (owner or admin of its group only)."""
        GroupMessageService._get_editable_message(db, message_id, user_id, "delete")
        db.collection(GROUP_MESSAGES_COLLECTION).document(message_id).delete()

    @staticmethod
    def _group_messages(db: Client, group_id: str) -> list[GroupMessage]:
        query = db.collection(GROUP_MESSAGES_COLLECTION).where(
            filter=firestore.FieldFilter("groupId", "==", group_id)
        )
        return [snapshot_to_dict(doc) for doc in query.stream()]

    @staticmethod
    def get_top_message(db: Client, group_id: str) -> GroupMessage | None:
        """Return the newest pinned message, else the newest message, else None."""
        messages = _newest_first(GroupMessageService._group_messages(db, group_id))
        if not messages:
            return None

        top = next((m for m in messages if m.get("isPinned")), messages[0])
        return GroupMessageService.enrich_messages(db, [top])[0]

    @staticmethod
    def get_all_messages(db: Client, group_id: str) -> list[GroupMessage]:
        """Return pinned messages first, each block ordered newest first."""
        messages = _newest_first(GroupMessageService._group_messages(db, group_id))
        pinned = [m for m in messages if m.get("isPinned")]
        unpinned = [m for m in messages if not m.get("isPinned")]
        return GroupMessageService.enrich_messages(db, pinned + unpinned)

    @staticmethod
    def enrich_messages(
        db: Client, messages: list[GroupMessage]
    ) -> list[GroupMessage]:
        """Attach the author's display fields to each message."""
        profiles = UserService.get_public_profiles(
            db, (m.get("userId") for m in messages)
        )
        for message in messages:
            message["user"] = profiles.get(
                message.get("userId"),
                {"id": message.get("userId"), "firstName": None, "lastName": None},
            )
        return messages
