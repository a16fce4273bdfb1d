"""Service layer for user records and identity resolution."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable

from firebase_admin import firestore

from prayerlist.core.constants import USERS_COLLECTION
from prayerlist.utils import snapshot_to_dict, utcnow

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client

    from prayerlist.core.types import PublicProfile

    from .models import User


class UserService:
    """Service class for user-related operations."""

    @staticmethod
    def get_user(db: Client, user_id: str) -> User | None:
        """Fetch a user by id, or None if they have not been provisioned."""
        user_doc = db.collection(USERS_COLLECTION).document(user_id).get()
        return snapshot_to_dict(user_doc)

    @staticmethod
    def get_or_create_user(
        db: Client,
        external_id: str,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> tuple[User, bool]:
        """Return the user for an external identity, creating it if absent.

        The document id is the external id, so the read and the conditional
        write run in one transaction and a second caller can never create a
        duplicate. Returns the record and whether it was created.
        """
        user_ref = db.collection(USERS_COLLECTION).document(external_id)

        @firestore.transactional
        def create_if_absent(transaction: Any) -> tuple[dict[str, Any], bool]:
            snapshot = user_ref.get(transaction=transaction)
            if snapshot.exists:
                return snapshot.to_dict() or {}, False

            now = utcnow()
            user_data = {
                "externalId": external_id,
                "firstName": first_name,
                "lastName": last_name,
                "createdAt": now,
                "updatedAt": now,
            }
            transaction.set(user_ref, user_data)
            return user_data, True

        user_data, created = create_if_absent(db.transaction())
        user_data = dict(user_data)
        user_data["id"] = external_id
        return user_data, created

    @staticmethod
    def update_user(
        db: Client, user_id: str, update_data: dict[str, Any]
    ) -> User | None:
        """Update a user's name fields, returning None if the user is absent."""
        user_ref = db.collection(USERS_COLLECTION).document(user_id)
        if not user_ref.get().exists:
            return None
        if update_data:
            user_ref.update({**update_data, "updatedAt": utcnow()})
        return snapshot_to_dict(user_ref.get())

    @staticmethod
    def get_public_profiles(
        db: Client, user_ids: Iterable[str | None]
    ) -> dict[str, PublicProfile]:
        """Batch-fetch the display fields for a set of user ids."""
        unique_ids = {uid for uid in user_ids if uid}
        if not unique_ids:
            return {}

        refs = [db.collection(USERS_COLLECTION).document(uid) for uid in unique_ids]
        profiles = {}
        for doc in db.get_all(refs):
            if not doc.exists:
                continue
            data = doc.to_dict() or {}
            profiles[doc.id] = {
                "id": doc.id,
                "firstName": data.get("firstName"),
                "lastName": data.get("lastName"),
            }
        return profiles
