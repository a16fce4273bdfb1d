"""Service layer for prayer requests."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from firebase_admin import firestore
from flask import current_app

from prayerlist.core.constants import (
    PRAYER_COMMITMENTS_COLLECTION,
    PRAYER_REQUESTS_COLLECTION,
    STATUS_ACTIVE,
)
from prayerlist.user.services import UserService
from prayerlist.utils import delete_in_batches, snapshot_to_dict, sort_timestamp, utcnow

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client

    from .models import PrayerRequest


def _newest_first(prayer_requests: list[PrayerRequest]) -> list[PrayerRequest]:
    return sorted(
        prayer_requests,
        key=lambda r: sort_timestamp(r.get("createdAt")),
        reverse=True,
    )


class PrayerRequestService:
    """Service class for prayer request operations."""

    @staticmethod
    def create_prayer_request(
        db: Client,
        text: str,
        user_id: str,
        is_anonymous: bool = False,
        group_id: str | None = None,
        is_group_only: bool | None = None,
    ) -> PrayerRequest:
        """Store a new prayer request with a zeroed counter.

        `is_group_only` defaults to True for group requests and is always
        False for public ones. Group existence and membership are checked
        by the caller.
        """
        if group_id is None:
            is_group_only = False
        elif is_group_only is None:
            is_group_only = True

        now = utcnow()
        request_ref = db.collection(PRAYER_REQUESTS_COLLECTION).document()
        request_data = {
            "text": text.strip(),
            "userId": user_id,
            "isAnonymous": bool(is_anonymous),
            "prayerCount": 0,
            "groupId": group_id,
            "isGroupOnly": bool(is_group_only),
            "reportCount": 0,
            "status": STATUS_ACTIVE,
            "reviewedBy": None,
            "reviewedAt": None,
            "createdAt": now,
            "updatedAt": now,
        }
        request_ref.set(request_data)
        request_data["id"] = request_ref.id
        return request_data

    @staticmethod
    def get_public_prayer_requests(db: Client) -> list[PrayerRequest]:
        """Return requests not attached to any group, newest first."""
        query = db.collection(PRAYER_REQUESTS_COLLECTION).where(
            filter=firestore.FieldFilter("groupId", "==", None)
        )
        return _newest_first([snapshot_to_dict(doc) for doc in query.stream()])

    @staticmethod
    def get_group_prayer_requests(db: Client, group_id: str) -> list[PrayerRequest]:
        """Return a group's requests, newest first."""
        query = db.collection(PRAYER_REQUESTS_COLLECTION).where(
            filter=firestore.FieldFilter("groupId", "==", group_id)
        )
        return _newest_first([snapshot_to_dict(doc) for doc in query.stream()])

    @staticmethod
    def get_prayer_request(db: Client, request_id: str) -> PrayerRequest | None:
        """Fetch a prayer request by id."""
        snapshot = db.collection(PRAYER_REQUESTS_COLLECTION).document(request_id).get()
        return snapshot_to_dict(snapshot)

    @staticmethod
    def _commitment_refs(db: Client, request_ids: list[str]) -> list[Any]:
        refs = []
        for request_id in request_ids:
            query = db.collection(PRAYER_COMMITMENTS_COLLECTION).where(
                filter=firestore.FieldFilter("prayerRequestId", "==", request_id)
            )
            refs.extend(doc.reference for doc in query.stream())
        return refs

    @staticmethod
    def delete_prayer_request(db: Client, request_id: str, user_id: str) -> bool:
        """Delete a request and its commitments if `user_id` is the author.

        Returns False when the request does not exist or belongs to someone
        else; callers report both cases the same way.
        """
        request_ref = db.collection(PRAYER_REQUESTS_COLLECTION).document(request_id)
        snapshot = request_ref.get()
        if not snapshot.exists:
            return False
        if (snapshot.to_dict() or {}).get("userId") != user_id:
            return False

        removed = delete_in_batches(
            db, PrayerRequestService._commitment_refs(db, [request_id])
        )
        request_ref.delete()
        current_app.logger.info(
            f"Prayer request {request_id} deleted with {removed} commitments"
        )
        return True

    @staticmethod
    def delete_group_requests(db: Client, group_id: str) -> int:
        """Delete every request in a group along with their commitments."""
        request_refs = [
            doc.reference
            for doc in db.collection(PRAYER_REQUESTS_COLLECTION)
            .where(filter=firestore.FieldFilter("groupId", "==", group_id))
            .stream()
        ]
        if not request_refs:
            return 0

        delete_in_batches(
            db,
            PrayerRequestService._commitment_refs(db, [ref.id for ref in request_refs]),
        )
        return delete_in_batches(db, request_refs)

    @staticmethod
    def sanitize(prayer_request: PrayerRequest) -> PrayerRequest:
        """Hide the author of an anonymous request.

        `userId` stays so clients can still tell whether the viewer wrote
        the request; only the display object goes.
        """
        sanitized = dict(prayer_request)
        if sanitized.get("isAnonymous"):
            sanitized.pop("user", None)
        return sanitized

    @staticmethod
    def present(db: Client, prayer_requests: list[PrayerRequest]) -> list[PrayerRequest]:
        """Attach author names to named requests and sanitize anonymous ones."""
        profiles = UserService.get_public_profiles(
            db,
            (r.get("userId") for r in prayer_requests if not r.get("isAnonymous")),
        )
        presented = []
        for prayer_request in prayer_requests:
            if not prayer_request.get("isAnonymous"):
                user_id = prayer_request.get("userId")
                prayer_request["user"] = profiles.get(
                    user_id, {"id": user_id, "firstName": None, "lastName": None}
                )
            presented.append(PrayerRequestService.sanitize(prayer_request))
        return presented
