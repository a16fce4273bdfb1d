"""The commitment ledger: who has committed to pray for which request."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from firebase_admin import firestore
from flask import current_app

from prayerlist.core.constants import (
    GROUPS_COLLECTION,
    PRAYER_COMMITMENTS_COLLECTION,
    PRAYER_REQUESTS_COLLECTION,
)
from prayerlist.errors import NotFoundError
from prayerlist.utils import snapshot_to_dict, sort_timestamp, utcnow

from .services import PrayerRequestService

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client

    from .models import PrayerRequest


def commitment_id(request_id: str, user_id: str) -> str:
    """Return the deterministic document id for a commitment."""
    return f"{request_id}_{user_id}"


class CommitmentLedger:
    """Service class for prayer commitments and their counters."""

    @staticmethod
    def toggle(db: Client, request_id: str, user_id: str) -> dict[str, Any]:
        """Flip the user's commitment and move `prayerCount` with it.

        The read of both documents and both writes happen in one
        transaction, so concurrent toggles from different users cannot
        lose an update.
        """
        request_ref = db.collection(PRAYER_REQUESTS_COLLECTION).document(request_id)
        commitment_ref = db.collection(PRAYER_COMMITMENTS_COLLECTION).document(
            commitment_id(request_id, user_id)
        )

        @firestore.transactional
        def toggle_in_transaction(transaction: Any) -> dict[str, Any]:
            request_snapshot = request_ref.get(transaction=transaction)
            if not request_snapshot.exists:
                raise NotFoundError("Prayer request not found")
            commitment_snapshot = commitment_ref.get(transaction=transaction)

            current = (request_snapshot.to_dict() or {}).get("prayerCount") or 0
            if commitment_snapshot.exists:
                transaction.delete(commitment_ref)
                count = max(current - 1, 0)
                committed = False
            else:
                transaction.set(
                    commitment_ref,
                    {
                        "prayerRequestId": request_id,
                        "userId": user_id,
                        "createdAt": utcnow(),
                    },
                )
                count = current + 1
                committed = True

            transaction.update(request_ref, {"prayerCount": count})
            return {"committed": committed, "prayerCount": count}

        result = toggle_in_transaction(db.transaction())
        current_app.logger.info(
            f"User {user_id} {'committed to' if result['committed'] else 'withdrew from'}"
            f" prayer request {request_id}"
        )
        return result

    @staticmethod
    def has_committed(db: Client, request_id: str, user_id: str) -> bool:
        """Return True if the user currently holds a commitment for the request."""
        snapshot = (
            db.collection(PRAYER_COMMITMENTS_COLLECTION)
            .document(commitment_id(request_id, user_id))
            .get()
        )
        return snapshot.exists

    @staticmethod
    def get_prayer_list(db: Client, user_id: str) -> list[PrayerRequest]:
        """Return the requests a user has committed to, newest commitment first.

        Commitments whose request has since been deleted are skipped.
        """
        query = db.collection(PRAYER_COMMITMENTS_COLLECTION).where(
            filter=firestore.FieldFilter("userId", "==", user_id)
        )
        commitments = [doc.to_dict() for doc in query.stream()]
        commitments.sort(
            key=lambda c: sort_timestamp(c.get("createdAt")), reverse=True
        )
        if not commitments:
            return []

        refs = [
            db.collection(PRAYER_REQUESTS_COLLECTION).document(c["prayerRequestId"])
            for c in commitments
        ]
        found = {doc.id: snapshot_to_dict(doc) for doc in db.get_all(refs) if doc.exists}
        prayer_requests = [
            found[c["prayerRequestId"]]
            for c in commitments
            if c["prayerRequestId"] in found
        ]

        group_ids = {r["groupId"] for r in prayer_requests if r.get("groupId")}
        group_names = {}
        if group_ids:
            group_refs = [
                db.collection(GROUPS_COLLECTION).document(gid) for gid in group_ids
            ]
            for doc in db.get_all(group_refs):
                if doc.exists:
                    data = doc.to_dict() or {}
                    group_names[doc.id] = data.get("displayName") or data.get("name")
        for prayer_request in prayer_requests:
            prayer_request["groupName"] = group_names.get(prayer_request.get("groupId"))

        return PrayerRequestService.present(db, prayer_requests)
