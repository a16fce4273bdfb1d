"""Utility functions for the application."""

from __future__ import annotations

import datetime
from typing import Any

from flask import jsonify

from .core.constants import FIRESTORE_BATCH_LIMIT
from .core.types import APIResponse

EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)


def utcnow() -> datetime.datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.datetime.now(datetime.timezone.utc)


def sort_timestamp(value: Any) -> datetime.datetime:
    """Return a stored timestamp usable as a sort key."""
    if isinstance(value, datetime.datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=datetime.timezone.utc)
        return value
    return EPOCH


def api_response(message: str, data: Any = None, status_code: int = 200) -> Any:
    """Build the standard `{message, data}` JSON envelope."""
    body: APIResponse = {"message": message, "data": data}
    return jsonify(body), status_code


def api_error(message: str, status_code: int, data: Any = None) -> Any:
    """Build the JSON envelope for a failed request."""
    body: APIResponse = {"message": message, "data": data, "error": message}
    return jsonify(body), status_code


def snapshot_to_dict(snapshot: Any) -> dict[str, Any] | None:
    """Convert a document snapshot to a dict carrying its id."""
    if not snapshot.exists:
        return None
    data = snapshot.to_dict() or {}
    data["id"] = snapshot.id
    return data


def delete_in_batches(db: Any, refs: list[Any]) -> int:
    """Delete document references in write batches below Firestore's cap."""
    deleted = 0
    for start in range(0, len(refs), FIRESTORE_BATCH_LIMIT):
        batch = db.batch()
        for ref in refs[start : start + FIRESTORE_BATCH_LIMIT]:
            batch.delete(ref)
        batch.commit()
        deleted += len(refs[start : start + FIRESTORE_BATCH_LIMIT])
    return deleted
