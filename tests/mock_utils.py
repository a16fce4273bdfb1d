"""Mock utilities for Firestore and Auth."""

import functools
import threading
import unittest.mock
from typing import Any, Callable, Optional

from mockfirestore import CollectionReference, MockFirestore, Query
from mockfirestore.document import DocumentReference

# Serialises every mocked transaction, standing in for Firestore's
# optimistic-concurrency retries.
_TRANSACTION_LOCK = threading.RLock()


class MockBatch:
    def __init__(self, db: Any) -> None:
        self.db = db
        self.writes: list[tuple[Any, Any]] = []
        self.commit = unittest.mock.MagicMock(side_effect=self._real_commit)

    def update(self, ref: Any, data: Any) -> None:
        self.writes.append((ref, ("UPDATE", data)))

    def set(self, ref: Any, data: Any, merge: bool = False) -> None:
        self.writes.append((ref, ("SET", data)))

    def delete(self, ref: Any) -> None:
        self.writes.append((ref, ("DELETE", None)))

    def _real_commit(self) -> None:
        writes, self.writes = self.writes, []
        for ref, (op, data) in writes:
            if op == "DELETE":
                if ref.get().exists:
                    ref.delete()
            elif op == "SET":
                ref.set(data)
            else:
                ref.update(data)


class MockTransaction:
    """Applies each write immediately; isolation comes from serial_transactional."""

    def __init__(self, **kwargs: Any) -> None:
        self.options = kwargs

    def set(self, ref: Any, data: Any, merge: bool = False) -> None:
        ref.set(data, merge=merge)

    def create(self, ref: Any, data: Any) -> None:
        ref.set(data)

    def update(self, ref: Any, data: Any) -> None:
        ref.update(data)

    def delete(self, ref: Any) -> None:
        ref.delete()


def serial_transactional(func: Callable[..., Any]) -> Callable[..., Any]:
    """Stand-in for firestore.transactional that runs callers one at a time."""

    @functools.wraps(func)
    def wrapper(transaction: Any, *args: Any, **kwargs: Any) -> Any:
        with _TRANSACTION_LOCK:
            return func(transaction, *args, **kwargs)

    return wrapper


def unpack_field_filter(field_filter: Any) -> tuple[str, str, Any]:
    """Return (field, op, value) for a FieldFilter, mapping null checks to ==/!=.

    FieldFilter turns `== None` into a unary IS_NULL operator, which
    mockfirestore has no comparator for.
    """
    op = field_filter.op_string
    op_name = getattr(op, "name", op)
    if op_name == "IS_NULL":
        return field_filter.field_path, "==", None
    if op_name == "IS_NOT_NULL":
        return field_filter.field_path, "!=", None
    return field_filter.field_path, op, field_filter.value


class MockFirestoreBuilder:
    """Builder to modularize mockfirestore and firebase_admin patching."""

    @staticmethod
    def patch_db_read() -> None:
        """Apply monkeypatches to mockfirestore to support FieldFilter and equality."""

        def collection_where(
            self: Any,
            field_path: Optional[str] = None,
            op_string: Optional[str] = None,
            value: Any = None,
            filter: Any = None,
        ) -> Any:  # noqa: E501
            if filter:
                return self._where(*unpack_field_filter(filter))
            return self._where(field_path, op_string, value)

        if not hasattr(CollectionReference, "_where"):
            CollectionReference._where = CollectionReference.where
            CollectionReference.where = collection_where

        def query_where(
            self: Any,
            field_path: Optional[str] = None,
            op_string: Optional[str] = None,
            value: Any = None,
            filter: Any = None,
        ) -> Any:
            if filter:
                return self._where(*unpack_field_filter(filter))
            return self._where(field_path, op_string, value)

        if not hasattr(Query, "_where"):
            Query._where = Query.where
            Query.where = query_where

        def doc_ref_eq(self: Any, other: Any) -> bool:
            if not isinstance(other, DocumentReference):
                return False
            return self._path == other._path

        if not hasattr(DocumentReference, "_orig_eq"):
            DocumentReference._orig_eq = DocumentReference.__eq__
            DocumentReference.__eq__ = doc_ref_eq

        # Defining __eq__ leaves __hash__ as None; get_all needs hashable refs.
        DocumentReference.__hash__ = lambda self: hash(tuple(self._path))

        # Patch DocumentReference.get to handle transaction argument
        if not hasattr(DocumentReference, "_orig_get"):
            DocumentReference._orig_get = DocumentReference.get

            def doc_ref_get(self: Any, transaction: Any = None) -> Any:
                """Handle transaction argument in get."""
                return self._orig_get()

            DocumentReference.get = doc_ref_get

        if not hasattr(MockFirestore, "get_all"):

            def get_all(
                self: Any, references: Any, field_paths: Any = None, transaction: Any = None
            ) -> Any:
                for ref in references:
                    yield ref.get()

            MockFirestore.get_all = get_all

    @staticmethod
    def build_db() -> MockFirestore:
        """Return a MockFirestore wired with batch and transaction doubles."""
        db = MockFirestore()
        db.batch = lambda: MockBatch(db)
        db.transaction = lambda **kwargs: MockTransaction(**kwargs)
        return db

    @staticmethod
    def patch_firebase(db: MockFirestore) -> dict[str, Any]:
        """Return patchers routing firebase_admin calls to the mocks."""
        return {
            "init_app": unittest.mock.patch("firebase_admin.initialize_app"),
            "firestore_client": unittest.mock.patch(
                "firebase_admin.firestore.client", return_value=db
            ),
            "transactional": unittest.mock.patch(
                "firebase_admin.firestore.transactional", new=serial_transactional
            ),
            "verify_id_token": unittest.mock.patch(
                "firebase_admin.auth.verify_id_token"
            ),
        }


def patch_mockfirestore() -> None:
    """Apply monkeypatches to mockfirestore to support FieldFilter and equality."""
    MockFirestoreBuilder.patch_db_read()
