"""Shared base test case for API and service tests."""

from __future__ import annotations

import datetime
import unittest
from typing import Any

from prayerlist import create_app
from tests.mock_utils import MockFirestoreBuilder, patch_mockfirestore

TOKEN_PREFIX = "token-"  # nosec


def ts(minutes: int) -> datetime.datetime:
    """Return a fixed aware timestamp `minutes` after a base instant."""
    base = datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc)
    return base + datetime.timedelta(minutes=minutes)


class BaseTestCase(unittest.TestCase):
    """Boots the app against an in-memory Firestore and a fake identity provider.

    A bearer token of the form ``token-<uid>`` verifies as ``<uid>``; anything
    else is rejected the way firebase_admin rejects a bad token.
    """

    def setUp(self) -> None:
        patch_mockfirestore()
        self.db = MockFirestoreBuilder.build_db()

        patchers = MockFirestoreBuilder.patch_firebase(self.db)
        self.mocks = {name: p.start() for name, p in patchers.items()}
        for p in patchers.values():
            self.addCleanup(p.stop)
        self.mocks["verify_id_token"].side_effect = self._verify_id_token

        self.app = create_app({"TESTING": True, "SERVER_NAME": "localhost"})
        self.client = self.app.test_client()
        self.app_context = self.app.app_context()
        self.app_context.push()

    def tearDown(self) -> None:
        self.app_context.pop()

    @staticmethod
    def _verify_id_token(token: str, *args: Any, **kwargs: Any) -> dict[str, Any]:
        if not token.startswith(TOKEN_PREFIX):
            raise ValueError("Invalid token")
        return {"uid": token[len(TOKEN_PREFIX) :]}

    def auth_headers(self, uid: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {TOKEN_PREFIX}{uid}"}

    def create_user(
        self, uid: str, first_name: str = "Test", last_name: str = "User"
    ) -> None:
        """Store a provisioned user record."""
        self.db.collection("users").document(uid).set(
            {
                "externalId": uid,
                "firstName": first_name,
                "lastName": last_name,
                "createdAt": ts(0),
                "updatedAt": ts(0),
            }
        )

    def create_group(
        self,
        group_id: str,
        owner_id: str,
        name: str | None = None,
        is_public: bool = True,
        code: str = "ABC123",
        created_at: datetime.datetime | None = None,
    ) -> None:
        """Store a group and its owner's admin membership directly."""
        self.db.collection("groups").document(group_id).set(
            {
                "name": name or f"Group {group_id}",
                "description": "A test group",
                "code": code,
                "isPublic": is_public,
                "ownerId": owner_id,
                "displayName": None,
                "imageUrl": None,
                "createdAt": created_at or ts(0),
                "updatedAt": created_at or ts(0),
            }
        )
        self.add_member(group_id, owner_id, role="admin")

    def add_member(
        self,
        group_id: str,
        user_id: str,
        role: str = "member",
        joined_at: datetime.datetime | None = None,
    ) -> None:
        self.db.collection("group_members").document(f"{group_id}_{user_id}").set(
            {
                "groupId": group_id,
                "userId": user_id,
                "role": role,
                "joinedAt": joined_at or ts(0),
            }
        )
