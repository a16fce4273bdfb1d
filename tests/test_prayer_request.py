"""Tests for the prayer request blueprint."""

from tests.helpers import BaseTestCase


class PrayerRequestRoutesTestCase(BaseTestCase):
    """Test case for the prayer request blueprint."""

    def setUp(self):
        super().setUp()
        self.create_user("alice", "Alice", "A")
        self.create_user("bob", "Bob", "B")

    def _create(self, uid="alice", **body):
        payload = {"text": "Please pray for my exams"}
        payload.update(body)
        return self.client.post(
            "/prayer-request/create", json=payload, headers=self.auth_headers(uid)
        )

    def test_create_public_request(self):
        response = self._create()
        self.assertEqual(response.status_code, 201)
        data = response.get_json()["data"]
        self.assertEqual(data["prayerCount"], 0)
        self.assertIsNone(data["groupId"])
        self.assertFalse(data["isGroupOnly"])
        self.assertEqual(data["user"]["firstName"], "Alice")

    def test_create_rejects_blank_text(self):
        response = self._create(text="   ")
        self.assertEqual(response.status_code, 400)

    def test_create_rejects_non_string_text(self):
        response = self._create(text=42)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["error"], "text: Must be a string.")

    def test_create_requires_provisioned_user(self):
        response = self._create(uid="newcomer")
        self.assertEqual(response.status_code, 401)

    def test_anonymous_request_hides_author_everywhere(self):
        request_id = self._create(isAnonymous=True).get_json()["data"]["id"]

        listed = self.client.get("/prayer-request/get-all").get_json()["data"]
        single = self.client.get(f"/prayer-request/get/{request_id}").get_json()["data"]

        for payload in (listed[0], single):
            self.assertNotIn("user", payload)
            self.assertEqual(payload["userId"], "alice")

    def test_group_request_requires_membership(self):
        self.create_group("g1", "alice")
        response = self._create(uid="bob", groupId="g1")
        self.assertEqual(response.status_code, 403)

    def test_group_request_missing_group(self):
        response = self._create(groupId="nope")
        self.assertEqual(response.status_code, 404)

    def test_group_request_defaults_and_feed(self):
        self.create_group("g1", "alice")
        self.add_member("g1", "bob")

        group_only = self._create(groupId="g1").get_json()["data"]
        shared = self._create(uid="bob", groupId="g1", isGroupOnly=False).get_json()["data"]
        self.assertTrue(group_only["isGroupOnly"])
        self.assertFalse(shared["isGroupOnly"])

        public = self.client.get("/prayer-request/get-all").get_json()["data"]
        self.assertEqual(public, [])

        feed = self.client.get(
            "/group/feed/g1", headers=self.auth_headers("bob")
        ).get_json()["data"]
        self.assertEqual({r["id"] for r in feed}, {group_only["id"], shared["id"]})

    def test_get_missing_request(self):
        response = self.client.get("/prayer-request/get/nope")
        self.assertEqual(response.status_code, 404)

    def test_delete_own_request_only(self):
        request_id = self._create().get_json()["data"]["id"]

        response = self.client.delete(
            f"/prayer-request/delete/{request_id}", headers=self.auth_headers("bob")
        )
        self.assertEqual(response.status_code, 404)
        self.assertEqual(
            response.get_json()["error"],
            "Prayer request not found or you do not have permission to delete it",
        )

        response = self.client.delete(
            f"/prayer-request/delete/{request_id}", headers=self.auth_headers("alice")
        )
        self.assertEqual(response.status_code, 200)

    def test_toggle_check_and_prayer_list(self):
        request_id = self._create().get_json()["data"]["id"]

        response = self.client.post(
            f"/prayer-request/toggle-commit/{request_id}", headers=self.auth_headers("bob")
        )
        self.assertEqual(response.status_code, 200)
        body = response.get_json()
        self.assertEqual(body["message"], "Prayer commitment added")
        self.assertEqual(body["data"], {"committed": True, "prayerCount": 1})

        check = self.client.get(
            f"/prayer-request/check-commit/{request_id}", headers=self.auth_headers("bob")
        ).get_json()
        self.assertEqual(check["data"], {"hasCommitted": True})

        prayer_list = self.client.get(
            "/prayer-request/my-prayer-list", headers=self.auth_headers("bob")
        ).get_json()["data"]
        self.assertEqual([r["id"] for r in prayer_list], [request_id])

        response = self.client.post(
            f"/prayer-request/toggle-commit/{request_id}", headers=self.auth_headers("bob")
        )
        self.assertEqual(response.get_json()["message"], "Prayer commitment removed")
        self.assertEqual(response.get_json()["data"]["prayerCount"], 0)

    def test_toggle_missing_request(self):
        response = self.client.post(
            "/prayer-request/toggle-commit/nope", headers=self.auth_headers("bob")
        )
        self.assertEqual(response.status_code, 404)


class FeedbackRoutesTestCase(BaseTestCase):
    def test_create_and_list_feedback(self):
        first = self.client.post("/feedback/create", json={"text": "Love it"})
        second = self.client.post("/feedback/create", json={"text": "Dark mode please"})
        self.assertEqual(first.status_code, 201)
        self.assertEqual(second.get_json()["message"], "Feedback created successfully")

        response = self.client.get("/feedback/get-all")
        self.assertEqual(response.status_code, 200)
        texts = [f["text"] for f in response.get_json()["data"]]
        self.assertEqual(sorted(texts), ["Dark mode please", "Love it"])

    def test_feedback_requires_text(self):
        response = self.client.post("/feedback/create", json={})
        self.assertEqual(response.status_code, 400)
