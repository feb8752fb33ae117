"""API and service tests for notifications: listing, read state, write failures."""

import unittest
from unittest.mock import MagicMock

from app.models import Notification, NotificationType
from app.services.notifications import message_preview, notify_many
from tests.helpers import API, ApiTestCase


class NotificationTestCase(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.owner = self.register("Owner", "owner@example.com")
        self.member = self.register("Member", "member@example.com")
        self.pid = self.create_project(self.owner)["id"]
        # One PROJECT_INVITED notification for the member.
        self.invite(self.owner, self.pid, "member@example.com")
        # Three MESSAGE_POSTED notifications for the member.
        for i in range(3):
            self.client.post(
                f"{API}/projects/{self.pid}/messages",
                json={"content": f"update {i}"},
                headers=self.bearer(self.owner),
            )

    def unread(self, auth: dict) -> int:
        resp = self.client.get(f"{API}/notifications/unread-count", headers=self.bearer(auth))
        self.assertEqual(resp.status_code, 200)
        return resp.json()["data"]["count"]


class TestList(NotificationTestCase):
    def test_pagination(self) -> None:
        resp = self.client.get(
            f"{API}/notifications", params={"page": 2, "limit": 3}, headers=self.bearer(self.member)
        )
        self.assertEqual(resp.status_code, 200)
        page = resp.json()["data"]
        self.assertEqual(len(page["data"]), 1)
        self.assertEqual(
            page["pagination"], {"page": 2, "limit": 3, "total": 4, "totalPages": 2}
        )

    def test_newest_first_with_project(self) -> None:
        resp = self.client.get(f"{API}/notifications", headers=self.bearer(self.member))
        items = resp.json()["data"]["data"]
        self.assertEqual(items[0]["message"], 'New message in project: "update 2"')
        self.assertEqual(items[-1]["type"], "PROJECT_INVITED")
        self.assertEqual(items[0]["project"]["name"], "Apollo")
        self.assertFalse(items[0]["isRead"])

    def test_only_own_notifications(self) -> None:
        resp = self.client.get(f"{API}/notifications", headers=self.bearer(self.owner))
        self.assertEqual(resp.json()["data"]["pagination"]["total"], 0)

    def test_limit_bounds(self) -> None:
        headers = self.bearer(self.member)
        self.assertEqual(
            self.client.get(f"{API}/notifications", params={"limit": 101}, headers=headers).status_code,
            400,
        )
        self.assertEqual(
            self.client.get(f"{API}/notifications", params={"page": 0}, headers=headers).status_code,
            400,
        )


class TestReadState(NotificationTestCase):
    def first_id(self) -> int:
        resp = self.client.get(f"{API}/notifications", headers=self.bearer(self.member))
        return resp.json()["data"]["data"][0]["id"]

    def test_mark_read_is_idempotent(self) -> None:
        self.assertEqual(self.unread(self.member), 4)
        nid = self.first_id()
        for _ in range(2):
            resp = self.client.put(
                f"{API}/notifications/{nid}/read", headers=self.bearer(self.member)
            )
            self.assertEqual(resp.status_code, 200)
            self.assertEqual(self.unread(self.member), 3)

    def test_cannot_mark_someone_elses(self) -> None:
        nid = self.first_id()
        resp = self.client.put(f"{API}/notifications/{nid}/read", headers=self.bearer(self.owner))
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(self.unread(self.member), 4)

    def test_mark_all_read(self) -> None:
        resp = self.client.put(f"{API}/notifications/mark-all-read", headers=self.bearer(self.member))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self.unread(self.member), 0)


class TestNotifyMany(unittest.TestCase):
    def test_commit_failure_is_rolled_back_and_swallowed(self) -> None:
        session = MagicMock()
        session.commit.side_effect = RuntimeError("database is locked")
        with self.assertLogs("app.services.notifications", level="ERROR"):
            written = notify_many(session, [1, 2], NotificationType.MESSAGE_POSTED, "hi", 7)
        self.assertEqual(written, 0)
        session.rollback.assert_called_once()

    def test_no_recipients_touches_nothing(self) -> None:
        session = MagicMock()
        self.assertEqual(notify_many(session, [], NotificationType.MESSAGE_POSTED, "hi"), 0)
        session.add_all.assert_not_called()
        session.commit.assert_not_called()

    def test_writes_one_row_per_recipient(self) -> None:
        session = MagicMock()
        written = notify_many(session, [3, 4, 5], NotificationType.TASK_ASSIGNED, "go", 1)
        self.assertEqual(written, 3)
        rows = session.add_all.call_args.args[0]
        self.assertTrue(all(isinstance(r, Notification) for r in rows))
        self.assertEqual([r.user_id for r in rows], [3, 4, 5])


class TestMessagePreview(unittest.TestCase):
    def test_boundary(self) -> None:
        self.assertEqual(message_preview("a" * 50), "a" * 50)
        self.assertEqual(message_preview("a" * 51), "a" * 50 + "...")


if __name__ == "__main__":
    unittest.main()
