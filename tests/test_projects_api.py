"""API tests for projects: membership gating, admin/creator rules, invites, overview."""

import unittest
from datetime import UTC, datetime, timedelta

from app.models import Membership, Message, Notification, NotificationType, Task
from tests.helpers import API, ApiTestCase


class ProjectTestCase(ApiTestCase):
    """Creator (ADMIN), a second admin, a plain member, and an outsider."""

    def setUp(self) -> None:
        super().setUp()
        self.creator = self.register("Creator", "creator@example.com")
        self.admin = self.register("Second Admin", "admin@example.com")
        self.member = self.register("Member", "member@example.com")
        self.outsider = self.register("Outsider", "outsider@example.com")
        self.project = self.create_project(self.creator)
        self.pid = self.project["id"]
        self.invite(self.creator, self.pid, "admin@example.com", role="ADMIN")
        self.invite(self.creator, self.pid, "member@example.com")


class TestCreateAndList(ProjectTestCase):
    def test_creator_is_admin_member(self) -> None:
        project = self.create_project(self.member, name="Solo")
        self.assertEqual(project["createdBy"], self.member["user"]["id"])
        self.assertEqual(len(project["memberships"]), 1)
        self.assertEqual(project["memberships"][0]["role"], "ADMIN")
        self.assertEqual(project["memberships"][0]["user"]["email"], "member@example.com")

    def test_list_only_own_projects_newest_first(self) -> None:
        self.create_project(self.member, name="Later")
        resp = self.client.get(f"{API}/projects", headers=self.bearer(self.member))
        self.assertEqual(resp.status_code, 200)
        names = [p["name"] for p in resp.json()["data"]]
        self.assertEqual(names, ["Later", "Apollo"])

        resp = self.client.get(f"{API}/projects", headers=self.bearer(self.outsider))
        self.assertEqual(resp.json()["data"], [])

    def test_get_includes_members_and_counts(self) -> None:
        self.client.post(
            f"{API}/projects/{self.pid}/messages",
            json={"content": "hello"},
            headers=self.bearer(self.member),
        )
        resp = self.client.get(f"{API}/projects/{self.pid}", headers=self.bearer(self.member))
        self.assertEqual(resp.status_code, 200)
        data = resp.json()["data"]
        self.assertEqual(len(data["memberships"]), 3)
        self.assertEqual(data["counts"], {"tasks": 0, "messages": 1})

    def test_blank_name_rejected(self) -> None:
        headers = self.bearer(self.creator)
        created = self.client.post(f"{API}/projects", json={"name": "   "}, headers=headers)
        self.assertEqual(created.status_code, 400)
        renamed = self.client.put(f"{API}/projects/{self.pid}", json={"name": " "}, headers=headers)
        self.assertEqual(renamed.status_code, 400)
        current = self.client.get(f"{API}/projects/{self.pid}", headers=headers)
        self.assertEqual(current.json()["data"]["name"], "Apollo")

    def test_requires_authentication(self) -> None:
        resp = self.client.get(f"{API}/projects")
        self.assertEqual(resp.status_code, 401)


class TestOutsiderIsForbidden(ProjectTestCase):
    """A non-member gets 403 from every project-scoped endpoint."""

    def test_every_project_endpoint(self) -> None:
        headers = self.bearer(self.outsider)
        calls = [
            ("GET", f"/projects/{self.pid}", None),
            ("PUT", f"/projects/{self.pid}", {"name": "Hijacked"}),
            ("POST", f"/projects/{self.pid}/invite", {"email": "outsider@example.com"}),
            ("DELETE", f"/projects/{self.pid}/members/{self.member['user']['id']}", None),
            ("GET", f"/projects/{self.pid}/overview", None),
            ("GET", f"/projects/{self.pid}/tasks", None),
            ("POST", f"/projects/{self.pid}/tasks", {"title": "Sneaky"}),
            ("GET", f"/projects/{self.pid}/messages", None),
            ("POST", f"/projects/{self.pid}/messages", {"content": "hi"}),
        ]
        for method, path, body in calls:
            with self.subTest(method=method, path=path):
                resp = self.client.request(method, f"{API}{path}", json=body, headers=headers)
                self.assertEqual(resp.status_code, 403, resp.text)
                self.assertFalse(resp.json()["success"])
                self.assertNotIn("data", resp.json())

    def test_missing_project_looks_the_same(self) -> None:
        real = self.client.get(f"{API}/projects/{self.pid}", headers=self.bearer(self.outsider))
        missing = self.client.get(f"{API}/projects/99999", headers=self.bearer(self.outsider))
        self.assertEqual(missing.status_code, 403)
        self.assertEqual(real.json(), missing.json())

    def test_outsider_cannot_reach_task_by_id(self) -> None:
        resp = self.client.post(
            f"{API}/projects/{self.pid}/tasks",
            json={"title": "Secret"},
            headers=self.bearer(self.member),
        )
        task_id = resp.json()["data"]["id"]
        headers = self.bearer(self.outsider)
        self.assertEqual(self.client.get(f"{API}/tasks/{task_id}", headers=headers).status_code, 403)
        self.assertEqual(
            self.client.put(
                f"{API}/tasks/{task_id}", json={"status": "DONE"}, headers=headers
            ).status_code,
            403,
        )
        self.assertEqual(
            self.client.delete(f"{API}/tasks/{task_id}", headers=headers).status_code, 403
        )


class TestAdminOnlyActions(ProjectTestCase):
    def test_member_cannot_rename_invite_or_remove(self) -> None:
        headers = self.bearer(self.member)
        rename = self.client.put(f"{API}/projects/{self.pid}", json={"name": "X"}, headers=headers)
        invite = self.client.post(
            f"{API}/projects/{self.pid}/invite",
            json={"email": "outsider@example.com"},
            headers=headers,
        )
        remove = self.client.delete(
            f"{API}/projects/{self.pid}/members/{self.admin['user']['id']}", headers=headers
        )
        self.assertEqual(rename.status_code, 403)
        self.assertEqual(invite.status_code, 403)
        self.assertEqual(remove.status_code, 403)

    def test_admin_can_rename(self) -> None:
        resp = self.client.put(
            f"{API}/projects/{self.pid}",
            json={"name": "Artemis"},
            headers=self.bearer(self.admin),
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["data"]["name"], "Artemis")
        self.assertEqual(resp.json()["data"]["description"], "Moonshot")

    def test_non_creator_admin_cannot_delete(self) -> None:
        resp = self.client.delete(f"{API}/projects/{self.pid}", headers=self.bearer(self.admin))
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(
            resp.json()["message"],
            "Access denied. Only the project creator can delete the project.",
        )

    def test_member_cannot_delete(self) -> None:
        resp = self.client.delete(f"{API}/projects/{self.pid}", headers=self.bearer(self.member))
        self.assertEqual(resp.status_code, 403)

    def test_creator_deletes_with_cascade(self) -> None:
        self.client.post(
            f"{API}/projects/{self.pid}/tasks",
            json={"title": "Build", "assigneeId": self.member["user"]["id"]},
            headers=self.bearer(self.creator),
        )
        self.client.post(
            f"{API}/projects/{self.pid}/messages",
            json={"content": "hi"},
            headers=self.bearer(self.creator),
        )
        resp = self.client.delete(f"{API}/projects/{self.pid}", headers=self.bearer(self.creator))
        self.assertEqual(resp.status_code, 200)

        with self.db() as db:
            self.assertEqual(db.query(Task).count(), 0)
            self.assertEqual(db.query(Message).count(), 0)
            self.assertEqual(db.query(Membership).count(), 0)
            # Notifications survive, detached from the deleted project.
            notes = db.query(Notification).all()
            self.assertTrue(notes)
            self.assertTrue(all(n.project_id is None for n in notes))

        again = self.client.delete(f"{API}/projects/{self.pid}", headers=self.bearer(self.creator))
        self.assertEqual(again.status_code, 404)


class TestMembers(ProjectTestCase):
    def test_invite_notifies_invitee(self) -> None:
        with self.db() as db:
            note = (
                db.query(Notification)
                .filter(
                    Notification.user_id == self.member["user"]["id"],
                    Notification.type == NotificationType.PROJECT_INVITED,
                )
                .one()
            )
            self.assertEqual(note.message, 'You have been invited to join the project "Apollo"')
            self.assertEqual(note.project_id, self.pid)

    def test_invite_existing_member_conflicts(self) -> None:
        resp = self.client.post(
            f"{API}/projects/{self.pid}/invite",
            json={"email": "member@example.com"},
            headers=self.bearer(self.creator),
        )
        self.assertEqual(resp.status_code, 409)

    def test_invite_unknown_email(self) -> None:
        resp = self.client.post(
            f"{API}/projects/{self.pid}/invite",
            json={"email": "ghost@example.com"},
            headers=self.bearer(self.creator),
        )
        self.assertEqual(resp.status_code, 404)

    def test_remove_member_notifies_and_revokes_access(self) -> None:
        member_id = self.member["user"]["id"]
        created = self.client.post(
            f"{API}/projects/{self.pid}/tasks",
            json={"title": "Handover", "assigneeId": member_id},
            headers=self.bearer(self.creator),
        )
        task_id = created.json()["data"]["id"]
        resp = self.client.delete(
            f"{API}/projects/{self.pid}/members/{member_id}", headers=self.bearer(self.admin)
        )
        self.assertEqual(resp.status_code, 200)

        gone = self.client.get(f"{API}/projects/{self.pid}", headers=self.bearer(self.member))
        self.assertEqual(gone.status_code, 403)
        with self.db() as db:
            note = (
                db.query(Notification)
                .filter(
                    Notification.user_id == member_id,
                    Notification.type == NotificationType.PROJECT_MEMBER_REMOVED,
                )
                .one()
            )
            self.assertIn("Apollo", note.message)

        # Their tasks in the project are left unassigned.
        task = self.client.get(f"{API}/tasks/{task_id}", headers=self.bearer(self.creator))
        self.assertIsNone(task.json()["data"]["assigneeId"])
        self.assertIsNone(task.json()["data"]["assignee"])

    def test_creator_cannot_be_removed(self) -> None:
        resp = self.client.delete(
            f"{API}/projects/{self.pid}/members/{self.creator['user']['id']}",
            headers=self.bearer(self.admin),
        )
        self.assertEqual(resp.status_code, 400)

    def test_remove_non_member(self) -> None:
        resp = self.client.delete(
            f"{API}/projects/{self.pid}/members/{self.outsider['user']['id']}",
            headers=self.bearer(self.creator),
        )
        self.assertEqual(resp.status_code, 404)


class TestOverview(ProjectTestCase):
    def test_overview_figures(self) -> None:
        headers = self.bearer(self.creator)
        member_id = self.member["user"]["id"]
        past = (datetime.now(UTC) - timedelta(days=2)).isoformat()
        future = (datetime.now(UTC) + timedelta(days=2)).isoformat()
        specs = [
            {"title": "Overdue", "assigneeId": member_id, "dueDate": past},
            {"title": "Upcoming", "assigneeId": member_id, "dueDate": future},
            {"title": "Unassigned"},
            {"title": "Finished", "assigneeId": self.creator["user"]["id"], "dueDate": past},
        ]
        ids = []
        for body in specs:
            resp = self.client.post(f"{API}/projects/{self.pid}/tasks", json=body, headers=headers)
            self.assertEqual(resp.status_code, 201, resp.text)
            ids.append(resp.json()["data"]["id"])
        self.client.put(f"{API}/tasks/{ids[3]}", json={"status": "DONE"}, headers=headers)

        resp = self.client.get(f"{API}/projects/{self.pid}/overview", headers=headers)
        self.assertEqual(resp.status_code, 200)
        data = resp.json()["data"]
        self.assertEqual(data["totalTasks"], 4)
        self.assertEqual(data["completedTasks"], 1)
        self.assertEqual(data["overdueTasks"], 1)
        self.assertEqual(data["completionPercentage"], 25)
        workload = {w["userName"]: w["taskCount"] for w in data["workloadDistribution"]}
        self.assertEqual(workload, {"Member": 2, "Creator": 1})

    def test_empty_project(self) -> None:
        resp = self.client.get(
            f"{API}/projects/{self.pid}/overview", headers=self.bearer(self.member)
        )
        self.assertEqual(resp.json()["data"]["completionPercentage"], 0)


if __name__ == "__main__":
    unittest.main()
