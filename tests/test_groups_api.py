"""API tests for groups: creation, membership merge, lookups and available users."""

import unittest

from tests.api_support import ApiTestCase


class TestCreateGroup(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin = self.admin_headers("lead@example.com")

    def test_create_group_as_admin(self) -> None:
        resp = self.create_group(self.admin, "Platform", ["A@x.com", "b@x.com", "a@x.com"])
        self.assertEqual(resp.status_code, 201, resp.text)
        group = resp.json()
        self.assertEqual(group["name"], "Platform")
        self.assertEqual(group["created_by"], "lead@example.com")
        self.assertEqual(sorted(group["members"]), ["a@x.com", "b@x.com"])
        self.assertIn("id", group)

    def test_employee_cannot_create_group(self) -> None:
        employee = self.user_headers("ana@example.com")
        resp = self.create_group(employee, "Platform", [])
        self.assertEqual(resp.status_code, 403)

    def test_created_by_must_match_caller(self) -> None:
        resp = self.client.post(
            "/api/create/groups",
            json={"name": "Platform", "created_by": "other@example.com", "members": []},
            headers=self.admin,
        )
        self.assertEqual(resp.status_code, 403)

    def test_duplicate_name_conflicts(self) -> None:
        self.assertEqual(self.create_group(self.admin, "Platform", []).status_code, 201)
        self.assertEqual(self.create_group(self.admin, "Platform", []).status_code, 409)

    def test_member_of_another_group_conflicts(self) -> None:
        self.create_group(self.admin, "Platform", ["a@x.com"])
        resp = self.create_group(self.admin, "Data", ["b@x.com", "a@x.com"])
        self.assertEqual(resp.status_code, 409)
        self.assertIn("a@x.com", resp.json()["message"])

    def test_invalid_member_email_rejected(self) -> None:
        resp = self.create_group(self.admin, "Platform", ["not-an-email"])
        self.assertEqual(resp.status_code, 400)


class TestAddMembers(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin = self.admin_headers("lead@example.com")
        self.create_group(self.admin, "Platform", ["a@x.com", "b@x.com"])

    def _add(self, members: list[str], group: str = "Platform"):
        return self.client.put(
            "/api/groups/add-users",
            json={"groupName": group, "members": members},
            headers=self.admin,
        )

    def test_union_merge_without_duplicates(self) -> None:
        resp = self._add(["b@x.com", "c@x.com"])
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(sorted(resp.json()["members"]), ["a@x.com", "b@x.com", "c@x.com"])
        self.assertIsNotNone(resp.json()["updated_at"])

    def test_merge_is_idempotent(self) -> None:
        self._add(["b@x.com", "c@x.com"])
        resp = self._add(["b@x.com", "c@x.com"])
        self.assertEqual(sorted(resp.json()["members"]), ["a@x.com", "b@x.com", "c@x.com"])

    def test_missing_group_is_not_found(self) -> None:
        self.assertEqual(self._add(["c@x.com"], group="Nope").status_code, 404)

    def test_member_of_another_group_conflicts(self) -> None:
        self.create_group(self.admin, "Data", ["d@x.com"])
        resp = self._add(["c@x.com", "d@x.com"])
        self.assertEqual(resp.status_code, 409)
        members = self.client.get("/api/admin/groups", headers=self.admin).json()[0]["members"]
        self.assertEqual(sorted(members), ["a@x.com", "b@x.com"])

    def test_employee_cannot_add_members(self) -> None:
        employee = self.user_headers("ana@example.com")
        resp = self.client.put(
            "/api/groups/add-users",
            json={"groupName": "Platform", "members": ["ana@example.com"]},
            headers=employee,
        )
        self.assertEqual(resp.status_code, 403)


class TestGroupLookups(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.lead = self.admin_headers("lead@example.com")
        self.other_lead = self.admin_headers("boss@example.com")
        self.create_group(self.lead, "Platform", ["ana@example.com"])
        self.create_group(self.lead, "Data", ["bob@example.com"])
        self.create_group(self.other_lead, "Ops", [])

    def test_groups_i_created(self) -> None:
        names = [g["name"] for g in self.client.get("/api/groups", headers=self.lead).json()]
        self.assertEqual(names, ["Platform", "Data"])
        names = [g["name"] for g in self.client.get("/api/groups", headers=self.other_lead).json()]
        self.assertEqual(names, ["Ops"])

    def test_my_group(self) -> None:
        ana = self.user_headers("ana@example.com")
        resp = self.client.get("/api/user/group", headers=ana)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["name"], "Platform")

    def test_my_group_is_null_without_membership(self) -> None:
        eve = self.user_headers("eve@example.com")
        resp = self.client.get("/api/user/group", headers=eve)
        self.assertEqual(resp.status_code, 200)
        self.assertIsNone(resp.json())

    def test_admin_groups_lists_everything(self) -> None:
        resp = self.client.get("/api/admin/groups", headers=self.other_lead)
        self.assertEqual([g["name"] for g in resp.json()], ["Platform", "Data", "Ops"])

    def test_admin_groups_requires_admin(self) -> None:
        ana = self.user_headers("ana@example.com")
        self.assertEqual(self.client.get("/api/admin/groups", headers=ana).status_code, 403)
        self.assertEqual(self.client.get("/api/admin/groups").status_code, 401)


class TestAvailableUsers(ApiTestCase):
    def test_users_in_groups_are_excluded(self) -> None:
        admin = self.admin_headers("u1@x.com")
        for i in range(2, 6):
            self.assertEqual(self.register(f"u{i}@x.com").status_code, 201)
        self.create_group(admin, "G1", ["u2@x.com", "u3@x.com"])
        self.create_group(admin, "G2", ["u4@x.com"])

        resp = self.client.get("/api/users", headers=admin)
        self.assertEqual(resp.status_code, 200)
        emails = [u["email"] for u in resp.json()]
        self.assertEqual(emails, ["u1@x.com", "u5@x.com"])
        self.assertTrue(all("password_hash" not in u for u in resp.json()))

    def test_available_users_requires_admin(self) -> None:
        ana = self.user_headers("ana@example.com")
        self.assertEqual(self.client.get("/api/users", headers=ana).status_code, 403)


if __name__ == "__main__":
    unittest.main()
