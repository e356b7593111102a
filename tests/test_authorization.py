"""Unit tests for app.core.authorization: role parsing and the content edit policy."""

import unittest

from app.core.authorization import ContentEditPolicy, Role, can_modify_content, parse_role


class TestParseRole(unittest.TestCase):
    def test_known_roles(self) -> None:
        self.assertIs(parse_role(1), Role.ADMIN)
        self.assertIs(parse_role(2), Role.SUPERADMIN)

    def test_unknown_values(self) -> None:
        for value in (0, 3, -1, None, "admin", "2", 2.9, 1.0, True):
            with self.subTest(value=value):
                self.assertIsNone(parse_role(value))


class TestAnyAdminPolicy(unittest.TestCase):
    """Under any_admin_or_superadmin every staff member may modify any record."""

    policy = ContentEditPolicy.ANY_ADMIN_OR_SUPERADMIN

    def test_admin_on_foreign_record(self) -> None:
        self.assertTrue(can_modify_content(self.policy, Role.ADMIN, 5, owner_id=9))

    def test_admin_on_unowned_record(self) -> None:
        self.assertTrue(can_modify_content(self.policy, Role.ADMIN, 5, owner_id=None))

    def test_superadmin(self) -> None:
        self.assertTrue(can_modify_content(self.policy, Role.SUPERADMIN, 1, owner_id=9))


class TestOwnerPolicy(unittest.TestCase):
    """Under owner_or_superadmin an Admin may only modify records they created."""

    policy = ContentEditPolicy.OWNER_OR_SUPERADMIN

    def test_owner_allowed(self) -> None:
        self.assertTrue(can_modify_content(self.policy, Role.ADMIN, 5, owner_id=5))

    def test_other_admin_denied(self) -> None:
        self.assertFalse(can_modify_content(self.policy, Role.ADMIN, 5, owner_id=9))

    def test_unowned_record_denied_for_admin(self) -> None:
        self.assertFalse(can_modify_content(self.policy, Role.ADMIN, 5, owner_id=None))

    def test_superadmin_always_allowed(self) -> None:
        self.assertTrue(can_modify_content(self.policy, Role.SUPERADMIN, 1, owner_id=9))
        self.assertTrue(can_modify_content(self.policy, Role.SUPERADMIN, 1, owner_id=None))


if __name__ == "__main__":
    unittest.main()
