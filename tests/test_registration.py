"""Tests for app.services.registration: token issuance and single-use redemption."""

import unittest
from datetime import timedelta
from unittest.mock import patch

from sqlalchemy import update

from app.core.authorization import Role
from app.core.security import hash_password as real_hash_password
from app.core.time_utils import utcnow
from app.models import RegistrationToken, User
from app.services.errors import ValidationFailed
from app.services.registration import (
    issue_registration_token,
    list_registration_tokens,
    register_user,
)
from support import add_user, make_database, make_settings


class RegistrationTestCase(unittest.TestCase):
    def setUp(self) -> None:
        rounds = patch("app.core.security.BCRYPT_ROUNDS", 4)
        rounds.start()
        self.addCleanup(rounds.stop)
        self.settings = make_settings()
        self.database = make_database()
        self.addCleanup(self.database.dispose)
        self.superadmin_id = add_user(
            self.database, "root@example.com", "rootpass", "Root", Role.SUPERADMIN
        )
        self.db = self.database.session()
        self.addCleanup(self.db.close)

    def issue(self, **kwargs: object) -> str:
        return issue_registration_token(self.db, self.superadmin_id, self.settings, **kwargs).token


class TestIssueRegistrationToken(RegistrationTestCase):
    def test_issued_token_is_unused_and_expires_in_24h(self) -> None:
        now = utcnow()
        row = issue_registration_token(self.db, self.superadmin_id, self.settings, now=now)
        self.assertRegex(row.token, r"^[A-Z0-9]{10}$")
        self.assertFalse(row.is_used)
        self.assertEqual(row.created_by, self.superadmin_id)
        self.assertIsNone(row.used_by)
        self.assertEqual(
            row.expires_at.replace(tzinfo=None),
            (now + timedelta(hours=24)).replace(tzinfo=None),
        )

    def test_list_includes_creator_and_redeemer_names(self) -> None:
        token = self.issue()
        self.issue()
        register_user(self.db, "new@example.com", "secret1", "Newbie", token)
        items = list_registration_tokens(self.db)
        self.assertEqual(len(items), 2)
        redeemed = next(i for i in items if i.token == token)
        self.assertTrue(redeemed.is_used)
        self.assertEqual(redeemed.creator_name, "Root")
        self.assertEqual(redeemed.user_name, "Newbie")
        self.assertIsNotNone(redeemed.used_at)
        pending = next(i for i in items if i.token != token)
        self.assertFalse(pending.is_used)
        self.assertIsNone(pending.user_name)


class TestRegisterUser(RegistrationTestCase):
    def test_creates_admin_and_consumes_token(self) -> None:
        token = self.issue()
        user = register_user(self.db, "  New@Example.com ", "secret1", " Newbie ", token)
        self.assertEqual(user.email, "new@example.com")
        self.assertEqual(user.name, "Newbie")
        self.assertEqual(user.role, int(Role.ADMIN))
        row = self.db.query(RegistrationToken).filter_by(token=token).one()
        self.db.refresh(row)
        self.assertTrue(row.is_used)
        self.assertEqual(row.used_by, user.id)

    def test_token_is_single_use(self) -> None:
        token = self.issue()
        register_user(self.db, "first@example.com", "secret1", "First", token)
        with self.assertRaises(ValidationFailed) as ctx:
            register_user(self.db, "second@example.com", "secret1", "Second", token)
        self.assertEqual(ctx.exception.message, "Registration token has already been used")
        self.assertIsNone(self.db.query(User).filter_by(email="second@example.com").first())

    def test_expired_token_rejected(self) -> None:
        token = self.issue(now=utcnow() - timedelta(hours=25))
        with self.assertRaises(ValidationFailed) as ctx:
            register_user(self.db, "late@example.com", "secret1", "Late", token)
        self.assertEqual(ctx.exception.message, "Registration token has expired")

    def test_unknown_token_rejected(self) -> None:
        with self.assertRaises(ValidationFailed) as ctx:
            register_user(self.db, "x@example.com", "secret1", "X", "ZZZZZZZZZZ")
        self.assertEqual(ctx.exception.message, "Invalid registration token")

    def test_duplicate_email_leaves_token_unused(self) -> None:
        token = self.issue()
        with self.assertRaises(ValidationFailed) as ctx:
            register_user(self.db, "ROOT@example.com", "secret1", "Dup", token)
        self.assertEqual(ctx.exception.message, "Email already registered")
        row = self.db.query(RegistrationToken).filter_by(token=token).one()
        self.assertFalse(row.is_used)

    def test_input_validation_runs_before_lookup(self) -> None:
        cases = [
            (("", "secret1", "N", "ABCDEFGHIJ"), "All fields are required"),
            (("not-an-email", "secret1", "N", "ABCDEFGHIJ"), "Invalid email format"),
            (("a@example.com", "short", "N", "ABCDEFGHIJ"), "Password must be at least 6 characters"),
            (("a@example.com", "x" * 129, "N", "ABCDEFGHIJ"), "Password must be at most 128 characters"),
            (("a@example.com", "secret1", "N", "SHORT"), "Invalid token format"),
        ]
        for args, message in cases:
            with self.subTest(message=message):
                with self.assertRaises(ValidationFailed) as ctx:
                    register_user(self.db, *args)
                self.assertEqual(ctx.exception.message, message)

    def test_concurrent_claim_yields_one_account(self) -> None:
        """A redemption that loses the race after its checks must not create an account."""
        token = self.issue()

        def winner_claims_first(password: str) -> str:
            with self.database.engine.begin() as conn:
                conn.execute(
                    update(RegistrationToken)
                    .where(RegistrationToken.token == token)
                    .values(is_used=True, used_at=utcnow())
                )
            return real_hash_password(password)

        with patch(
            "app.services.registration.hash_password", side_effect=winner_claims_first
        ):
            with self.assertRaises(ValidationFailed) as ctx:
                register_user(self.db, "loser@example.com", "secret1", "Loser", token)
        self.assertEqual(ctx.exception.message, "Registration token has already been used")
        self.assertIsNone(self.db.query(User).filter_by(email="loser@example.com").first())


if __name__ == "__main__":
    unittest.main()
