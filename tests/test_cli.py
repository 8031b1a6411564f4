"""Tests for the maintenance CLIs (create_admin, blacklist_cleanup) against SQLite."""

import io
import unittest
from contextlib import redirect_stderr, redirect_stdout
from datetime import UTC, datetime, timedelta
from unittest.mock import patch

from app import blacklist_cleanup
from app.core.database import session_scope
from app.core.roles import Role
from app.models import BlacklistedToken, User
from app.repositories.blacklist import BlacklistRepository
from app.scripts import create_admin
from tests.fakes import make_settings, make_sqlite_session_factory


class CliTestCase(unittest.TestCase):
    module = None

    def setUp(self) -> None:
        self.factory = make_sqlite_session_factory()
        self.settings = make_settings()
        patchers = [
            patch.object(self.module, "session_scope", lambda: session_scope(self.factory)),
            patch.object(self.module, "get_settings", lambda: self.settings),
        ]
        for p in patchers:
            p.start()
            self.addCleanup(p.stop)


class TestCreateAdminCli(CliTestCase):
    module = create_admin

    def run_cli(self, *argv: str) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = create_admin.main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_creates_admin_and_bootstraps(self) -> None:
        code, out, _ = self.run_cli("bob", "bob@example.com", "secret1", "--bootstrap")
        self.assertEqual(code, 0)
        self.assertIn("Created admin 'bob'", out)
        with session_scope(self.factory) as db:
            roles = {u.username: u.role for u in db.query(User).all()}
        self.assertEqual(roles, {"superadmin": Role.SUPER_ADMIN, "bob": Role.ADMIN})

    def test_duplicate_fails(self) -> None:
        self.run_cli("bob", "bob@example.com", "secret1")
        code, _, err = self.run_cli("bob", "other@example.com", "secret1")
        self.assertEqual(code, 1)
        self.assertIn("Username", err)

    def test_invalid_input(self) -> None:
        code, _, err = self.run_cli("bob", "not-an-email", "123")
        self.assertEqual(code, 1)
        self.assertIn("Invalid", err)


class TestBlacklistCleanupCli(CliTestCase):
    module = blacklist_cleanup

    def test_deletes_expired_entries(self) -> None:
        now = datetime.now(UTC)
        with session_scope(self.factory) as db:
            repo = BlacklistRepository(db)
            repo.add("old", 1, now - timedelta(minutes=1))
            repo.add("live", 1, now + timedelta(minutes=10))
        self.assertEqual(blacklist_cleanup.main(), 0)
        with session_scope(self.factory) as db:
            self.assertEqual(db.query(BlacklistedToken).count(), 1)


if __name__ == "__main__":
    unittest.main()
