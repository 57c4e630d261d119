"""Tests for scripts/create_admin.py (issue_key + argument parsing)."""

import pytest

from core.security import hash_api_key
from scripts.create_admin import issue_key, parse_args


class TestIssueKey:

    def test_creates_admin_with_hashed_key(self, db_session):
        user, plain = issue_key(db_session, "ops@example.com")
        assert user.id is not None
        assert user.role == "admin"
        assert user.api_key_hash == hash_api_key(plain)
        assert user.api_key_hash != plain

    def test_existing_user_without_rotate_fails(self, db_session):
        issue_key(db_session, "ops@example.com")
        with pytest.raises(ValueError, match="--rotate"):
            issue_key(db_session, "ops@example.com")

    def test_rotate_replaces_key(self, db_session):
        user, first = issue_key(db_session, "ops@example.com")
        again, second = issue_key(db_session, "ops@example.com", rotate=True)
        assert again.id == user.id
        assert first != second
        assert again.api_key_hash == hash_api_key(second)

    def test_issued_key_opens_dashboards(self, client, db_session):
        _, plain = issue_key(db_session, "ops@example.com")
        r = client.get("/api/v1/admin/users", headers={"X-API-Key": plain})
        assert r.status_code == 200
        assert r.json()["data"][0]["email"] == "ops@example.com"

    def test_plain_user_key_is_forbidden(self, client, db_session):
        _, plain = issue_key(db_session, "viewer@example.com", role="user")
        r = client.get("/api/v1/admin/reports", headers={"X-API-Key": plain})
        assert r.status_code == 403


class TestParseArgs:

    def test_defaults(self):
        args = parse_args(["ops@example.com"])
        assert (args.email, args.role, args.rotate) == ("ops@example.com", "admin", False)

    def test_role_and_rotate(self):
        args = parse_args(["a@example.com", "--role", "user", "--rotate"])
        assert (args.role, args.rotate) == ("user", True)

    def test_rejects_unknown_role(self):
        with pytest.raises(SystemExit):
            parse_args(["a@example.com", "--role", "root"])
