"""CLI tests — init-db and create-admin against a throwaway SQLite file."""

import asyncio

import pytest
from click.testing import CliRunner
from sqlalchemy.ext.asyncio import AsyncSession

from notekeep.auth.tokens import TokenService
from notekeep.cli.main import cli
from notekeep.db.engine import build_engine
from notekeep.db.models import Role
from notekeep.db.stores import UserStore
from notekeep.services.auth_service import AuthService


@pytest.fixture()
def db_url(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}"
    result = CliRunner().invoke(cli, ["--database-url", url, "init-db"])
    assert result.exit_code == 0, result.output
    assert "Database tables ready" in result.output
    return url


def _with_session(url, fn):
    async def run():
        engine = build_engine(url)
        try:
            async with AsyncSession(engine, expire_on_commit=False) as session:
                return await fn(session)
        finally:
            await engine.dispose()

    return asyncio.run(run())


def _role_of(url, email):
    async def fetch(session):
        user = await UserStore(session).find_by_email(email)
        return user.role if user else None

    return _with_session(url, fetch)


def test_create_admin_new_account(db_url):
    result = CliRunner().invoke(
        cli,
        ["--database-url", db_url, "create-admin", "ops@example.com", "--password", "ops_password_1"],
    )
    assert result.exit_code == 0, result.output
    assert "Created admin" in result.output
    assert _role_of(db_url, "ops@example.com") == Role.ADMIN


def test_create_admin_promotes_existing_user(db_url):
    async def seed(session):
        svc = AuthService(session, TokenService(secret="cli-test-signing-key-0123456789abcdef"))
        assert (await svc.signup("member@example.com", "password_123")).ok

    _with_session(db_url, seed)
    assert _role_of(db_url, "member@example.com") == Role.USER

    runner = CliRunner()
    result = runner.invoke(cli, ["--database-url", db_url, "create-admin", "member@example.com"])
    assert result.exit_code == 0, result.output
    assert "Promoted" in result.output
    assert _role_of(db_url, "member@example.com") == Role.ADMIN

    result = runner.invoke(cli, ["--database-url", db_url, "create-admin", "member@example.com"])
    assert result.exit_code == 0
    assert "already an admin" in result.output


def test_create_admin_requires_password_for_new_account(db_url):
    result = CliRunner().invoke(
        cli, ["--database-url", db_url, "create-admin", "nobody@example.com"]
    )
    assert result.exit_code != 0
    assert "--password is required" in result.output
    assert _role_of(db_url, "nobody@example.com") is None
