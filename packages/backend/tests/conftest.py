"""Test fixtures — a fresh in-memory database per test.

Testing pattern for async SQLAlchemy + FastAPI:

1. Each test gets its own in-memory SQLite engine (StaticPool, so every
   connection sees the same database) with all tables created.
2. The app's get_db dependency is overridden to hand out that session.
3. The engine is disposed after the test — nothing leaks between tests.

Env vars are set before the app is imported so the module-level
engine and bcrypt cost pick them up.
"""

import os

os.environ["NOTEKEEP_DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["NOTEKEEP_BCRYPT_ROUNDS"] = "4"
os.environ["NOTEKEEP_JWT_SECRET"] = "test-suite-signing-key-0123456789abcdef"

import uuid
from datetime import timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from notekeep.auth.password import hash_password
from notekeep.auth.tokens import TokenService
from notekeep.db.engine import get_db
from notekeep.db.models import Base, Role, User
from notekeep.main import app

TEST_DB_URL = "sqlite+aiosqlite://"
TEST_SECRET = "test-secret-key-with-enough-length-for-hs256"


@pytest_asyncio.fixture()
async def db_session():
    """Per-test session on a brand new in-memory database."""
    engine = create_async_engine(
        TEST_DB_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session = AsyncSession(engine, expire_on_commit=False)
    try:
        yield session
    finally:
        await session.close()
        await engine.dispose()


@pytest.fixture()
def tokens():
    return TokenService(secret=TEST_SECRET, default_ttl=timedelta(minutes=5))


@pytest_asyncio.fixture()
async def client(db_session):
    """HTTP client with the app's get_db overridden for testing.

    Auth is NOT overridden: tests sign up and sign in for real so that
    ownership and roles come from actual tokens.
    """
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


def unique_email(prefix: str = "user") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}@example.com"


async def signup_and_signin(client, email=None, password="password_123"):
    """Register a user through the API and return auth headers."""
    email = email or unique_email()
    r = await client.post(
        "/api/auth/signup", json={"email": email, "password": password}
    )
    assert r.status_code == 201, r.text
    r = await client.post(
        "/api/auth/signin", json={"email": email, "password": password}
    )
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['token']}"}


async def create_admin(db_session, email=None, password="admin_password_123"):
    """Insert an ADMIN straight into the database (no API path grants it)."""
    user = User(
        email=email or unique_email("admin"),
        password_hash=hash_password(password),
        role=Role.ADMIN,
    )
    db_session.add(user)
    await db_session.commit()
    return user


@pytest_asyncio.fixture()
async def user_headers(client):
    return await signup_and_signin(client)


@pytest_asyncio.fixture()
async def other_headers(client):
    return await signup_and_signin(client)


@pytest_asyncio.fixture()
async def admin_headers(client, db_session):
    password = "admin_password_123"
    admin = await create_admin(db_session, password=password)
    r = await client.post(
        "/api/auth/signin", json={"email": admin.email, "password": password}
    )
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['token']}"}
