"""NoteKeep admin CLI — database setup and operator-only account tasks.

Usage:
    notekeep init-db                              # Create tables
    notekeep create-admin ops@example.com         # Create or promote an admin
    notekeep serve --port 8080                    # Run the API with uvicorn

The ADMIN role is never reachable through the HTTP API; this CLI is
the only way to grant it.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import sys
from typing import Optional

import click
from sqlalchemy.ext.asyncio import AsyncSession

from notekeep.config import settings

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(coro):
    """Run an async coroutine from a synchronous Click handler.

    Handles nested event loops (e.g. when invoked via Click CliRunner
    inside an existing async context like tests) by offloading to a thread.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()


async def _create_tables(database_url: str) -> None:
    from notekeep.db.engine import build_engine
    from notekeep.db.models import Base

    engine = build_engine(database_url)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()


async def _create_admin(database_url: str, email: str, password: Optional[str]) -> str:
    """Create an ADMIN account, or promote an existing one.

    Returns "created", "promoted" or "unchanged".
    """
    from notekeep.auth.password import hash_password
    from notekeep.db.engine import build_engine
    from notekeep.db.models import Role, User
    from notekeep.db.stores import UserStore
    from notekeep.services.auth_service import normalize_email

    engine = build_engine(database_url)
    try:
        async with AsyncSession(engine, expire_on_commit=False) as session:
            users = UserStore(session)
            email = normalize_email(email)
            user = await users.find_by_email(email)

            if user is not None:
                if user.role == Role.ADMIN:
                    return "unchanged"
                user.role = Role.ADMIN
                await session.commit()
                return "promoted"

            if not password:
                raise click.UsageError(
                    f"No account for {email}; --password is required to create one"
                )
            outcome = await users.save(
                User(email=email, password_hash=hash_password(password), role=Role.ADMIN)
            )
            if not outcome.ok:
                raise click.ClickException(outcome.message)
            await session.commit()
            return "created"
    finally:
        await engine.dispose()


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@click.group()
@click.option(
    "--database-url",
    envvar="NOTEKEEP_DATABASE_URL",
    default=settings.database_url,
    show_default=False,
    help="SQLAlchemy async URL (defaults to NOTEKEEP_DATABASE_URL).",
)
@click.pass_context
def cli(ctx: click.Context, database_url: str):
    """NoteKeep administration."""
    ctx.obj = {"database_url": database_url}


@cli.command("init-db")
@click.pass_context
def init_db(ctx: click.Context):
    """Create all tables that don't exist yet."""
    _run(_create_tables(ctx.obj["database_url"]))
    click.secho("Database tables ready.", fg="green")


@cli.command("create-admin")
@click.argument("email")
@click.option("--password", default=None, help="Required when the account does not exist.")
@click.pass_context
def create_admin(ctx: click.Context, email: str, password: Optional[str]):
    """Grant the ADMIN role to EMAIL, creating the account if needed."""
    result = _run(_create_admin(ctx.obj["database_url"], email, password))
    messages = {
        "created": f"Created admin {email}.",
        "promoted": f"Promoted {email} to admin.",
        "unchanged": f"{email} is already an admin.",
    }
    click.secho(messages[result], fg="green" if result != "unchanged" else "yellow")


@cli.command()
@click.option("--host", default=settings.host, show_default=True)
@click.option("--port", default=settings.port, show_default=True, type=int)
@click.option("--reload", is_flag=True, help="Auto-reload on code changes.")
def serve(host: str, port: int, reload: bool):
    """Run the API server."""
    import uvicorn

    uvicorn.run("notekeep.main:app", host=host, port=port, reload=reload)


def main():
    try:
        cli()
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
