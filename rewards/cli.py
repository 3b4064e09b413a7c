"""Command-line interface for one-off maintenance tasks."""
import asyncio
from typing import Annotated

import typer

from rewards.core.logging_config import get_logger, setup_logging
from rewards.db.base import Base
from rewards.db.session import AsyncSessionLocal, engine
from rewards.services import seeding, sessions

setup_logging()
logger = get_logger(__name__)

app = typer.Typer(
    name="rewards",
    help="Rewards API maintenance commands",
    no_args_is_help=True,
)


async def _init_db() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()


async def _seed_tasks() -> int:
    async with AsyncSessionLocal() as db:
        added = await seeding.seed_default_tasks(db)
    await engine.dispose()
    return added


async def _create_admin(username: str, password: str) -> bool:
    async with AsyncSessionLocal() as db:
        _, created = await seeding.ensure_admin(db, username, password)
    await engine.dispose()
    return created


async def _purge_sessions() -> int:
    async with AsyncSessionLocal() as db:
        removed = await sessions.purge_expired_sessions(db)
    await engine.dispose()
    return removed


@app.command("init-db")
def init_db() -> None:
    """Create all tables (development; use Alembic in production)."""
    asyncio.run(_init_db())
    typer.echo("Database initialized")


@app.command("seed-tasks")
def seed_tasks() -> None:
    """Insert the default tasks that are not present yet."""
    added = asyncio.run(_seed_tasks())
    typer.echo(f"Added {added} default task(s)")


@app.command("create-admin")
def create_admin(
    username: Annotated[str, typer.Option("--username", "-u", help="Admin username")],
    password: Annotated[
        str, typer.Option("--password", "-p", prompt=True, hide_input=True, help="Admin password")
    ],
) -> None:
    """Create the administrator account if it does not exist."""
    if asyncio.run(_create_admin(username, password)):
        typer.echo(f"Admin '{username}' created")
    else:
        typer.echo(f"Admin '{username}' already exists")


@app.command("purge-sessions")
def purge_sessions() -> None:
    """Delete expired user and admin sessions."""
    removed = asyncio.run(_purge_sessions())
    typer.echo(f"Removed {removed} expired session(s)")


if __name__ == "__main__":
    app()
