"""Server-side sessions for users and admins.

The cookie carries a random opaque token; the database stores only its
SHA-256 hash. A session is valid while ``expires_at`` is in the future.
Expired rows are not removed on lookup; ``purge_expired_sessions`` clears
them on demand.
"""
from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from rewards.core.config import get_settings
from rewards.core.logging_config import get_logger
from rewards.core.security import generate_session_token, hash_token
from rewards.models.admin import AdminSession
from rewards.models.session import Session

logger = get_logger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


async def create_session(db: AsyncSession, user_id: int) -> tuple[str, datetime]:
    """Persist a new session for the user; return (token, expires_at)."""
    token = generate_session_token()
    expires_at = utcnow() + timedelta(days=get_settings().session_ttl_days)

    db.add(Session(token_hash=hash_token(token), user_id=user_id, expires_at=expires_at))
    await db.commit()

    logger.info("session_created", user_id=user_id)
    return token, expires_at


async def get_session(db: AsyncSession, token: str | None) -> Session | None:
    """Return the live session for token, or None if unknown or expired."""
    if not token:
        return None
    result = await db.execute(
        select(Session).where(
            Session.token_hash == hash_token(token),
            Session.expires_at > utcnow(),
        )
    )
    return result.scalar_one_or_none()


async def delete_session(db: AsyncSession, token: str | None) -> None:
    if not token:
        return
    await db.execute(delete(Session).where(Session.token_hash == hash_token(token)))
    await db.commit()


async def create_admin_session(db: AsyncSession, admin_id: int) -> tuple[str, datetime]:
    token = generate_session_token()
    expires_at = utcnow() + timedelta(hours=get_settings().admin_session_ttl_hours)

    db.add(AdminSession(token_hash=hash_token(token), admin_id=admin_id, expires_at=expires_at))
    await db.commit()

    logger.info("admin_session_created", admin_id=admin_id)
    return token, expires_at


async def get_admin_session(db: AsyncSession, token: str | None) -> AdminSession | None:
    if not token:
        return None
    result = await db.execute(
        select(AdminSession).where(
            AdminSession.token_hash == hash_token(token),
            AdminSession.expires_at > utcnow(),
        )
    )
    return result.scalar_one_or_none()


async def delete_admin_session(db: AsyncSession, token: str | None) -> None:
    if not token:
        return
    await db.execute(delete(AdminSession).where(AdminSession.token_hash == hash_token(token)))
    await db.commit()


async def purge_expired_sessions(db: AsyncSession) -> int:
    """Delete expired user and admin sessions. Returns number of rows removed."""
    now = utcnow()
    users = await db.execute(delete(Session).where(Session.expires_at <= now))
    admins = await db.execute(delete(AdminSession).where(AdminSession.expires_at <= now))
    await db.commit()

    removed = (users.rowcount or 0) + (admins.rowcount or 0)
    logger.info("expired_sessions_purged", removed=removed)
    return removed
