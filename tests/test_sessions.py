"""Server-side session lifecycle for users and admins."""
from datetime import timedelta

import pytest
from sqlalchemy import func, select, update

from rewards.core.security import hash_token
from rewards.models.admin import AdminSession
from rewards.models.session import Session
from rewards.services import accounting, seeding, sessions
from rewards.services.sessions import utcnow


async def _user(db, name="alice"):
    return await accounting.create_user(db, name, f"{name}@example.com", "not-a-real-hash")


@pytest.mark.asyncio
async def test_session_round_trip(db):
    user = await _user(db)

    token, expires_at = await sessions.create_session(db, user.id)
    session = await sessions.get_session(db, token)

    assert session is not None
    assert session.user_id == user.id
    assert expires_at - utcnow() > timedelta(days=6, hours=23)


@pytest.mark.asyncio
async def test_token_is_long_and_stored_hashed(db):
    user = await _user(db)

    token, _ = await sessions.create_session(db, user.id)

    assert len(token) >= 43  # 32 random bytes, urlsafe base64
    stored = (await db.execute(select(Session.token_hash))).scalars().all()
    assert stored == [hash_token(token)]
    assert token not in stored


@pytest.mark.asyncio
async def test_tokens_are_unique_per_login(db):
    user = await _user(db)

    first, _ = await sessions.create_session(db, user.id)
    second, _ = await sessions.create_session(db, user.id)

    assert first != second


@pytest.mark.asyncio
async def test_expired_session_is_rejected_but_not_deleted(db):
    user = await _user(db)
    token, _ = await sessions.create_session(db, user.id)

    await db.execute(update(Session).values(expires_at=utcnow() - timedelta(seconds=1)))
    await db.commit()

    assert await sessions.get_session(db, token) is None
    count = (await db.execute(select(func.count()).select_from(Session))).scalar_one()
    assert count == 1


@pytest.mark.asyncio
async def test_delete_session_is_idempotent(db):
    user = await _user(db)
    token, _ = await sessions.create_session(db, user.id)

    await sessions.delete_session(db, token)
    await sessions.delete_session(db, token)
    await sessions.delete_session(db, "never-issued")

    assert await sessions.get_session(db, token) is None


@pytest.mark.asyncio
async def test_missing_token_is_not_found(db):
    assert await sessions.get_session(db, None) is None
    assert await sessions.get_session(db, "") is None
    assert await sessions.get_session(db, "garbage") is None


@pytest.mark.asyncio
async def test_admin_session_round_trip_and_expiry(db):
    admin, _ = await seeding.ensure_admin(db, "root", "adminpass")

    token, expires_at = await sessions.create_admin_session(db, admin.id)
    assert (await sessions.get_admin_session(db, token)).admin_id == admin.id
    assert expires_at - utcnow() <= timedelta(hours=24)

    await db.execute(update(AdminSession).values(expires_at=utcnow() - timedelta(minutes=1)))
    await db.commit()
    assert await sessions.get_admin_session(db, token) is None


@pytest.mark.asyncio
async def test_user_token_is_not_an_admin_token(db):
    user = await _user(db)
    token, _ = await sessions.create_session(db, user.id)

    assert await sessions.get_admin_session(db, token) is None


@pytest.mark.asyncio
async def test_purge_expired_sessions(db):
    user = await _user(db)
    live, _ = await sessions.create_session(db, user.id)
    stale, _ = await sessions.create_session(db, user.id)

    await db.execute(
        update(Session)
        .where(Session.token_hash == hash_token(stale))
        .values(expires_at=utcnow() - timedelta(days=1))
    )
    await db.commit()

    assert await sessions.purge_expired_sessions(db) == 1
    assert await sessions.get_session(db, live) is not None
