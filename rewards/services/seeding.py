"""One-off seed steps: default tasks and the administrator account.

Run from the CLI (``rewards seed-tasks`` / ``rewards create-admin``) or the
Alembic data migration, never on application start-up.
"""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rewards.core.logging_config import get_logger
from rewards.core.security import hash_password
from rewards.models.admin import Admin
from rewards.models.task import Task

logger = get_logger(__name__)

DEFAULT_TASKS = [
    {"title": "Referral Task", "description": "Refer at least 3 users", "points": 500, "task_type": "referral"},
    {"title": "Join Telegram Group", "description": "Join our official Telegram group", "points": 100, "task_type": "telegram"},
    {"title": "Join Telegram Channel", "description": "Join our official Telegram channel", "points": 100, "task_type": "telegram"},
    {"title": "Follow Twitter Page", "description": "Follow our Twitter account", "points": 150, "task_type": "twitter"},
    {"title": "Subscribe to Youtube Channel", "description": "Subscribe to our YouTube channel", "points": 200, "task_type": "youtube"},
    {"title": "Like Youtube Video", "description": "Like our latest YouTube video", "points": 50, "task_type": "youtube"},
]


async def seed_default_tasks(db: AsyncSession) -> int:
    """Insert default tasks whose title is not present yet. Returns count added."""
    result = await db.execute(select(Task.title))
    existing = set(result.scalars().all())

    added = 0
    for data in DEFAULT_TASKS:
        if data["title"] in existing:
            continue
        db.add(Task(**data, is_active=True))
        added += 1

    await db.commit()
    logger.info("default_tasks_seeded", added=added)
    return added


async def ensure_admin(db: AsyncSession, username: str, password: str) -> tuple[Admin, bool]:
    """Create the admin account if missing. Returns (admin, created)."""
    result = await db.execute(select(Admin).where(Admin.username == username))
    admin = result.scalar_one_or_none()
    if admin is not None:
        return admin, False

    admin = Admin(username=username, password_hash=hash_password(password))
    db.add(admin)
    await db.commit()
    await db.refresh(admin)

    logger.info("admin_created", admin_id=admin.id)
    return admin, True
