"""Admin operations: authentication, user listing/removal, task CRUD."""
from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from rewards.core.exceptions import ResourceNotFoundError
from rewards.core.logging_config import get_logger
from rewards.core.security import verify_password
from rewards.models.admin import Admin
from rewards.models.referral import Referral
from rewards.models.session import Session
from rewards.models.task import Task
from rewards.models.user import User
from rewards.models.user_task import UserTask

logger = get_logger(__name__)


async def get_admin_by_username(db: AsyncSession, username: str) -> Admin | None:
    result = await db.execute(select(Admin).where(Admin.username == username))
    return result.scalar_one_or_none()


async def authenticate_admin(db: AsyncSession, username: str, password: str) -> Admin | None:
    admin = await get_admin_by_username(db, username)
    if admin is None or not verify_password(password, admin.password_hash):
        return None
    return admin


async def list_users(db: AsyncSession) -> list[User]:
    result = await db.execute(select(User).order_by(User.points.desc(), User.id))
    return list(result.scalars().all())


async def delete_user(db: AsyncSession, user_id: int) -> None:
    """Delete a user together with their task records, referrals and sessions."""
    user = await db.get(User, user_id)
    if user is None:
        raise ResourceNotFoundError("User not found")

    await db.execute(delete(UserTask).where(UserTask.user_id == user_id))
    await db.execute(
        delete(Referral).where(
            or_(Referral.referrer_id == user_id, Referral.referred_user_id == user_id)
        )
    )
    await db.execute(delete(Session).where(Session.user_id == user_id))
    await db.execute(delete(User).where(User.id == user_id))
    await db.commit()

    logger.info("user_deleted", user_id=user_id)


async def list_tasks(db: AsyncSession) -> list[Task]:
    """All tasks, inactive included."""
    result = await db.execute(select(Task).order_by(Task.id))
    return list(result.scalars().all())


async def create_task(db: AsyncSession, **fields) -> Task:
    task = Task(**fields)
    db.add(task)
    await db.commit()
    await db.refresh(task)

    logger.info("task_created", task_id=task.id, points=task.points)
    return task


async def update_task(db: AsyncSession, task_id: int, **changes) -> Task:
    task = await db.get(Task, task_id)
    if task is None:
        raise ResourceNotFoundError("Task not found")

    for field, value in changes.items():
        setattr(task, field, value)
    await db.commit()
    await db.refresh(task)

    logger.info("task_updated", task_id=task_id, fields=sorted(changes))
    return task


async def delete_task(db: AsyncSession, task_id: int) -> None:
    task = await db.get(Task, task_id)
    if task is None:
        raise ResourceNotFoundError("Task not found")

    await db.execute(delete(UserTask).where(UserTask.task_id == task_id))
    await db.execute(delete(Task).where(Task.id == task_id))
    await db.commit()

    logger.info("task_deleted", task_id=task_id)
