"""Point accounting: signup bonus, wallet bonus, task rewards and referrals.

This module is the only writer of ``User.points``. Every public operation
runs as one transaction and credits points with an atomic
``points = points + n`` UPDATE. Crediting is guarded by a conditional
UPDATE on the state it depends on (``wallet_connected`` false -> true,
``completed`` false -> true), so a retried or doubled request never pays
twice.
"""
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from rewards.core.exceptions import (
    DuplicateResourceError,
    PreconditionFailedError,
    ResourceNotFoundError,
    ValidationError,
)
from rewards.core.logging_config import get_logger
from rewards.core.security import generate_referral_code
from rewards.models.referral import Referral
from rewards.models.task import Task
from rewards.models.user import User
from rewards.models.user_task import UserTask
from rewards.services.sessions import utcnow

logger = get_logger(__name__)

SIGNUP_BONUS = 500
WALLET_BONUS = 100
REFERRAL_BONUS = 250
WALLET_ADDRESS_LENGTH = 42
REFERRAL_CODE_LENGTH = 10
MAX_CODE_ATTEMPTS = 10


@asynccontextmanager
async def transaction(
    db: AsyncSession, conflict_message: str | Callable[[IntegrityError], str]
) -> AsyncIterator[None]:
    """Commit on success, roll back on any error.

    Unique-constraint violations (at flush or commit) surface as
    DuplicateResourceError. ``conflict_message`` is either the message or a
    function choosing it from the IntegrityError.
    """
    try:
        yield
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        logger.warning("integrity_error", error=str(exc.orig))
        message = conflict_message(exc) if callable(conflict_message) else conflict_message
        raise DuplicateResourceError(message) from exc
    except Exception:
        await db.rollback()
        raise


async def get_user(db: AsyncSession, user_id: int) -> User | None:
    return await db.get(User, user_id)


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email.strip().lower()))
    return result.scalar_one_or_none()


async def get_user_by_username(db: AsyncSession, username: str) -> User | None:
    result = await db.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def get_user_by_referral_code(db: AsyncSession, code: str) -> User | None:
    result = await db.execute(select(User).where(User.referral_code == code.strip().upper()))
    return result.scalar_one_or_none()


def _signup_conflict(exc: IntegrityError) -> str:
    # sqlite names the column (users.username), postgres the index (ix_users_username)
    if "username" in str(exc.orig):
        return "Username already taken"
    return "User already exists"


async def _unique_referral_code(db: AsyncSession) -> str:
    for _ in range(MAX_CODE_ATTEMPTS):
        code = generate_referral_code(REFERRAL_CODE_LENGTH)
        if await get_user_by_referral_code(db, code) is None:
            return code
    # the unique constraint still guards the insert
    return generate_referral_code(REFERRAL_CODE_LENGTH)


async def _credit(db: AsyncSession, user_id: int, amount: int) -> None:
    await db.execute(
        update(User)
        .where(User.id == user_id)
        .values(points=User.points + amount)
        .execution_options(synchronize_session=False)
    )


async def _add_user(
    db: AsyncSession,
    username: str,
    email: str,
    password_hash: str,
    referred_by: str | None,
) -> User:
    email = email.strip().lower()

    if await get_user_by_email(db, email):
        raise DuplicateResourceError("User already exists")
    if await get_user_by_username(db, username):
        raise DuplicateResourceError("Username already taken")

    user = User(
        username=username,
        email=email,
        password_hash=password_hash,
        points=SIGNUP_BONUS,
        wallet_connected=False,
        referral_code=await _unique_referral_code(db),
        referred_by=referred_by or None,
    )
    db.add(user)
    await db.flush()

    # One incomplete UserTask per currently active task
    active = await db.execute(select(Task.id).where(Task.is_active.is_(True)))
    db.add_all(
        [UserTask(user_id=user.id, task_id=task_id, completed=False) for task_id in active.scalars()]
    )
    await db.flush()
    return user


async def _add_referral(
    db: AsyncSession, referrer_id: int, referred_user_id: int, points_earned: int
) -> Referral:
    if referrer_id == referred_user_id:
        raise ValidationError("A user cannot refer themselves")

    referral = Referral(
        referrer_id=referrer_id,
        referred_user_id=referred_user_id,
        points_earned=points_earned,
    )
    db.add(referral)
    await db.flush()
    await _credit(db, referrer_id, points_earned)
    return referral


async def create_user(
    db: AsyncSession,
    username: str,
    email: str,
    password_hash: str,
    referred_by: str | None = None,
) -> User:
    """Create a user with the signup bonus and their task assignments."""
    async with transaction(db, _signup_conflict):
        user = await _add_user(db, username, email, password_hash, referred_by)

    await db.refresh(user)
    logger.info("user_created", user_id=user.id)
    return user


async def create_referral(
    db: AsyncSession,
    referrer_id: int,
    referred_user_id: int,
    points_earned: int = REFERRAL_BONUS,
) -> Referral:
    """Record a referral and credit the referrer in the same transaction."""
    async with transaction(db, "User has already been referred"):
        referral = await _add_referral(db, referrer_id, referred_user_id, points_earned)

    logger.info(
        "referral_created",
        referrer_id=referrer_id,
        referred_user_id=referred_user_id,
        points=points_earned,
    )
    return referral


async def register_user(
    db: AsyncSession,
    username: str,
    email: str,
    password_hash: str,
    referred_by: str | None = None,
) -> User:
    """Signup: create the user and, if the code resolves, the referral.

    An unknown referral code is kept on the user but otherwise ignored.
    """
    referred_by = referred_by.strip().upper() if referred_by else None
    referrer = None

    async with transaction(db, _signup_conflict):
        user = await _add_user(db, username, email, password_hash, referred_by)
        if referred_by:
            referrer = await get_user_by_referral_code(db, referred_by)
            if referrer is not None and referrer.id != user.id:
                await _add_referral(db, referrer.id, user.id, REFERRAL_BONUS)

    await db.refresh(user)
    logger.info(
        "user_registered",
        user_id=user.id,
        referrer_id=referrer.id if referrer else None,
    )
    return user


async def connect_wallet(db: AsyncSession, user_id: int, address: str) -> User:
    """Store the wallet address; the bonus is paid on the first connection only."""
    address = address or ""
    if len(address) != WALLET_ADDRESS_LENGTH:
        raise ValidationError(
            "Invalid wallet address",
            detail=[{"field": "walletAddress", "message": f"must be exactly {WALLET_ADDRESS_LENGTH} characters"}],
        )

    async with transaction(db, "Wallet update conflict"):
        first = await db.execute(
            update(User)
            .where(User.id == user_id, User.wallet_connected.is_(False))
            .values(
                wallet_address=address,
                wallet_connected=True,
                points=User.points + WALLET_BONUS,
            )
            .execution_options(synchronize_session=False)
        )
        bonus = first.rowcount == 1
        if not bonus:
            again = await db.execute(
                update(User)
                .where(User.id == user_id)
                .values(wallet_address=address)
                .execution_options(synchronize_session=False)
            )
            if again.rowcount == 0:
                raise ResourceNotFoundError("User not found")

    user = await db.get(User, user_id)
    await db.refresh(user)
    logger.info("wallet_connected", user_id=user_id, bonus=bonus)
    return user


async def complete_task(db: AsyncSession, user_id: int, task_id: int) -> tuple[UserTask, bool]:
    """Mark the user's task complete and credit its points.

    Returns (user_task, credited). ``credited`` is False when the task was
    already complete, in which case nothing changes.
    """
    async with transaction(db, "Task update conflict"):
        user = await db.get(User, user_id)
        if user is None:
            raise ResourceNotFoundError("User not found")
        await db.refresh(user)
        if not user.wallet_connected:
            raise PreconditionFailedError("Wallet must be connected to complete tasks")

        task = await db.get(Task, task_id)
        if task is None:
            raise ResourceNotFoundError("Task not found")
        if not task.is_active:
            raise PreconditionFailedError("Task is not active")

        result = await db.execute(
            select(UserTask).where(UserTask.user_id == user_id, UserTask.task_id == task_id)
        )
        user_task = result.scalar_one_or_none()
        if user_task is None:
            raise ResourceNotFoundError("Task not found")

        transition = await db.execute(
            update(UserTask)
            .where(UserTask.id == user_task.id, UserTask.completed.is_(False))
            .values(completed=True, completed_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        credited = transition.rowcount == 1
        if credited:
            await _credit(db, user_id, task.points)

    await db.refresh(user_task)
    if credited:
        logger.info("task_completed", user_id=user_id, task_id=task_id, points=task.points)
    else:
        logger.info("task_already_completed", user_id=user_id, task_id=task_id)
    return user_task, credited


async def list_user_tasks(db: AsyncSession, user_id: int) -> list[UserTask]:
    """The user's task assignments for active tasks, with the task loaded."""
    result = await db.execute(
        select(UserTask)
        .join(Task, UserTask.task_id == Task.id)
        .where(UserTask.user_id == user_id, Task.is_active.is_(True))
        .options(selectinload(UserTask.task))
        .order_by(Task.id)
    )
    return list(result.scalars().all())


async def list_referrals(db: AsyncSession, referrer_id: int) -> list[Referral]:
    result = await db.execute(
        select(Referral)
        .where(Referral.referrer_id == referrer_id)
        .options(selectinload(Referral.referred_user))
        .order_by(Referral.created_at.desc(), Referral.id.desc())
    )
    return list(result.scalars().all())


async def referral_summary(db: AsyncSession, user: User) -> dict:
    referrals = await list_referrals(db, user.id)
    total = await db.execute(
        select(func.coalesce(func.sum(Referral.points_earned), 0)).where(
            Referral.referrer_id == user.id
        )
    )
    return {
        "referrals": referrals,
        "referral_count": len(referrals),
        "referral_code": user.referral_code,
        "total_earnings": int(total.scalar_one()),
    }
