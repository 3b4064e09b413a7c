"""SQLAlchemy declarative base and model imports for Alembic."""
from rewards.db.session import Base

# Import all models so Alembic can see them
from rewards.models.admin import Admin, AdminSession  # noqa: F401
from rewards.models.referral import Referral  # noqa: F401
from rewards.models.session import Session  # noqa: F401
from rewards.models.task import Task  # noqa: F401
from rewards.models.user import User  # noqa: F401
from rewards.models.user_task import UserTask  # noqa: F401

__all__ = ["Base", "User", "Task", "UserTask", "Referral", "Session", "Admin", "AdminSession"]
