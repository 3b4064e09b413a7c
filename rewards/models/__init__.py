from rewards.models.admin import Admin, AdminSession
from rewards.models.referral import Referral
from rewards.models.session import Session
from rewards.models.task import Task
from rewards.models.user import User
from rewards.models.user_task import UserTask

__all__ = ["User", "Task", "UserTask", "Referral", "Session", "Admin", "AdminSession"]
