"""Pydantic schemas for tasks and per-user task records."""
from datetime import datetime
from typing import Literal

from pydantic import Field

from rewards.schemas.common import CamelModel
from rewards.schemas.user import UserOutSchema

TaskType = Literal["referral", "telegram", "twitter", "youtube", "other"]


class TaskOutSchema(CamelModel):
    id: int
    title: str
    description: str
    points: int
    task_type: str
    is_active: bool
    created_at: datetime | None = None


class TaskCreateSchema(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    points: int = Field(ge=0)
    task_type: TaskType
    is_active: bool = True


class TaskUpdateSchema(CamelModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    points: int | None = Field(default=None, ge=0)
    task_type: TaskType | None = None
    is_active: bool | None = None


class UserTaskRecordSchema(CamelModel):
    id: int
    user_id: int
    task_id: int
    completed: bool
    completed_at: datetime | None = None
    created_at: datetime | None = None


class UserTaskOutSchema(UserTaskRecordSchema):
    task: TaskOutSchema


class CompleteTaskOutSchema(CamelModel):
    user_task: UserTaskRecordSchema
    user: UserOutSchema
    message: str
