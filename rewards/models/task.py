"""Task model: an admin-defined promotional action with a fixed reward."""
from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from rewards.db.session import Base


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    points = Column(Integer, nullable=False)
    task_type = Column(String(50), nullable=False)  # see rewards.schemas.task.TaskType
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=True)

    user_tasks = relationship("UserTask", back_populates="task")
