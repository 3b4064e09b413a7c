"""Task routes: the user's task list and task completion."""
from fastapi import APIRouter

from rewards.routers.deps import CurrentUser, DbSession
from rewards.schemas.task import CompleteTaskOutSchema, UserTaskOutSchema, UserTaskRecordSchema
from rewards.schemas.user import UserOutSchema
from rewards.services import accounting

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("", response_model=list[UserTaskOutSchema])
async def list_tasks(current_user: CurrentUser, db: DbSession):
    user_tasks = await accounting.list_user_tasks(db, current_user.id)
    return [UserTaskOutSchema.model_validate(ut) for ut in user_tasks]


@router.post("/{task_id}/complete", response_model=CompleteTaskOutSchema)
async def complete_task(task_id: int, current_user: CurrentUser, db: DbSession):
    """Complete a task; points are credited once per task."""
    user_task, credited = await accounting.complete_task(db, current_user.id, task_id)

    user = await accounting.get_user(db, current_user.id)
    await db.refresh(user)

    return CompleteTaskOutSchema(
        user_task=UserTaskRecordSchema.model_validate(user_task),
        user=UserOutSchema.model_validate(user),
        message="Task completed successfully" if credited else "Task already completed",
    )
