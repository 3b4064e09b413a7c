"""Admin routes: login/logout, user management and task CRUD."""
from fastapi import APIRouter, Request, Response

from rewards.core.config import get_settings
from rewards.core.exceptions import AuthenticationError
from rewards.core.logging_config import get_logger
from rewards.routers.deps import CurrentAdmin, DbSession, set_session_cookie
from rewards.schemas.admin import (
    AdminAuthOutSchema,
    AdminLoginSchema,
    AdminOutSchema,
    CurrentAdminOutSchema,
)
from rewards.schemas.common import MessageOutSchema
from rewards.schemas.task import TaskCreateSchema, TaskOutSchema, TaskUpdateSchema
from rewards.schemas.user import UserOutSchema
from rewards.services import admin as admin_service
from rewards.services import sessions

router = APIRouter(prefix="/api/admin", tags=["admin"])
settings = get_settings()
logger = get_logger(__name__)

ADMIN_SESSION_MAX_AGE = 60 * 60 * settings.admin_session_ttl_hours


@router.post("/login", response_model=AdminAuthOutSchema)
async def admin_login(body: AdminLoginSchema, response: Response, db: DbSession):
    admin = await admin_service.authenticate_admin(db, body.username, body.password)
    if admin is None:
        logger.warning("admin_login_failed")
        raise AuthenticationError("Invalid credentials")

    token, _ = await sessions.create_admin_session(db, admin.id)
    set_session_cookie(response, settings.admin_cookie_name, token, ADMIN_SESSION_MAX_AGE)

    return AdminAuthOutSchema(
        admin=AdminOutSchema.model_validate(admin),
        message="Admin login successful",
    )


@router.post("/logout", response_model=MessageOutSchema)
async def admin_logout(request: Request, response: Response, admin: CurrentAdmin, db: DbSession):
    await sessions.delete_admin_session(db, request.cookies.get(settings.admin_cookie_name))
    response.delete_cookie(settings.admin_cookie_name, path="/")
    return MessageOutSchema(message="Admin logout successful")


@router.get("/me", response_model=CurrentAdminOutSchema)
async def admin_me(admin: CurrentAdmin):
    return CurrentAdminOutSchema(admin=AdminOutSchema.model_validate(admin))


@router.get("/users", response_model=list[UserOutSchema])
async def list_users(admin: CurrentAdmin, db: DbSession):
    users = await admin_service.list_users(db)
    return [UserOutSchema.model_validate(u) for u in users]


@router.delete("/users/{user_id}", response_model=MessageOutSchema)
async def delete_user(user_id: int, admin: CurrentAdmin, db: DbSession):
    await admin_service.delete_user(db, user_id)
    return MessageOutSchema(message="User deleted successfully")


@router.get("/tasks", response_model=list[TaskOutSchema])
async def list_tasks(admin: CurrentAdmin, db: DbSession):
    tasks = await admin_service.list_tasks(db)
    return [TaskOutSchema.model_validate(t) for t in tasks]


@router.post("/tasks", response_model=TaskOutSchema)
async def create_task(body: TaskCreateSchema, admin: CurrentAdmin, db: DbSession):
    task = await admin_service.create_task(db, **body.model_dump())
    return TaskOutSchema.model_validate(task)


@router.put("/tasks/{task_id}", response_model=TaskOutSchema)
async def update_task(task_id: int, body: TaskUpdateSchema, admin: CurrentAdmin, db: DbSession):
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    task = await admin_service.update_task(db, task_id, **changes)
    return TaskOutSchema.model_validate(task)


@router.delete("/tasks/{task_id}", response_model=MessageOutSchema)
async def delete_task(task_id: int, admin: CurrentAdmin, db: DbSession):
    await admin_service.delete_task(db, task_id)
    return MessageOutSchema(message="Task deleted successfully")
