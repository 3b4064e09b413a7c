"""Auth routes: signup, login, logout, me. Session-based auth via http-only cookie."""
from fastapi import APIRouter, Request, Response

from rewards.core.config import get_settings
from rewards.core.exceptions import AuthenticationError
from rewards.core.logging_config import get_logger
from rewards.core.security import hash_password, verify_password
from rewards.routers.deps import CurrentUser, DbSession, set_session_cookie
from rewards.schemas.common import MessageOutSchema
from rewards.schemas.user import (
    AuthUserOutSchema,
    CurrentUserOutSchema,
    LoginSchema,
    SignupSchema,
    UserOutSchema,
)
from rewards.services import accounting, sessions

router = APIRouter(prefix="/api/auth", tags=["auth"])
settings = get_settings()
logger = get_logger(__name__)

SESSION_MAX_AGE = 60 * 60 * 24 * settings.session_ttl_days


@router.post("/signup", response_model=AuthUserOutSchema)
async def signup(body: SignupSchema, response: Response, db: DbSession):
    """Create the account, apply the referral code, log the user in."""
    user = await accounting.register_user(
        db,
        username=body.username,
        email=body.email,
        password_hash=hash_password(body.password),
        referred_by=body.referred_by,
    )

    token, _ = await sessions.create_session(db, user.id)
    set_session_cookie(response, settings.session_cookie_name, token, SESSION_MAX_AGE)

    return AuthUserOutSchema(
        user=UserOutSchema.model_validate(user),
        message="Registration successful",
    )


@router.post("/login", response_model=AuthUserOutSchema)
async def login(body: LoginSchema, response: Response, db: DbSession):
    user = await accounting.get_user_by_email(db, body.email)
    if user is None or not verify_password(body.password, user.password_hash):
        logger.info("login_failed")
        raise AuthenticationError("Invalid credentials")

    token, _ = await sessions.create_session(db, user.id)
    set_session_cookie(response, settings.session_cookie_name, token, SESSION_MAX_AGE)

    logger.info("login_succeeded", user_id=user.id)
    return AuthUserOutSchema(
        user=UserOutSchema.model_validate(user),
        message="Login successful",
    )


@router.post("/logout", response_model=MessageOutSchema)
async def logout(request: Request, response: Response, current_user: CurrentUser, db: DbSession):
    await sessions.delete_session(db, request.cookies.get(settings.session_cookie_name))
    # path must match the one used in set_cookie()
    response.delete_cookie(settings.session_cookie_name, path="/")
    return MessageOutSchema(message="Logout successful")


@router.get("/me", response_model=CurrentUserOutSchema)
async def me(current_user: CurrentUser):
    return CurrentUserOutSchema(user=UserOutSchema.model_validate(current_user))
