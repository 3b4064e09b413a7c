"""Auth guards: resolve the session cookie to a user or an admin."""
from typing import Annotated

from fastapi import Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from rewards.core.config import get_settings
from rewards.core.exceptions import AuthenticationError
from rewards.db.session import get_db
from rewards.models.admin import Admin
from rewards.models.user import User
from rewards.services import sessions

settings = get_settings()

DbSession = Annotated[AsyncSession, Depends(get_db)]


def set_session_cookie(response: Response, key: str, token: str, max_age: int) -> None:
    response.set_cookie(
        key=key,
        value=token,
        max_age=max_age,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        path="/",
    )


async def get_current_user(request: Request, db: DbSession) -> User:
    """Return the user behind the session cookie; 401 otherwise."""
    session = await sessions.get_session(db, request.cookies.get(settings.session_cookie_name))
    if session is None:
        raise AuthenticationError()

    user = await db.get(User, session.user_id)
    if user is None:
        raise AuthenticationError()
    return user


async def get_current_admin(request: Request, db: DbSession) -> Admin:
    session = await sessions.get_admin_session(db, request.cookies.get(settings.admin_cookie_name))
    if session is None:
        raise AuthenticationError()

    admin = await db.get(Admin, session.admin_id)
    if admin is None:
        raise AuthenticationError()
    return admin


CurrentUser = Annotated[User, Depends(get_current_user)]
CurrentAdmin = Annotated[Admin, Depends(get_current_admin)]
