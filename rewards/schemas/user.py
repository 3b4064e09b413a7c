"""Pydantic schemas for users, auth and wallet requests."""
import re
from datetime import datetime

from pydantic import Field, field_validator

from rewards.schemas.common import CamelModel

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _check_email(value: str) -> str:
    value = value.strip().lower()
    if not EMAIL_RE.match(value):
        raise ValueError("invalid email address")
    return value


class UserOutSchema(CamelModel):
    """Public view of a user. Never carries the password hash."""

    id: int
    username: str
    email: str
    points: int
    wallet_address: str | None = None
    wallet_connected: bool
    referral_code: str
    referred_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SignupSchema(CamelModel):
    username: str = Field(min_length=3, max_length=255)
    email: str = Field(max_length=255)
    # bcrypt hard limit: 72 bytes
    password: str = Field(min_length=6, max_length=72)
    referred_by: str | None = Field(default=None, max_length=20)

    @field_validator("email")
    @classmethod
    def email_format(cls, v: str) -> str:
        return _check_email(v)

    @field_validator("username")
    @classmethod
    def username_strip(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 3:
            raise ValueError("username must be at least 3 characters")
        return v


class LoginSchema(CamelModel):
    email: str
    password: str = Field(min_length=6)

    @field_validator("email")
    @classmethod
    def email_format(cls, v: str) -> str:
        return _check_email(v)


class WalletConnectSchema(CamelModel):
    # length is checked by the accounting service
    wallet_address: str


class AuthUserOutSchema(CamelModel):
    user: UserOutSchema
    message: str


class CurrentUserOutSchema(CamelModel):
    user: UserOutSchema
