"""Pydantic schemas for the admin panel API."""
from rewards.schemas.common import CamelModel


class AdminLoginSchema(CamelModel):
    username: str
    password: str


class AdminOutSchema(CamelModel):
    id: int
    username: str


class AdminAuthOutSchema(CamelModel):
    admin: AdminOutSchema
    message: str


class CurrentAdminOutSchema(CamelModel):
    admin: AdminOutSchema
