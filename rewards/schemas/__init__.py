from rewards.schemas.admin import AdminAuthOutSchema, AdminLoginSchema, AdminOutSchema, CurrentAdminOutSchema
from rewards.schemas.common import MessageOutSchema
from rewards.schemas.referral import ReferralOutSchema, ReferralSummaryOutSchema, ReferredUserSchema
from rewards.schemas.task import (
    CompleteTaskOutSchema,
    TaskCreateSchema,
    TaskOutSchema,
    TaskUpdateSchema,
    UserTaskOutSchema,
    UserTaskRecordSchema,
)
from rewards.schemas.user import (
    AuthUserOutSchema,
    CurrentUserOutSchema,
    LoginSchema,
    SignupSchema,
    UserOutSchema,
    WalletConnectSchema,
)

__all__ = [
    "AdminAuthOutSchema",
    "AdminLoginSchema",
    "AdminOutSchema",
    "AuthUserOutSchema",
    "CompleteTaskOutSchema",
    "CurrentAdminOutSchema",
    "CurrentUserOutSchema",
    "LoginSchema",
    "MessageOutSchema",
    "ReferralOutSchema",
    "ReferralSummaryOutSchema",
    "ReferredUserSchema",
    "SignupSchema",
    "TaskCreateSchema",
    "TaskOutSchema",
    "TaskUpdateSchema",
    "UserOutSchema",
    "UserTaskOutSchema",
    "UserTaskRecordSchema",
    "WalletConnectSchema",
]
