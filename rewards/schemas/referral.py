"""Pydantic schemas for the referral dashboard."""
from datetime import datetime

from rewards.schemas.common import CamelModel


class ReferredUserSchema(CamelModel):
    id: int
    username: str
    wallet_connected: bool
    created_at: datetime | None = None


class ReferralOutSchema(CamelModel):
    id: int
    referrer_id: int
    referred_user_id: int
    points_earned: int
    created_at: datetime | None = None
    referred_user: ReferredUserSchema


class ReferralSummaryOutSchema(CamelModel):
    referrals: list[ReferralOutSchema]
    referral_count: int
    referral_code: str
    total_earnings: int
