"""Referral routes: the current user's referral dashboard."""
from fastapi import APIRouter

from rewards.core.logging_config import get_logger
from rewards.routers.deps import CurrentUser, DbSession
from rewards.schemas.referral import ReferralSummaryOutSchema
from rewards.services import accounting

router = APIRouter(prefix="/api/referrals", tags=["referrals"])
logger = get_logger(__name__)


@router.get("", response_model=ReferralSummaryOutSchema)
async def get_referrals(current_user: CurrentUser, db: DbSession):
    summary = await accounting.referral_summary(db, current_user)
    logger.debug("referrals_listed", user_id=current_user.id, count=summary["referral_count"])
    return ReferralSummaryOutSchema.model_validate(summary)
