"""User routes: wallet connection."""
from fastapi import APIRouter

from rewards.routers.deps import CurrentUser, DbSession
from rewards.schemas.user import AuthUserOutSchema, UserOutSchema, WalletConnectSchema
from rewards.services import accounting

router = APIRouter(prefix="/api/user", tags=["user"])


@router.post("/connect-wallet", response_model=AuthUserOutSchema)
async def connect_wallet(body: WalletConnectSchema, current_user: CurrentUser, db: DbSession):
    """Save the wallet address; first connection earns the wallet bonus."""
    user = await accounting.connect_wallet(db, current_user.id, body.wallet_address)
    return AuthUserOutSchema(
        user=UserOutSchema.model_validate(user),
        message="Wallet connected successfully",
    )
