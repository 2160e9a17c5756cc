from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, get_settings
from core.database import get_db
from users.sessions import require_user_id
from . import crud, schemas

router = APIRouter(prefix="/api/social", tags=["Social Accounts"])


@router.post("/connect")
async def connect_account(
    body: schemas.SocialAccountConnect,
    user_id: int = Depends(require_user_id),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    account = await crud.connect_social_account(db, user_id, body, settings)
    return {
        "success": True,
        "message": "Social account connected successfully",
        "account": schemas.SocialAccountResponse.model_validate(account),
    }


@router.get("/accounts")
async def list_accounts(
    user_id: int = Depends(require_user_id),
    db: AsyncSession = Depends(get_db),
):
    accounts = await crud.get_social_accounts(db, user_id)
    return {
        "success": True,
        "accounts": [schemas.SocialAccountResponse.model_validate(a) for a in accounts],
    }
