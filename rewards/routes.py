from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, get_settings
from core.database import get_db
from users.sessions import require_user_id
from . import crud, schemas

router = APIRouter(prefix="/api/rewards", tags=["Rewards"])


@router.post("/claim")
async def claim_reward(
    body: schemas.ClaimRequest,
    user_id: int = Depends(require_user_id),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    claim = await crud.claim_reward(
        db,
        user_id,
        body.address,
        settings.campaign_name,
        content_submission_id=body.content_submission_id,
    )
    return {
        "success": True,
        "message": "Reward claimed successfully",
        "claim": schemas.RewardClaimResponse.model_validate(claim),
    }


@router.get("/claims")
async def list_claims(
    user_id: int = Depends(require_user_id),
    db: AsyncSession = Depends(get_db),
):
    claims = await crud.get_claims(db, user_id)
    return {
        "success": True,
        "claims": [schemas.RewardClaimResponse.model_validate(c) for c in claims],
    }


@router.get("/claims/{claim_id}")
async def track_claim(
    claim_id: int,
    user_id: int = Depends(require_user_id),
    db: AsyncSession = Depends(get_db),
):
    claim = await crud.get_claim_for_user(db, user_id, claim_id)
    return {"success": True, "claim": schemas.RewardClaimResponse.model_validate(claim)}
