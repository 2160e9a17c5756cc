import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, get_settings
from core.database import get_db
from core.exceptions import NotFoundError
from . import crud, schemas, sessions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/send-otp")
async def send_otp(
    body: schemas.OTPRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    otp = await crud.generate_otp(db, body.phone_number, settings)
    # SMS delivery is not wired up; outside production the code is echoed back instead.
    if settings.is_production:
        logger.info("OTP issued for %s", body.phone_number)
        return {"success": True, "message": "OTP sent successfully"}

    logger.info("OTP for %s: %s", body.phone_number, otp)
    return {"success": True, "message": "OTP sent successfully", "otp": otp}


@router.post("/verify-otp")
async def verify_otp(
    body: schemas.OTPVerify,
    request: Request,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    user, _ = await crud.verify_otp(db, body.phone_number, body.otp, settings.campaign_name)
    await sessions.login(request, db, user, settings)
    return {
        "success": True,
        "message": "OTP verified successfully",
        "user": schemas.UserResponse.model_validate(user),
    }


@router.get("/user")
async def current_user(
    user_id: int = Depends(sessions.require_user_id),
    db: AsyncSession = Depends(get_db),
):
    user = await crud.get_user(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    return {"success": True, "user": schemas.UserResponse.model_validate(user)}


@router.post("/logout")
async def logout(
    request: Request,
    user_id: int = Depends(sessions.require_user_id),
    db: AsyncSession = Depends(get_db),
):
    await sessions.logout(request, db)
    return {"success": True, "message": "Logged out successfully"}
