import logging
import secrets
from datetime import datetime, timedelta
from typing import Optional, Tuple

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from campaign.crud import create_participation
from core.config import Settings
from core.database import utcnow
from core.exceptions import InvalidOtpError
from .models import OtpVerification, User

logger = logging.getLogger(__name__)


# ==========================================================
# ✅ USERS
# ==========================================================
async def get_user(db: AsyncSession, user_id: int) -> Optional[User]:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_phone(db: AsyncSession, phone_number: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.phone_number == phone_number))
    return result.scalar_one_or_none()


async def create_user(db: AsyncSession, phone_number: str, is_verified: bool = False) -> User:
    db_user = User(phone_number=phone_number, is_verified=is_verified)
    db.add(db_user)
    await db.commit()
    await db.refresh(db_user)
    return db_user


# ==========================================================
# ✅ OTP
# ==========================================================
def _new_code(phone_number: str, settings: Settings) -> str:
    if phone_number == settings.test_phone_number:
        return settings.test_otp
    return str(100000 + secrets.randbelow(900000))


async def generate_otp(db: AsyncSession, phone_number: str, settings: Settings) -> str:
    """Store a fresh code for ``phone_number`` and return it.

    Delivery is left to the caller; with ``invalidate_previous_otps`` set,
    codes issued earlier for the same number stop being accepted.
    """
    now = utcnow()
    # Expired codes can never verify again.
    await db.execute(
        delete(OtpVerification).where(
            OtpVerification.phone_number == phone_number,
            OtpVerification.expires_at <= now,
        )
    )

    if settings.invalidate_previous_otps:
        await db.execute(
            update(OtpVerification)
            .where(
                OtpVerification.phone_number == phone_number,
                OtpVerification.is_used.is_(False),
            )
            .values(is_used=True)
        )

    otp = _new_code(phone_number, settings)
    db_otp = OtpVerification(
        phone_number=phone_number,
        otp=otp,
        expires_at=now + timedelta(minutes=settings.otp_ttl_minutes),
    )
    db.add(db_otp)
    await db.commit()
    await db.refresh(db_otp)
    return otp


async def get_valid_otp(
    db: AsyncSession, phone_number: str, otp: str, now: Optional[datetime] = None
) -> Optional[OtpVerification]:
    now = now or utcnow()
    result = await db.execute(
        select(OtpVerification)
        .where(
            OtpVerification.phone_number == phone_number,
            OtpVerification.otp == otp,
            OtpVerification.is_used.is_(False),
            OtpVerification.expires_at > now,
        )
        .order_by(OtpVerification.created_at.desc(), OtpVerification.id.desc())
    )
    return result.scalars().first()


async def mark_otp_used(db: AsyncSession, otp_id: int) -> bool:
    # Guarded on is_used so two concurrent verifications cannot both consume it.
    result = await db.execute(
        update(OtpVerification)
        .where(OtpVerification.id == otp_id, OtpVerification.is_used.is_(False))
        .values(is_used=True)
    )
    await db.commit()
    return result.rowcount == 1


async def verify_otp(
    db: AsyncSession,
    phone_number: str,
    otp: str,
    campaign_name: str,
    now: Optional[datetime] = None,
) -> Tuple[User, bool]:
    """Consume a matching code and log the phone number in.

    Returns the user and whether it was created by this call. New users also
    get their campaign participation row.
    """
    otp_record = await get_valid_otp(db, phone_number, otp, now=now)
    if otp_record is None or not await mark_otp_used(db, otp_record.id):
        raise InvalidOtpError()

    user = await get_user_by_phone(db, phone_number)
    if user is None:
        user = await create_user(db, phone_number, is_verified=True)
        await create_participation(db, user.id, campaign_name)
        logger.info("New participant registered: user_id=%s", user.id)
        return user, True

    user.is_verified = True
    await db.commit()
    await db.refresh(user)
    return user, False
