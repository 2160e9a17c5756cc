# ==========================================================
# rewards/crud.py
# ==========================================================
import logging
import secrets
import time
from datetime import timedelta
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from campaign.crud import record_activity
from content.crud import get_latest_approved_submission, get_submission_for_user
from core.database import utcnow
from core.exceptions import BusinessRuleError, NotFoundError
from .models import RewardClaim
from .schemas import ClaimStatus, DeliveryAddress

logger = logging.getLogger(__name__)

REWARD_TYPE = "glycolic_gloss_pack"
REWARD_VALUE = Decimal("500.00")
DEFAULT_CARRIER = "Delhivery"
DELIVERY_DAYS = 7

# Fulfillment only ever moves a claim forward through this order.
STATUS_ORDER = [
    ClaimStatus.PENDING,
    ClaimStatus.CONFIRMED,
    ClaimStatus.SHIPPED,
    ClaimStatus.DELIVERED,
]


def generate_tracking_id() -> str:
    return f"GG{int(time.time() * 1000)}{secrets.randbelow(1000)}"


# ==========================================================
# ✅ CLAIM REWARD
# ==========================================================
async def get_claim_for_campaign(db: AsyncSession, user_id: int, campaign_name: str) -> Optional[RewardClaim]:
    result = await db.execute(
        select(RewardClaim).where(
            RewardClaim.user_id == user_id,
            RewardClaim.campaign_name == campaign_name,
        )
    )
    return result.scalar_one_or_none()


async def claim_reward(
    db: AsyncSession,
    user_id: int,
    address: DeliveryAddress,
    campaign_name: str,
    content_submission_id: Optional[int] = None,
) -> RewardClaim:
    if content_submission_id is not None:
        submission = await get_submission_for_user(db, user_id, content_submission_id)
        if submission is None:
            raise NotFoundError("Content submission not found")
        if not submission.is_approved:
            raise BusinessRuleError(
                "Selected content has not been approved yet.", code="NO_APPROVED_CONTENT"
            )
    else:
        submission = await get_latest_approved_submission(db, user_id)
        if submission is None:
            raise BusinessRuleError(
                "No approved content found. Please submit and get content approved first.",
                code="NO_APPROVED_CONTENT",
            )

    if await get_claim_for_campaign(db, user_id, campaign_name):
        raise BusinessRuleError("Reward already claimed", code="DUPLICATE_CLAIM")

    claim = RewardClaim(
        user_id=user_id,
        content_submission_id=submission.id,
        campaign_name=campaign_name,
        reward_type=REWARD_TYPE,
        reward_value=REWARD_VALUE,
        delivery_address=address.model_dump(by_alias=True),
        status=ClaimStatus.CONFIRMED.value,
        tracking_id=generate_tracking_id(),
        carrier_name=DEFAULT_CARRIER,
        estimated_delivery=utcnow() + timedelta(days=DELIVERY_DAYS),
    )
    db.add(claim)
    await record_activity(db, user_id, campaign_name, rewards=1)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        if await get_claim_for_campaign(db, user_id, campaign_name):
            raise BusinessRuleError("Reward already claimed", code="DUPLICATE_CLAIM")
        raise
    await db.refresh(claim)
    logger.info("Reward claimed: user_id=%s tracking_id=%s", user_id, claim.tracking_id)
    return claim


# ==========================================================
# ✅ QUERIES
# ==========================================================
async def get_claims(db: AsyncSession, user_id: int) -> List[RewardClaim]:
    result = await db.execute(
        select(RewardClaim)
        .where(RewardClaim.user_id == user_id)
        .order_by(RewardClaim.created_at.desc(), RewardClaim.id.desc())
    )
    return result.scalars().all()


async def get_claim_for_user(db: AsyncSession, user_id: int, claim_id: int) -> RewardClaim:
    result = await db.execute(
        select(RewardClaim).where(RewardClaim.id == claim_id, RewardClaim.user_id == user_id)
    )
    claim = result.scalar_one_or_none()
    if claim is None:
        raise NotFoundError("Reward claim not found")
    return claim


# ==========================================================
# ✅ FULFILLMENT STATUS UPDATES
# ==========================================================
async def update_claim_status(
    db: AsyncSession,
    claim_id: int,
    new_status: ClaimStatus,
    notes: Optional[str] = None,
) -> RewardClaim:
    """Advance a claim's shipment status; called by fulfillment, never by end users."""
    result = await db.execute(select(RewardClaim).where(RewardClaim.id == claim_id))
    claim = result.scalar_one_or_none()
    if claim is None:
        raise NotFoundError("Reward claim not found")

    new_status = ClaimStatus(new_status)
    current = ClaimStatus(claim.status)
    if STATUS_ORDER.index(new_status) <= STATUS_ORDER.index(current):
        raise BusinessRuleError(
            f"Cannot move claim from {current.value} to {new_status.value}",
            code="INVALID_STATUS_TRANSITION",
        )

    claim.status = new_status.value
    if new_status == ClaimStatus.DELIVERED:
        claim.actual_delivery = utcnow()
    if notes:
        claim.notes = notes
    await db.commit()
    await db.refresh(claim)
    logger.info("Claim %s moved %s -> %s", claim.tracking_id, current.value, new_status.value)
    return claim
