# ==========================================================
# campaign/crud.py
# ==========================================================
from decimal import Decimal
from typing import Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from content.models import ContentSubmission
from core.config import Settings
from rewards.models import RewardClaim
from social.models import SocialAccount
from .models import CampaignParticipation
from .schemas import CampaignAnalytics, DashboardStats


# ==========================================================
# ✅ PARTICIPATION
# ==========================================================
async def create_participation(db: AsyncSession, user_id: int, campaign_name: str) -> CampaignParticipation:
    participation = CampaignParticipation(user_id=user_id, campaign_name=campaign_name)
    db.add(participation)
    await db.commit()
    await db.refresh(participation)
    return participation


async def get_participation(
    db: AsyncSession, user_id: int, campaign_name: str
) -> Optional[CampaignParticipation]:
    result = await db.execute(
        select(CampaignParticipation).where(
            CampaignParticipation.user_id == user_id,
            CampaignParticipation.campaign_name == campaign_name,
        )
    )
    return result.scalar_one_or_none()


async def record_activity(
    db: AsyncSession,
    user_id: int,
    campaign_name: str,
    content: int = 0,
    rewards: int = 0,
) -> None:
    """Bump the participation counters; users without a participation row are skipped.

    Does not commit, so the caller's commit covers it.
    """
    participation = await get_participation(db, user_id, campaign_name)
    if participation is None:
        return
    participation.content_count = (participation.content_count or 0) + content
    participation.rewards_claimed = (participation.rewards_claimed or 0) + rewards


# ==========================================================
# ✅ DASHBOARD STATS
# ==========================================================
async def get_dashboard_stats(db: AsyncSession, user_id: int, campaign_name: str) -> DashboardStats:
    accounts = (
        await db.execute(
            select(SocialAccount)
            .where(SocialAccount.user_id == user_id)
            .order_by(SocialAccount.created_at.desc(), SocialAccount.id.desc())
        )
    ).scalars().all()
    submissions = (
        await db.execute(select(ContentSubmission).where(ContentSubmission.user_id == user_id))
    ).scalars().all()
    claims_count = (
        await db.execute(select(func.count(RewardClaim.id)).where(RewardClaim.user_id == user_id))
    ).scalar_one()
    participation = await get_participation(db, user_id, campaign_name)

    primary = next((a for a in accounts if a.platform == "instagram"), None)
    if primary is None and accounts:
        primary = accounts[0]

    followers, engagement = 0, Decimal("0")
    if primary is not None:
        followers = primary.followers_count or 0
        engagement = primary.engagement_rate or Decimal("0")

    return DashboardStats(
        followers=followers,
        engagement=engagement,
        content_submitted=len(submissions),
        content_approved=len([s for s in submissions if s.is_approved]),
        rewards_claimed=claims_count,
        campaign_status=participation.status if participation else "active",
    )


# ==========================================================
# ✅ CAMPAIGN ANALYTICS
# ==========================================================
async def _count(db: AsyncSession, column) -> int:
    return (await db.execute(select(func.count(column)))).scalar_one()


async def get_campaign_analytics(db: AsyncSession, settings: Settings) -> CampaignAnalytics:
    return CampaignAnalytics(
        total_participants=await _count(db, CampaignParticipation.id),
        total_content_submissions=await _count(db, ContentSubmission.id),
        total_rewards_claimed=await _count(db, RewardClaim.id),
        target_participants=settings.target_participants,
        target_content=settings.target_content,
    )
