# ==========================================================
# content/crud.py
# ==========================================================
import logging
from typing import List, Optional
from urllib.parse import urlparse

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from campaign.crud import record_activity
from core.exceptions import BusinessRuleError, NotFoundError
from social.crud import get_account_for_platform
from social.validation import validate_social_media_url
from .models import ContentSubmission
from .schemas import ValidationStatus
from .validation import guess_content_type, missing_hashtags_message, validate_hashtags

logger = logging.getLogger(__name__)


# ==========================================================
# ✅ SUBMIT CONTENT
# ==========================================================
async def submit_content(
    db: AsyncSession,
    user_id: int,
    url: str,
    hashtags: List[str],
    auto_approve: bool = True,
    campaign_name: str = "glossy_transition",
) -> ContentSubmission:
    url_check = validate_social_media_url(url)
    if not url_check.is_valid:
        raise BusinessRuleError("Invalid social media URL", code="INVALID_URL")

    if not validate_hashtags(hashtags):
        raise BusinessRuleError(missing_hashtags_message(), code="MISSING_HASHTAGS")

    account = await get_account_for_platform(db, user_id, url_check.platform)

    if auto_approve:
        status, notes = ValidationStatus.APPROVED, "Auto-approved"
    else:
        status, notes = ValidationStatus.PENDING, None

    submission = ContentSubmission(
        user_id=user_id,
        social_account_id=account.id if account else None,
        content_url=url,
        platform=url_check.platform,
        content_type=guess_content_type(url_check.platform, urlparse(url).path),
        hashtags=list(hashtags),
        is_approved=status == ValidationStatus.APPROVED,
        approval_notes=notes,
        validation_status=status.value,
        content_data=url_check.data,
    )
    db.add(submission)
    await record_activity(db, user_id, campaign_name, content=1)
    await db.commit()
    await db.refresh(submission)
    logger.info("Content submitted: user_id=%s submission_id=%s status=%s", user_id, submission.id, status.value)
    return submission


# ==========================================================
# ✅ QUERIES
# ==========================================================
async def get_submissions(db: AsyncSession, user_id: int) -> List[ContentSubmission]:
    result = await db.execute(
        select(ContentSubmission)
        .where(ContentSubmission.user_id == user_id)
        .order_by(ContentSubmission.created_at.desc(), ContentSubmission.id.desc())
    )
    return result.scalars().all()


async def get_submission_for_user(db: AsyncSession, user_id: int, submission_id: int) -> Optional[ContentSubmission]:
    result = await db.execute(
        select(ContentSubmission).where(
            ContentSubmission.id == submission_id,
            ContentSubmission.user_id == user_id,
        )
    )
    return result.scalar_one_or_none()


async def get_latest_approved_submission(db: AsyncSession, user_id: int) -> Optional[ContentSubmission]:
    result = await db.execute(
        select(ContentSubmission)
        .where(
            ContentSubmission.user_id == user_id,
            ContentSubmission.is_approved.is_(True),
            ContentSubmission.validation_status == ValidationStatus.APPROVED.value,
        )
        .order_by(ContentSubmission.created_at.desc(), ContentSubmission.id.desc())
    )
    return result.scalars().first()


# ==========================================================
# ✅ MODERATION
# ==========================================================
async def review_submission(
    db: AsyncSession,
    submission_id: int,
    approve: bool,
    notes: Optional[str] = None,
) -> ContentSubmission:
    """Approve or reject a pending submission (used when auto-approval is off)."""
    result = await db.execute(select(ContentSubmission).where(ContentSubmission.id == submission_id))
    submission = result.scalar_one_or_none()
    if submission is None:
        raise NotFoundError("Content submission not found")
    if submission.validation_status != ValidationStatus.PENDING.value:
        raise BusinessRuleError("Content submission already reviewed", code="ALREADY_REVIEWED")

    status = ValidationStatus.APPROVED if approve else ValidationStatus.REJECTED
    submission.validation_status = status.value
    submission.is_approved = approve
    submission.approval_notes = notes
    await db.commit()
    await db.refresh(submission)
    return submission
