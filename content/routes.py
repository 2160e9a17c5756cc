from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, get_settings
from core.database import get_db
from users.sessions import require_user_id
from . import crud, schemas

router = APIRouter(prefix="/api/content", tags=["Content"])


@router.post("/submit")
async def submit_content(
    body: schemas.ContentSubmit,
    user_id: int = Depends(require_user_id),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    submission = await crud.submit_content(
        db,
        user_id,
        body.url,
        body.hashtags,
        auto_approve=settings.auto_approve,
        campaign_name=settings.campaign_name,
    )
    if submission.is_approved:
        message = "Content submitted and approved successfully"
    else:
        message = "Content submitted and pending review"
    return {
        "success": True,
        "message": message,
        "submission": schemas.ContentSubmissionResponse.model_validate(submission),
    }


@router.get("/submissions")
async def list_submissions(
    user_id: int = Depends(require_user_id),
    db: AsyncSession = Depends(get_db),
):
    submissions = await crud.get_submissions(db, user_id)
    return {
        "success": True,
        "submissions": [schemas.ContentSubmissionResponse.model_validate(s) for s in submissions],
    }
