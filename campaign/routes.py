from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, get_settings
from core.database import get_db
from users.sessions import require_user_id
from . import crud

router = APIRouter(prefix="/api", tags=["Campaign"])


@router.get("/dashboard/stats")
async def dashboard_stats(
    user_id: int = Depends(require_user_id),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    stats = await crud.get_dashboard_stats(db, user_id, settings.campaign_name)
    return {"success": True, "stats": stats}


@router.get("/campaign/analytics")
async def campaign_analytics(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    analytics = await crud.get_campaign_analytics(db, settings)
    return {"success": True, "analytics": analytics}
