"""Analytics routes."""

from fastapi import APIRouter, Depends

from ...config import Settings
from ...models.user import User
from ...services.analytics import AnalyticsService
from ..dependencies import app_settings, require_owner

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("")
async def category_progress(
    user_id: int,
    category: str | None = None,
    settings: Settings = Depends(app_settings),
):
    """Volume growth per category, or for one category (null if none logged)."""
    result = await AnalyticsService(settings).category_progress(user_id, category)
    if result is None:
        return None
    if category:
        return result.to_dict()
    return {key: value.to_dict() for key, value in result.items()}


@router.get("/summary")
async def summary(user_id: int, settings: Settings = Depends(app_settings)):
    stats = await AnalyticsService(settings).summary(user_id)
    return stats.to_dict()


@router.get("/heatmap")
async def heatmap(user_id: int, weeks: int = 12, settings: Settings = Depends(app_settings)):
    grid = await AnalyticsService(settings).heatmap(user_id, weeks=weeks)
    return [[cell.to_dict() for cell in week] for week in grid]


@router.get("/chart")
async def chart(user_id: int, period: str = "week", settings: Settings = Depends(app_settings)):
    points = await AnalyticsService(settings).chart(user_id, period)
    return [p.to_dict() for p in points]


@router.get("/gym")
async def gym(owner: User = Depends(require_owner), settings: Settings = Depends(app_settings)):
    """Gym-wide totals for the owner dashboard."""
    stats = await AnalyticsService(settings).gym()
    return stats.to_dict()
