"""Dashboard statistics route."""

import logging
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_storage
from api.models import StatsResponse
from api.security import require_user
from domain.model.user import User
from port.storage import Storage
from services.stats_service import get_stats, start_of_week

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/stats", tags=["stats"])

DEFAULT_STATS_USER_ID = 1


@router.get("", response_model=StatsResponse)
async def get_stats_endpoint(
    user_id: int = Query(DEFAULT_STATS_USER_ID, alias="userId"),
    start_date: Optional[datetime] = Query(None, alias="startDate", description="Defaults to this Monday 00:00"),
    end_date: Optional[datetime] = Query(None, alias="endDate", description="Defaults to now"),
    current_user: User = Depends(require_user),
    storage: Storage = Depends(get_storage),
):
    """Get hours, billable amount, utilization and breakdowns for a date range."""
    now = datetime.now(timezone.utc)
    if start_date is None:
        start_date = start_of_week(now)
    if end_date is None:
        end_date = now

    stats = get_stats(storage, user_id, start_date, end_date)

    logger.info("Stats computed", extra={
        "userId": user_id,
        "startDate": start_date.isoformat(),
        "endDate": end_date.isoformat(),
        "weeklyHours": stats.weekly_hours,
    })
    return StatsResponse(**asdict(stats))
