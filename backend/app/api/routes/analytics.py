from fastapi import APIRouter, Query

from app.analytics import DEFAULT_STATS_LIMIT
from app.api.deps import AnalyticsDep
from app.core.config import settings
from app.models import AnalyticsStats

router = APIRouter()


@router.get("/analytics", response_model=AnalyticsStats)
def read_analytics(
    analytics: AnalyticsDep,
    limit: int = Query(default=DEFAULT_STATS_LIMIT, ge=1, le=settings.ANALYTICS_CAPACITY),
) -> AnalyticsStats:
    """Aggregate stats over the most recent `limit` generation events."""
    return analytics.stats(limit)
