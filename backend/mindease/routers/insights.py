"""
Insights Router
===============
GET /api/v1/insights/trends?window=week|month  Mood trend for the chart.

Returns one point per calendar day in the window (7 or 30 days ending
today in ``display_timezone``), including days without check-ins, plus the
recency-weighted overall average and the recent trend direction. All the
maths lives in the trend service; this router only loads the history and
picks ``now``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone, tzinfo
from typing import Literal
from zoneinfo import ZoneInfo

from fastapi import APIRouter, HTTPException, Query, status

from mindease.config import get_settings
from mindease.db.history import HistoryStoreError, get_mood_history
from mindease.models.trends import WINDOW_DAYS, TrendReport
from mindease.services.trends import aggregate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/insights", tags=["insights"])


def _display_zone(name: str) -> tzinfo:
    # UTC needs no tz database
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


@router.get(
    "/trends",
    response_model=TrendReport,
    status_code=status.HTTP_200_OK,
    summary="Get mood trends",
    description=(
        "Daily recency-weighted mood averages for the last week or month, with "
        "an overall average and an improving / declining / stable trend. "
        "New users get a full series of empty days."
    ),
)
async def get_mood_trends(
    window: Literal["week", "month"] = Query(default="week"),
) -> TrendReport:
    settings = get_settings()
    now = datetime.now(_display_zone(settings.display_timezone))

    try:
        entries = get_mood_history().entries()
    except HistoryStoreError:
        logger.exception("Failed to load mood history for trends")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"message": "Failed to load mood history", "code": "db_error"},
        )

    return aggregate(entries, WINDOW_DAYS[window], now)
