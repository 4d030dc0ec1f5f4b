"""
Trend Schemas
=============
Output of the trend engine, shaped for the trends chart.
"""

from __future__ import annotations

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field

Trend = Literal["improving", "declining", "stable"]

WINDOW_DAYS: dict[str, int] = {"week": 7, "month": 30}


class TrendPoint(BaseModel):
    """One calendar day in the window. Days without check-ins are kept."""

    date: date
    label: str = Field(..., description="Short chart label, e.g. 'Oct 19'.")
    average_mood: Optional[float] = Field(
        default=None,
        description="Recency-weighted mean of the day's scores; null on empty days.",
    )
    entry_count: int = 0
    emoji: Optional[str] = Field(
        default=None,
        description="Chart marker for average_mood; null on empty days.",
    )


class TrendReport(BaseModel):
    """Series plus summary statistics for one reporting window."""

    window_days: int
    window_start: date
    window_end: date
    series: list[TrendPoint]
    overall_average: float = Field(
        ...,
        description="Recency-weighted mean of the non-empty days; 0 when there are none.",
    )
    trend: Trend
    trend_message: str
    description: Optional[str] = Field(
        default=None,
        description="Mood band for overall_average, e.g. 'Positive'. Null without data.",
    )
    total_entries: int
