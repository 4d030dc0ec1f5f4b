"""
Trend Service
=============
Turns a mood history into a daily series for the trends chart.

Answers: "How has my mood looked over the last week / month, and is it
getting better?" Pure function of (history, window_days, now): nothing is
cached or persisted, so callers may memoise on that triple if they want.

Algorithm:
    1. One bucket per calendar day, ``window_days`` days ending on the
       calendar day of ``now``. Empty days stay in the series.
    2. Each entry whose local day falls in the window adds its emoji score
       to that day, in timestamp order.
    3. Day average: weights 1.0, 1.1, 1.2, ... so later check-ins in a day
       count slightly more. Empty days are null and skipped from here on.
    4. Overall average: weights 1.00, 1.05, 1.10, ... over the non-empty
       days, oldest first. 0 when there is no data.
    5. Trend: last (up to) three day averages, split with the larger half
       first; second-half mean minus first-half mean beyond +/-0.3 is
       improving/declining, otherwise stable.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from mindease.models.mood import MoodEntry
from mindease.models.trends import Trend, TrendPoint, TrendReport
from mindease.services.mood_scorer import describe_mood, emoji_for_value, score

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

SUPPORTED_WINDOWS = (7, 30)
INTRA_DAY_WEIGHT_STEP = 0.1
INTER_DAY_WEIGHT_STEP = 0.05
TREND_LOOKBACK_DAYS = 3
TREND_THRESHOLD = 0.3

TREND_MESSAGES: dict[str, str] = {
    "improving": "Your mood has been trending upward recently. Keep up the great work!",
    "declining": (
        "Your mood has been lower lately. Remember to be gentle with yourself "
        "and consider reaching out for support."
    ),
    "stable": "Your mood has been relatively stable. Consistency is a sign of emotional balance.",
}


# ---------------------------------------------------------------------------
# Buckets
# ---------------------------------------------------------------------------

@dataclass
class DailyBucket:
    date: date
    moods: list[float] = field(default_factory=list)

    @property
    def weighted_average(self) -> Optional[float]:
        return recency_weighted_mean(self.moods, INTRA_DAY_WEIGHT_STEP)


def recency_weighted_mean(values: Sequence[float], step: float) -> Optional[float]:
    """Mean of *values* with weights 1, 1+step, 1+2*step, ...; None if empty."""
    if not values:
        return None
    weights = 1 + step * np.arange(len(values))
    return float(np.average(np.asarray(values, dtype=float), weights=weights))


def classify_trend(day_averages: Sequence[float]) -> Trend:
    """Classify the direction of the most recent non-empty days."""
    recent = list(day_averages)[-TREND_LOOKBACK_DAYS:]
    if len(recent) < 2:
        return "stable"

    split = math.ceil(len(recent) / 2)
    diff = float(np.mean(recent[split:]) - np.mean(recent[:split]))

    if diff > TREND_THRESHOLD:
        return "improving"
    if diff < -TREND_THRESHOLD:
        return "declining"
    return "stable"


def build_buckets(
    history: Sequence[MoodEntry],
    window_days: int,
    now: datetime,
) -> list[DailyBucket]:
    """Bucket *history* into ``window_days`` calendar days ending today."""
    tz = _zone_of(now)
    end_day = now.date()
    start_day = end_day - timedelta(days=window_days - 1)

    buckets = [DailyBucket(date=start_day + timedelta(days=i)) for i in range(window_days)]
    if not history:
        return buckets

    frame = pd.DataFrame({
        "timestamp": pd.to_datetime([_as_utc(entry.timestamp) for entry in history], utc=True),
        "score": [float(score(entry.emoji)) for entry in history],
    })
    # Insertion order is not timestamp order when entries were backfilled.
    frame = frame.sort_values("timestamp", kind="stable")
    frame["day"] = frame["timestamp"].dt.tz_convert(tz).dt.date

    in_window = frame[(frame["day"] >= start_day) & (frame["day"] <= end_day)]
    by_day = {bucket.date: bucket for bucket in buckets}
    for day, group in in_window.groupby("day", sort=True):
        by_day[day].moods.extend(group["score"].tolist())

    logger.debug(
        "Bucketed %d of %d entries into %d days (%s..%s)",
        len(in_window), len(frame), window_days, start_day, end_day,
    )
    return buckets


def _zone_of(now: datetime) -> tzinfo:
    # Naive datetimes are treated as UTC throughout.
    return now.tzinfo or timezone.utc


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _label(day: date) -> str:
    return f"{day:%b} {day.day}"


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

def aggregate(
    history: Sequence[MoodEntry],
    window_days: int,
    now: datetime,
) -> TrendReport:
    """Build the trend report for the ``window_days`` days ending at *now*.

    Raises ValueError for a window other than 7 or 30 days.
    """
    if window_days not in SUPPORTED_WINDOWS:
        raise ValueError(f"window_days must be one of {SUPPORTED_WINDOWS}, got {window_days}")

    buckets = build_buckets(history, window_days, now)

    series: list[TrendPoint] = []
    day_averages: list[float] = []
    for bucket in buckets:
        average = bucket.weighted_average
        if average is not None:
            day_averages.append(average)
        series.append(TrendPoint(
            date=bucket.date,
            label=_label(bucket.date),
            average_mood=average,
            entry_count=len(bucket.moods),
            emoji=emoji_for_value(average) if average is not None else None,
        ))

    overall = recency_weighted_mean(day_averages, INTER_DAY_WEIGHT_STEP)
    trend = classify_trend(day_averages)

    return TrendReport(
        window_days=window_days,
        window_start=buckets[0].date,
        window_end=buckets[-1].date,
        series=series,
        overall_average=overall if overall is not None else 0.0,
        trend=trend,
        trend_message=TREND_MESSAGES[trend],
        description=describe_mood(overall) if overall is not None else None,
        total_entries=sum(point.entry_count for point in series),
    )
