"""
Tests for GET /api/v1/insights/trends
=====================================
Covers:
- Default window is a week: 7 points ending today
- window=month: 30 points
- Days without check-ins are present with a null average
- Summary fields: overall_average, trend, trend_message, description
- New user: full empty series, overall 0, stable, still 200
- Unknown window → 422
- Storage failure → 500 with code db_error

Run: pytest tests/test_insights.py -v
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from mindease.db.history import HistoryStoreError, JsonFileHistoryStore, MoodHistory
from mindease.models.mood import MoodEntry

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

def _days_ago(n: int) -> datetime:
    # Noon keeps the entry on the same UTC calendar day.
    today = datetime.now(timezone.utc).replace(hour=12, minute=0, second=0, microsecond=0)
    return today - timedelta(days=n)


@pytest.fixture
def history(tmp_path) -> MoodHistory:
    return MoodHistory(JsonFileHistoryStore(tmp_path))


@pytest.fixture
def client() -> TestClient:
    from mindease.main import app
    return TestClient(app)


def _seed(history: MoodHistory, rows: list[tuple[int, str]]) -> None:
    for i, (days_ago, emoji) in enumerate(rows):
        history.append(MoodEntry(
            id=str(i + 1),
            timestamp=_days_ago(days_ago),
            mood_text="seeded",
            emoji=emoji,
        ))


def _get(client: TestClient, history, **params):
    with patch("mindease.routers.insights.get_mood_history", return_value=history):
        return client.get("/api/v1/insights/trends", params=params)


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestTrendsEndpoint:

    def test_default_week(self, client, history):
        _seed(history, [(0, "😊")])
        resp = _get(client, history)

        assert resp.status_code == 200
        data = resp.json()
        assert data["window_days"] == 7
        assert len(data["series"]) == 7
        assert data["window_end"] == _days_ago(0).date().isoformat()
        assert data["window_start"] == _days_ago(6).date().isoformat()
        assert data["series"][-1]["entry_count"] == 1

    def test_month(self, client, history):
        _seed(history, [(20, "😐"), (1, "😊")])
        data = _get(client, history, window="month").json()

        assert data["window_days"] == 30
        assert len(data["series"]) == 30
        assert data["total_entries"] == 2

    def test_empty_days_are_null(self, client, history):
        _seed(history, [(5, "😞"), (0, "😊")])
        data = _get(client, history).json()

        averages = [point["average_mood"] for point in data["series"]]
        assert averages[1] == 2.0
        assert averages[-1] == 5.0
        assert averages.count(None) == 5

    def test_summary_fields(self, client, history):
        _seed(history, [(3, "😭"), (2, "😭"), (0, "😊")])
        data = _get(client, history).json()

        assert data["trend"] == "improving"
        assert "upward" in data["trend_message"]
        assert data["overall_average"] == pytest.approx((1 + 1.05 + 5 * 1.1) / 3.15)
        assert data["description"] == "Below Average"

    def test_new_user(self, client, history):
        data = _get(client, history).json()

        assert len(data["series"]) == 7
        assert data["overall_average"] == 0.0
        assert data["trend"] == "stable"
        assert data["description"] is None
        assert data["total_entries"] == 0

    @pytest.mark.parametrize("window", ["year", "7", "WEEK"])
    def test_unknown_window(self, client, history, window: str):
        resp = _get(client, history, window=window)
        assert resp.status_code == 422

    def test_storage_failure(self, client):
        broken = MagicMock()
        broken.entries.side_effect = HistoryStoreError("unreadable")
        resp = _get(client, broken)

        assert resp.status_code == 500
        assert resp.json()["detail"]["code"] == "db_error"
