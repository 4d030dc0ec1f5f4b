"""
Tests for the mood scorer
=========================
Covers:
- The shipped emoji table and its default
- Purity: repeated calls give the same value
- Mood description bands and chart emoji bands

Run: pytest tests/test_mood_scorer.py -v
"""

from __future__ import annotations

import pytest

from mindease.services.mood_scorer import (
    DEFAULT_MOOD_VALUE,
    MOOD_VALUES,
    describe_mood,
    emoji_for_value,
    is_known_emoji,
    score,
)


class TestScore:

    @pytest.mark.parametrize(
        ("emoji", "expected"),
        [("😊", 5), ("😐", 3), ("😞", 2), ("😭", 1), ("😠", 2.5)],
    )
    def test_shipped_table(self, emoji: str, expected: float):
        assert score(emoji) == expected

    def test_table_has_five_entries_on_scale(self):
        assert len(MOOD_VALUES) == 5
        assert all(1 <= value <= 5 for value in MOOD_VALUES.values())

    @pytest.mark.parametrize("emoji", ["🙂", "", "happy", "😀"])
    def test_unknown_emoji_scores_default(self, emoji: str):
        assert score(emoji) == DEFAULT_MOOD_VALUE == 3
        assert is_known_emoji(emoji) is False

    def test_pure(self):
        assert [score("😠") for _ in range(5)] == [2.5] * 5


class TestBands:

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (5, "Very Positive"),
            (4.5, "Very Positive"),
            (4.0, "Positive"),
            (3.0, "Neutral"),
            (2.5, "Neutral"),
            (2.0, "Below Average"),
            (1.0, "Needs Support"),
        ],
    )
    def test_describe_mood(self, value: float, expected: str):
        assert describe_mood(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(4.8, "😊"), (3.6, "😐"), (2.6, "😞"), (1.6, "😭"), (1.0, "😠")],
    )
    def test_emoji_for_value(self, value: float, expected: str):
        assert emoji_for_value(value) == expected
