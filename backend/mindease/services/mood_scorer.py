"""
Mood Scorer
===========
Maps a check-in emoji to a numeric intensity on a 1-5 scale.

This is data, not logic: MOOD_VALUES is the single source of truth for
which emojis the app accepts and how each one scores. Add a row to support
a new emoji; anything not in the table scores DEFAULT_MOOD_VALUE.

    😊  5    Happy      very positive
    😐  3    Neutral    baseline
    😞  2    Sad        below baseline
    😭  1    Very sad   low
    😠  2.5  Angry      slightly below baseline (energising but negative)
"""

from __future__ import annotations

MOOD_VALUES: dict[str, float] = {
    "😊": 5,
    "😐": 3,
    "😞": 2,
    "😭": 1,
    "😠": 2.5,
}

DEFAULT_MOOD_VALUE: float = 3

# (lower bound, description) checked top-down
_DESCRIPTION_BANDS: tuple[tuple[float, str], ...] = (
    (4.5, "Very Positive"),
    (3.5, "Positive"),
    (2.5, "Neutral"),
    (1.5, "Below Average"),
)

_EMOJI_BANDS: tuple[tuple[float, str], ...] = (
    (4.5, "😊"),
    (3.5, "😐"),
    (2.5, "😞"),
    (1.5, "😭"),
)


def score(emoji: str) -> float:
    """Return the intensity for *emoji*, or DEFAULT_MOOD_VALUE if unknown."""
    return MOOD_VALUES.get(emoji, DEFAULT_MOOD_VALUE)


def is_known_emoji(emoji: str) -> bool:
    return emoji in MOOD_VALUES


def describe_mood(value: float) -> str:
    """Human-readable band for an (averaged) mood value."""
    for lower, description in _DESCRIPTION_BANDS:
        if value >= lower:
            return description
    return "Needs Support"


def emoji_for_value(value: float) -> str:
    """Pick the emoji shown next to an averaged mood value on the chart."""
    for lower, emoji in _EMOJI_BANDS:
        if value >= lower:
            return emoji
    return "😠"
