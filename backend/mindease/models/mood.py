"""
Mood Check-in Schemas
=====================
Pydantic models for mood check-ins. These are the contract between the
display client, the history store and the trend engine.

Key design decisions:
- MoodEntry is frozen. An entry is written once by the check-in flow and
  never edited afterwards; the history is an append-only log.
- emoji must be a key of MOOD_VALUES. An entry with an unknown emoji
  cannot be constructed, so the trend engine never has to guess.
- reflection and affirmation travel together. Both present or both absent,
  and when present the provenance says which path produced them.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from mindease.services.mood_scorer import MOOD_VALUES, is_known_emoji

# ---------------------------------------------------------------------------
# Allowed values
# ---------------------------------------------------------------------------

MoodCategory = Literal[
    "sad",
    "anxious",
    "angry",
    "happy",
    "tired",
    "confused",
    "excited",
    "peaceful",
    "neutral",
]

MOOD_CATEGORIES: tuple[str, ...] = (
    "sad",
    "anxious",
    "angry",
    "happy",
    "tired",
    "confused",
    "excited",
    "peaceful",
    "neutral",
)

Provenance = Literal["remote", "fallback"]

MAX_MOOD_TEXT_LENGTH = 1000

# Keys written by the first (browser-only) version of the app.
_LEGACY_FIELD_NAMES = {
    "date": "timestamp",
    "mood": "mood_text",
    "response": "reflection",
}


def _validate_emoji(value: str) -> str:
    if not is_known_emoji(value):
        raise ValueError(
            f"Unknown mood emoji {value!r}; expected one of: {', '.join(MOOD_VALUES)}"
        )
    return value


# ---------------------------------------------------------------------------
# Generated response
# ---------------------------------------------------------------------------

class GeneratedResponse(BaseModel):
    """A reflection/affirmation pair and where it came from."""

    model_config = ConfigDict(frozen=True)

    reflection: str = Field(..., min_length=1)
    affirmation: str = Field(..., min_length=1)
    provenance: Provenance


# ---------------------------------------------------------------------------
# Stored entry
# ---------------------------------------------------------------------------

class MoodEntry(BaseModel):
    """One check-in as stored in the history."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Creation-time derived id (epoch milliseconds).")
    timestamp: datetime
    mood_text: str
    emoji: str
    reflection: Optional[str] = None
    affirmation: Optional[str] = None
    provenance: Optional[Provenance] = None

    @model_validator(mode="before")
    @classmethod
    def _accept_legacy_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for old, new in _LEGACY_FIELD_NAMES.items():
            if old in data and new not in data:
                data[new] = data.pop(old)
        # Older records never recorded where the text came from.
        if data.get("reflection") and data.get("affirmation") and not data.get("provenance"):
            data["provenance"] = "fallback"
        return data

    @field_validator("emoji")
    @classmethod
    def _emoji_in_table(cls, value: str) -> str:
        return _validate_emoji(value)

    @field_validator("timestamp")
    @classmethod
    def _timestamp_is_aware(cls, value: datetime) -> datetime:
        # Naive timestamps are UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @model_validator(mode="after")
    def _pair_is_complete(self) -> "MoodEntry":
        has_reflection = bool(self.reflection)
        has_affirmation = bool(self.affirmation)
        if has_reflection != has_affirmation:
            raise ValueError("reflection and affirmation must be both present or both absent")
        if has_reflection and self.provenance is None:
            raise ValueError("provenance is required when a response is attached")
        if not has_reflection and self.provenance is not None:
            raise ValueError("provenance given without a response")
        return self


# ---------------------------------------------------------------------------
# Request / response
# ---------------------------------------------------------------------------

class MoodCheckinRequest(BaseModel):
    """Payload the display client sends when the user completes a check-in."""

    mood_text: str = Field(
        ...,
        max_length=MAX_MOOD_TEXT_LENGTH,
        description="How the user is feeling, in their own words.",
    )
    emoji: str = Field(
        ...,
        description="Selected mood emoji. Must be one of the scored emojis.",
    )

    @field_validator("mood_text")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("mood_text must not be blank")
        return value

    @field_validator("emoji")
    @classmethod
    def _emoji_in_table(cls, value: str) -> str:
        return _validate_emoji(value)


class MoodEntryList(BaseModel):
    """History listing, newest first."""

    entries: list[MoodEntry]
    total: int
