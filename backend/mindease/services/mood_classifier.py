"""
Mood Classifier Service
=======================
Maps free-form mood text to one of nine mood categories by keyword match.

This runs locally and never fails. It only drives the choice of curated
fallback response, so it stays simple: lower-case the text, walk
the categories in a fixed priority order and return the first one with a
keyword that appears as a substring. No scoring across categories.

The order matters. "I'm not happy, just sad" is sad because sad is tested
first, and fallback selection tests rely on that staying put.
"""

from __future__ import annotations

import logging

from mindease.models.mood import MoodCategory

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY: MoodCategory = "neutral"

# Priority order is the order of this table. Substring match, so "down"
# also catches "downcast" and "low" catches "below"; that is accepted.
CATEGORY_KEYWORDS: tuple[tuple[MoodCategory, tuple[str, ...]], ...] = (
    ("sad", (
        "sad", "down", "depressed", "blue", "low", "empty", "hopeless",
        "lonely", "hurt", "crying", "tears", "grief", "loss", "disappointed",
        "discouraged", "heartbroken", "devastated",
    )),
    ("anxious", (
        "anxious", "worried", "stressed", "nervous", "panic", "overwhelmed",
        "tense", "restless", "uneasy", "fearful", "scared", "afraid",
        "concerned", "troubled", "frantic", "jittery",
    )),
    ("angry", (
        "angry", "frustrated", "mad", "furious", "irritated", "annoyed",
        "rage", "upset", "pissed", "livid", "bitter", "resentful", "hostile",
        "outraged", "infuriated",
    )),
    ("happy", (
        "happy", "good", "great", "excited", "joy", "cheerful", "content",
        "pleased", "delighted", "thrilled", "amazing", "wonderful",
        "fantastic", "awesome", "grateful", "blessed", "elated", "euphoric",
    )),
    ("tired", (
        "tired", "exhausted", "drained", "weary", "fatigued", "worn out",
        "sleepy", "burnt out", "depleted", "lethargic", "sluggish",
    )),
    ("confused", (
        "confused", "lost", "uncertain", "unclear", "mixed up", "puzzled",
        "bewildered", "unsure", "conflicted", "perplexed", "disoriented",
    )),
    ("excited", (
        "excited", "energetic", "pumped", "motivated", "inspired",
        "enthusiastic", "vibrant", "alive", "invigorated",
    )),
    ("peaceful", (
        "peaceful", "calm", "serene", "tranquil", "relaxed", "centered",
        "balanced", "zen", "mindful",
    )),
)


def classify(text: str) -> MoodCategory:
    """Return the first category whose keywords occur in *text*.

    Total over all strings: empty or unmatched text is ``neutral``.
    """
    lowered = (text or "").lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            logger.debug("Classified mood text as %s", category)
            return category
    return DEFAULT_CATEGORY
