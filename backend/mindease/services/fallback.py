"""
Fallback Responder
==================
Builds a reflection/affirmation pair without any network access:
classify the mood text, then pick one of that category's curated pairs.

The random source is injected so tests can pin the selection. It is any
callable taking the number of candidates and returning an index in
``range(n)``; the default is ``random.randrange``.
"""

from __future__ import annotations

import logging
import random
from typing import Callable, Optional

from mindease.models.mood import GeneratedResponse
from mindease.services.mood_classifier import DEFAULT_CATEGORY, classify
from mindease.services.response_bank import RESPONSE_BANK

logger = logging.getLogger(__name__)

IndexChooser = Callable[[int], int]


class FallbackResponder:
    """Picks a curated response for the detected mood category."""

    def __init__(self, choose_index: Optional[IndexChooser] = None) -> None:
        self._choose_index = choose_index or random.randrange

    def respond(self, mood_text: str) -> GeneratedResponse:
        category = classify(mood_text)
        candidates = RESPONSE_BANK.get(category) or RESPONSE_BANK[DEFAULT_CATEGORY]

        index = self._choose_index(len(candidates))
        # Out-of-range indices wrap around.
        if not 0 <= index < len(candidates):
            index = index % len(candidates)

        pair = candidates[index]
        logger.debug("Fallback response %s[%d]", category, index)
        return GeneratedResponse(
            reflection=pair.reflection,
            affirmation=pair.affirmation,
            provenance="fallback",
        )
