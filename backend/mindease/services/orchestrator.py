"""
Response Orchestrator
=====================
Decides where a check-in's reflection and affirmation come from.

    Idle -> CallingPrimary -> Success
                           -> CallingSecondary -> Success
                                               -> Fallback
                           -> Fallback

1. No usable Gemini key, or generation switched off: curated fallback.
2. Primary tier: reflection prompt, then affirmation prompt, on the
   primary model. Both must succeed.
3. ``model_unavailable`` from either call: run both prompts again on the
   secondary model (the two calls go out concurrently). Any other failure
   kind goes straight to the fallback.
4. Secondary tier fails for any reason: curated fallback.

A tier counts only if both of its calls succeed. A Gemini reflection is
never paired with a curated affirmation, so the two texts always share a
tone, and ``provenance`` is ``remote`` only for a complete Gemini pair.
No failure escapes ``respond``; the provenance tag is the only trace.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from functools import lru_cache

from mindease.config import get_settings
from mindease.models.generation import GenerationParams
from mindease.models.mood import GeneratedResponse
from mindease.services.fallback import FallbackResponder
from mindease.services.gemini import GenerationClient, ServiceError

logger = logging.getLogger(__name__)

PRIMARY_PARAMS = GenerationParams(temperature=0.8, top_k=40, top_p=0.95, max_output_tokens=300)
SECONDARY_PARAMS = GenerationParams(temperature=0.8, top_k=40, top_p=0.95, max_output_tokens=250)

_QUOTE_CHARS = "\"'“”"

# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------

_PRIMARY_REFLECTION_PROMPT = """\
You are MindEase, a warm, compassionate, and wise mental health companion who \
acts like a caring friend and therapist buddy. A user has shared their feelings \
with you.

Your role:
- Be genuinely empathetic and understanding, like a close friend who truly cares
- Validate their emotions completely - all feelings are valid
- Offer gentle, practical guidance without being preachy
- Use warm, conversational language that feels personal and caring
- Provide hope and perspective while acknowledging their current reality
- Make them feel heard, understood, and less alone

IMPORTANT:
- Do NOT ask follow-up questions
- Do NOT suggest they seek professional help unless they mention serious concerns
- Focus on providing comfort, validation, and gentle guidance
- Keep response to 5-6 sentences maximum

User's feelings: "{mood_text}"

Respond as their caring therapist buddy:"""

_PRIMARY_AFFIRMATION_PROMPT = """\
Based on someone feeling: "{mood_text}"

Create a powerful, personalized daily affirmation that will uplift and empower \
them. This should feel like something a wise, caring friend would say to help \
them feel stronger.

Guidelines:
- Start with "I am" or "I" to make it personal and empowering
- Make it specific to their emotional state, not generic
- Keep it under 35 words but make every word count
- Focus on their inner strength, resilience, or inherent worth

Create the affirmation:"""

_SECONDARY_REFLECTION_PROMPT = (
    'You are MindEase, a compassionate therapist buddy. A user shared: "{mood_text}". '
    "Respond with warmth, empathy, and gentle guidance in 5-6 sentences. Validate "
    "their feelings and provide comfort like a caring friend would. Don't ask "
    "follow-up questions."
)

_SECONDARY_AFFIRMATION_PROMPT = (
    'Create a personal, empowering affirmation starting with "I" for someone feeling: '
    '"{mood_text}". Make it specific to their situation and under 35 words.'
)


# ---------------------------------------------------------------------------
# Tiers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GenerationTier:
    name: str
    model: str
    params: GenerationParams
    reflection_prompt: str
    affirmation_prompt: str
    concurrent: bool = False


def clean_reflection(text: str) -> str:
    return text.strip()


def clean_affirmation(text: str) -> str:
    """Trim, then drop at most one quote character from each end.

    The two ends are checked independently, so an unbalanced quote such as
    the leading one in ``"I am enough.`` is dropped too.
    """
    text = text.strip()
    if text[:1] and text[0] in _QUOTE_CHARS:
        text = text[1:]
    if text[-1:] and text[-1] in _QUOTE_CHARS:
        text = text[:-1]
    return text.strip()


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------

class ResponseOrchestrator:
    """Runs the primary/secondary/fallback policy for one check-in at a time."""

    def __init__(
        self,
        client: GenerationClient,
        fallback: FallbackResponder | None = None,
        *,
        enabled: bool = True,
    ) -> None:
        self._client = client
        self._fallback = fallback or FallbackResponder()
        self._enabled = enabled
        self.primary = GenerationTier(
            name="primary",
            model=client.primary_model,
            params=PRIMARY_PARAMS,
            reflection_prompt=_PRIMARY_REFLECTION_PROMPT,
            affirmation_prompt=_PRIMARY_AFFIRMATION_PROMPT,
        )
        self.secondary = GenerationTier(
            name="secondary",
            model=client.secondary_model,
            params=SECONDARY_PARAMS,
            reflection_prompt=_SECONDARY_REFLECTION_PROMPT,
            affirmation_prompt=_SECONDARY_AFFIRMATION_PROMPT,
            concurrent=True,
        )

    async def respond(self, mood_text: str) -> GeneratedResponse:
        """Return a reflection/affirmation pair for *mood_text*. Never raises."""
        if not self._enabled:
            logger.debug("AI generation disabled, using curated response")
            return self._fallback.respond(mood_text)
        if not self._client.is_available():
            return self._fallback.respond(mood_text)

        logger.debug("Generating response for mood: %s...", mood_text[:50])

        for tier in (self.primary, self.secondary):
            try:
                result = await self._run_tier(tier, mood_text)
            except ServiceError as exc:
                self._log_failure(tier, exc)
                if tier is self.primary and exc.kind == "model_unavailable":
                    continue
                break
            except Exception:
                logger.exception("Unexpected error during %s tier generation", tier.name)
                break
            logger.info("Generated response with %s model %s", tier.name, tier.model)
            return result

        logger.info("Falling back to curated response")
        return self._fallback.respond(mood_text)

    async def _run_tier(self, tier: GenerationTier, mood_text: str) -> GeneratedResponse:
        """Run both prompts for one tier. Raises ServiceError unless both succeed."""
        reflection_prompt = tier.reflection_prompt.format(mood_text=mood_text)
        affirmation_prompt = tier.affirmation_prompt.format(mood_text=mood_text)

        if tier.concurrent:
            results = await asyncio.gather(
                self._client.generate(reflection_prompt, tier.model, tier.params),
                self._client.generate(affirmation_prompt, tier.model, tier.params),
                return_exceptions=True,
            )
            for outcome in results:
                if isinstance(outcome, BaseException):
                    raise outcome
            raw_reflection, raw_affirmation = results
        else:
            raw_reflection = await self._client.generate(reflection_prompt, tier.model, tier.params)
            raw_affirmation = await self._client.generate(affirmation_prompt, tier.model, tier.params)

        reflection = clean_reflection(raw_reflection)
        affirmation = clean_affirmation(raw_affirmation)
        if not reflection or not affirmation:
            raise ServiceError("unknown", f"{tier.name} tier returned empty text")

        return GeneratedResponse(
            reflection=reflection,
            affirmation=affirmation,
            provenance="remote",
        )

    @staticmethod
    def _log_failure(tier: GenerationTier, exc: ServiceError) -> None:
        if exc.kind in ("invalid_key", "permission_denied"):
            logger.error("Gemini %s tier rejected the API key (%s): %s", tier.name, exc.kind, exc)
        elif exc.kind == "model_unavailable" and tier.name == "primary":
            logger.warning("Model %s unavailable, trying secondary model", tier.model)
        elif exc.kind == "unknown":
            logger.error("Unexpected Gemini error on %s tier: %s", tier.name, exc)
        else:
            logger.warning("Gemini %s tier failed (%s): %s", tier.name, exc.kind, exc)


# ---------------------------------------------------------------------------
# Singleton
# ---------------------------------------------------------------------------

@lru_cache
def get_generation_client() -> GenerationClient:
    return GenerationClient.from_settings(get_settings())


@lru_cache
def get_response_orchestrator() -> ResponseOrchestrator:
    settings = get_settings()
    return ResponseOrchestrator(
        get_generation_client(),
        enabled=settings.enable_ai_generation,
    )
