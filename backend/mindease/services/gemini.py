"""
Gemini Client
=============
Thin async wrapper around the Gemini REST ``generateContent`` endpoint.

Responsibilities:
- is_available(): is there a structurally valid API key? Never touches
  the network. Computed once at construction.
- generate(): send one prompt to one model, return the trimmed text or
  raise ServiceError with a kind the orchestrator can act on.
- test_connection(): minimal round trip against the primary model, then
  the secondary model. Never raises.

Failures are classified from Gemini's structured error body
(``error.status`` and ``error.details[].reason``), then from the HTTP
status code, and only fall back to ``unknown`` when neither is usable.
Error messages are never string-matched.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from mindease.config import Settings, get_settings
from mindease.models.generation import ConnectionStatus, GenerationParams, ServiceErrorKind

logger = logging.getLogger(__name__)

API_KEY_PREFIX = "AIza"

_TEST_PROMPT = "Hello, this is a connection test. Please respond with \"connection successful\"."

# google.rpc.ErrorInfo reasons take precedence over the coarse status.
_REASON_KINDS: dict[str, ServiceErrorKind] = {
    "API_KEY_INVALID": "invalid_key",
    "API_KEY_EXPIRED": "invalid_key",
    "RATE_LIMIT_EXCEEDED": "rate_limited",
    "QUOTA_EXCEEDED": "quota_exceeded",
}

_STATUS_KINDS: dict[str, ServiceErrorKind] = {
    "UNAUTHENTICATED": "invalid_key",
    "RESOURCE_EXHAUSTED": "quota_exceeded",
    "PERMISSION_DENIED": "permission_denied",
    "NOT_FOUND": "model_unavailable",
    "UNAVAILABLE": "model_unavailable",
}

_HTTP_KINDS: dict[int, ServiceErrorKind] = {
    401: "invalid_key",
    403: "permission_denied",
    404: "model_unavailable",
    429: "rate_limited",
    503: "model_unavailable",
}

_SAFETY_FINISH_REASONS = frozenset({"SAFETY", "BLOCKLIST", "PROHIBITED_CONTENT", "SPII"})


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class ServiceError(Exception):
    """A Gemini call failed. ``kind`` drives the retry/fallback policy."""

    def __init__(
        self,
        kind: ServiceErrorKind,
        message: str = "",
        status_code: Optional[int] = None,
    ) -> None:
        self.kind = kind
        self.message = message
        self.status_code = status_code
        super().__init__(f"Gemini {kind}: {message}" if message else f"Gemini {kind}")


def classify_error(status_code: Optional[int], body: object) -> ServiceErrorKind:
    """Map an error response to a ServiceErrorKind.

    *body* is the decoded JSON error payload, or anything else when the
    response was not JSON.
    """
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict):
        for detail in error.get("details") or []:
            if isinstance(detail, dict) and detail.get("reason") in _REASON_KINDS:
                return _REASON_KINDS[detail["reason"]]
        status = error.get("status")
        if status in _STATUS_KINDS:
            return _STATUS_KINDS[status]
    if status_code is not None and status_code in _HTTP_KINDS:
        return _HTTP_KINDS[status_code]
    return "unknown"


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class GenerationClient:
    """Makes generateContent requests against the Gemini REST API."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://generativelanguage.googleapis.com",
        primary_model: str = "gemini-1.5-flash",
        secondary_model: str = "gemini-1.5-pro",
        timeout: float = 15.0,
    ) -> None:
        self._api_key = (api_key or "").strip()
        self._base_url = base_url.rstrip("/")
        self.primary_model = primary_model
        self.secondary_model = secondary_model
        self._timeout = timeout
        self._available, self._unavailable_reason = self._check_key(self._api_key)

        if not self._available:
            logger.warning("Gemini disabled (%s); using curated responses", self._unavailable_reason)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "GenerationClient":
        settings = settings or get_settings()
        return cls(
            settings.gemini_api_key,
            base_url=settings.gemini_base_url,
            primary_model=settings.gemini_primary_model,
            secondary_model=settings.gemini_secondary_model,
            timeout=settings.gemini_timeout_seconds,
        )

    @staticmethod
    def _check_key(api_key: str) -> tuple[bool, str]:
        if not api_key:
            return False, "No API key found"
        if not api_key.startswith(API_KEY_PREFIX):
            return False, "Invalid API key format"
        return True, ""

    def is_available(self) -> bool:
        return self._available

    async def generate(
        self,
        prompt: str,
        model: str,
        params: GenerationParams | None = None,
    ) -> str:
        """POST /v1beta/models/{model}:generateContent and return the text.

        Raises ServiceError for every failure, including timeouts and
        responses that carry no text.
        """
        if not self._available:
            raise ServiceError("invalid_key", self._unavailable_reason)

        payload: dict = {"contents": [{"parts": [{"text": prompt}]}]}
        if params is not None:
            payload["generationConfig"] = params.to_payload()

        url = f"{self._base_url}/v1beta/models/{model}:generateContent"
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(
                    url,
                    headers={"x-goog-api-key": self._api_key},
                    json=payload,
                )
        except httpx.TimeoutException as exc:
            raise ServiceError("unknown", f"request to {model} timed out") from exc
        except httpx.HTTPError as exc:
            raise ServiceError("unknown", f"transport error: {exc}") from exc

        if not response.is_success:
            try:
                body = response.json()
            except ValueError:
                body = None
            kind = classify_error(response.status_code, body)
            raise ServiceError(kind, response.text[:200], status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            raise ServiceError("unknown", "response body is not JSON") from exc
        if not isinstance(data, dict):
            raise ServiceError("unknown", "unexpected response shape")

        return self._extract_text(data)

    @staticmethod
    def _extract_text(data: dict) -> str:
        block_reason = (data.get("promptFeedback") or {}).get("blockReason")
        if block_reason:
            raise ServiceError("safety_filtered", f"prompt blocked: {block_reason}")

        candidates = data.get("candidates") or []
        if not candidates:
            raise ServiceError("unknown", "no candidates returned")

        first = candidates[0]
        parts = (first.get("content") or {}).get("parts") or []
        text = "".join(part.get("text", "") for part in parts).strip()

        if not text and first.get("finishReason") in _SAFETY_FINISH_REASONS:
            raise ServiceError("safety_filtered", f"finished with {first['finishReason']}")
        if not text:
            raise ServiceError("unknown", "empty response text")
        return text

    async def test_connection(self) -> ConnectionStatus:
        """Try the primary model, then the secondary. Never raises."""
        if not self._available:
            return ConnectionStatus(ok=False, message=self._unavailable_reason)

        last_error: ServiceError | None = None
        for model in (self.primary_model, self.secondary_model):
            try:
                await self.generate(_TEST_PROMPT, model)
            except ServiceError as exc:
                logger.info("Connection test against %s failed: %s", model, exc)
                last_error = exc
                continue
            return ConnectionStatus(ok=True, message=f"{model} connection successful", model=model)

        return ConnectionStatus(ok=False, message=str(last_error) if last_error else "Unknown error")
