"""
Generation Schemas
==================
Types shared by the Gemini client, the orchestrator and the status endpoint.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from pydantic import BaseModel, Field

ServiceErrorKind = Literal[
    "invalid_key",
    "quota_exceeded",
    "rate_limited",
    "permission_denied",
    "safety_filtered",
    "model_unavailable",
    "unknown",
]


@dataclass(frozen=True)
class GenerationParams:
    """Sampling parameters sent as Gemini's ``generationConfig``."""

    temperature: float = 0.8
    top_k: int = 40
    top_p: float = 0.95
    max_output_tokens: int = 300

    def to_payload(self) -> dict:
        return {
            "temperature": self.temperature,
            "topK": self.top_k,
            "topP": self.top_p,
            "maxOutputTokens": self.max_output_tokens,
        }


class ConnectionStatus(BaseModel):
    """Outcome of a Gemini connectivity check."""

    ok: bool
    message: str
    model: Optional[str] = Field(
        default=None,
        description="Model that answered, when the check succeeded.",
    )
