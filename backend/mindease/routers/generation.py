"""
Generation Router
=================
GET /api/v1/generation/status  Check whether Gemini is reachable.

Backs the "Test Gemini Connection" button. Always 200: the outcome is in
the body, and a failed check just means check-ins will use curated
responses.
"""

from __future__ import annotations

from fastapi import APIRouter

from mindease.models.generation import ConnectionStatus
from mindease.services.orchestrator import get_generation_client

router = APIRouter(prefix="/api/v1/generation", tags=["generation"])


@router.get("/status", response_model=ConnectionStatus, summary="Test the Gemini connection")
async def get_generation_status() -> ConnectionStatus:
    return await get_generation_client().test_connection()
