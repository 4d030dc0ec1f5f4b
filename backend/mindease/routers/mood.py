"""
Mood Check-in Router
====================
POST /api/v1/mood/checkin  Submit a mood check-in.
GET  /api/v1/mood/entries  List saved check-ins, newest first.

Every check-in flows through the same pipeline:

    1. Validate mood text and emoji (pydantic, 422 on failure)
    2. Ask the ResponseOrchestrator for a reflection + affirmation
       (Gemini when available, curated bank otherwise; never fails)
    3. Append the entry, with its provenance, to the mood history
    4. Return the stored entry

Generation failures never block a check-in; only a failure to save does.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, status

from mindease.db.history import HistoryStoreError, get_mood_history
from mindease.models.mood import MoodCheckinRequest, MoodEntry, MoodEntryList
from mindease.services.orchestrator import get_response_orchestrator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/mood", tags=["mood"])


def _storage_error(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"message": message, "code": "db_error"},
    )


@router.post(
    "/checkin",
    response_model=MoodEntry,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a mood check-in",
    description=(
        "Record how you feel with a short text and a mood emoji. The response "
        "includes a supportive reflection and an affirmation, and whether they "
        "came from Gemini ('remote') or the curated bank ('fallback')."
    ),
    responses={
        201: {"description": "Check-in created successfully"},
        422: {"description": "Validation error (blank text, unknown emoji, etc.)"},
        500: {"description": "Check-in could not be saved"},
    },
)
async def submit_mood_checkin(body: MoodCheckinRequest) -> MoodEntry:
    orchestrator = get_response_orchestrator()
    response = await orchestrator.respond(body.mood_text)

    history = get_mood_history()
    try:
        entry = history.record(body.mood_text, body.emoji, response)
    except HistoryStoreError:
        logger.exception("Failed to save mood check-in")
        raise _storage_error("Failed to save check-in")

    return entry


@router.get(
    "/entries",
    response_model=MoodEntryList,
    summary="List saved check-ins",
)
async def list_mood_entries(
    limit: int = Query(default=50, ge=1, le=1000),
) -> MoodEntryList:
    try:
        entries = get_mood_history().entries()
    except HistoryStoreError:
        logger.exception("Failed to load mood history")
        raise _storage_error("Failed to load mood history")

    newest_first = sorted(entries, key=lambda e: e.timestamp, reverse=True)
    return MoodEntryList(entries=newest_first[:limit], total=len(entries))
