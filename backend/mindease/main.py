"""
MindEase API
============
FastAPI application entry point. Mount routers here.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mindease.config import get_settings
from mindease.routers import generation, insights, mood

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
# httpx logs every request URL at INFO
logging.getLogger("httpx").setLevel(logging.WARNING)

app = FastAPI(
    title="MindEase API",
    description="Mood check-ins, supportive reflections and mood trends",
    version="0.1.0",
    docs_url="/api/docs" if settings.environment != "production" else None,
    redoc_url="/api/redoc" if settings.environment != "production" else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(mood.router)
app.include_router(insights.router)
app.include_router(generation.router)


@app.get("/api/v1/health")
async def health_check() -> dict:
    return {"status": "ok", "service": "mindease-api"}
