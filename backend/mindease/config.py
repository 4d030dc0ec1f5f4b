"""
MindEase Configuration
======================
All environment variables in one place. Pydantic Settings validates
types at startup so a typo in .env shows up before the first check-in.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Loaded from environment variables or a .env file."""

    # --- Gemini API ---
    # Keys issued by Google AI Studio start with "AIza". Anything else is
    # treated as missing and the app runs on curated responses only.
    gemini_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com"
    gemini_primary_model: str = "gemini-1.5-flash"
    gemini_secondary_model: str = "gemini-1.5-pro"
    gemini_timeout_seconds: float = 15.0

    # --- Mood history storage ---
    history_backend: str = "file"  # file | supabase
    history_dir: str = ".mindease"
    history_namespace: str = "mindease-entries"

    # --- Supabase (only used when history_backend == "supabase") ---
    supabase_url: str = "http://localhost:54321"
    supabase_service_key: str = ""

    # --- App settings ---
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    # Calendar days for trend buckets are resolved in this zone.
    display_timezone: str = "UTC"

    # --- Feature flags ---
    # Kill switch: if False, never call Gemini and always use the curated
    # response bank.
    enable_ai_generation: bool = True

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
