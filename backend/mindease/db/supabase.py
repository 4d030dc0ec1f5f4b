"""
Supabase Client
===============
Configured Supabase client for the optional remote history backend.

Only built when ``history_backend`` is ``supabase``. Uses the service_role
key because the backend writes the history row on the user's behalf.
"""

from functools import lru_cache

from supabase import Client, create_client

from mindease.config import get_settings


@lru_cache
def get_supabase_client() -> Client:
    settings = get_settings()
    return create_client(settings.supabase_url, settings.supabase_service_key)
