from __future__ import annotations

import logging
import os

from supabase import Client, create_client

logger = logging.getLogger(__name__)


def supabase_disabled() -> bool:
    return os.getenv("SUPABASE_DISABLED", "0") == "1"


def is_production() -> bool:
    return os.getenv("ENV", "development") == "production"


def create_supabase_client() -> Client | None:
    """Build a Supabase client from the process environment.

    The profile sync writes with the service role key so row level security
    does not block inserts for users who have no session yet. The anon key is
    accepted as a fallback for local projects without RLS.

    Returns None when Supabase is disabled or not configured; callers then
    fall back to another backend.
    """
    url = os.getenv("SUPABASE_URL")
    key = os.getenv("SUPABASE_SERVICE_ROLE_KEY") or os.getenv("SUPABASE_ANON_KEY")
    if supabase_disabled():
        return None
    if not url or not key:
        if is_production():
            logger.error("SUPABASE_URL or key not set in production, profiles will not be persisted")
        else:
            logger.warning("SUPABASE_URL or key not set, Supabase client not created")
        return None
    return create_client(url, key)
