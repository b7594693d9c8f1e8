"""
Supabase access for repositories and object storage.

A single service-role client is shared by every repository. Row Level
Security is bypassed, so ownership and participant checks live in the
service layer.
"""

import logging
from typing import Optional

from supabase import create_client, Client

from .config import Settings, get_settings

logger = logging.getLogger(__name__)

_client: Optional[Client] = None


def supabase_configured(settings: Optional[Settings] = None) -> bool:
    """True when both the project URL and the service role key are set."""
    settings = settings or get_settings()
    return bool(settings.supabase_url and settings.supabase_service_role_key)


def get_supabase_client() -> Client:
    """Return the shared service-role client, creating it on first use."""
    global _client

    if _client is not None:
        return _client

    settings = get_settings()
    if not supabase_configured(settings):
        raise RuntimeError(
            "Supabase configuration missing. "
            "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY."
        )

    _client = create_client(settings.supabase_url, settings.supabase_service_role_key)
    logger.info("Supabase client initialized for %s", settings.supabase_url)
    return _client


def reset_client_cache() -> None:
    """Drop the cached client (tests, configuration changes)."""
    global _client
    _client = None
