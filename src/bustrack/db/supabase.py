"""Supabase client for the BusTrack backend."""

import logging
from functools import lru_cache
from supabase import create_client, Client
from ..config import settings


class DataStoreUnavailableError(RuntimeError):
    """Raised when an operation needs the hosted database but it is not configured."""


class RecordNotFoundError(LookupError):
    """Raised when a single row lookup matches nothing."""

    def __init__(self, table: str, record_id: str) -> None:
        super().__init__(f"No row with id '{record_id}' in table '{table}'")
        self.table = table
        self.record_id = record_id


@lru_cache()
def get_supabase_client() -> Client | None:
    """Get cached Supabase client instance.

    Returns:
        Supabase Client instance if configured, None otherwise.
        Note: This does not test the connection - actual queries may fail with network errors.
    """
    if not settings.supabase_url or not settings.supabase_key:
        logging.warning("Supabase credentials not configured (missing URL or key)")
        return None

    try:
        return create_client(settings.supabase_url, settings.supabase_key)
    except Exception as e:
        logging.error(f"Failed to create Supabase client: {e}")
        return None


def require_supabase_client() -> Client:
    """Return the configured client or raise DataStoreUnavailableError."""
    client = get_supabase_client()
    if client is None:
        raise DataStoreUnavailableError(
            "Supabase not configured. Set BUSTRACK_SUPABASE_URL and BUSTRACK_SUPABASE_KEY environment variables."
        )
    return client
