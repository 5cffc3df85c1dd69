"""
Database client factory for Supabase.

Provides the service-role client (for backend operations bypassing RLS),
per-request anon clients for auth flows, and an async client used for
realtime subscriptions.
"""

from typing import Optional
from supabase import create_client, acreate_client, Client, AsyncClient

from .config import get_settings

# Module-level client cache
_service_client: Optional[Client] = None
_async_client: Optional[AsyncClient] = None


def get_supabase_client() -> Client:
    """
    Get Supabase client with service role (bypasses RLS).

    Use this for backend operations that need full database access,
    such as reading player profiles on behalf of a session.

    Returns:
        Supabase client configured with service role key
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
            )
        _service_client = create_client(
            settings.supabase_url.rstrip("/"),
            settings.supabase_service_role_key,
        )

    return _service_client


async def get_async_supabase_client() -> AsyncClient:
    """
    Get the async Supabase client used for realtime channels.

    Realtime subscriptions require the async client; it is created once
    and shared by every change feed.

    Returns:
        Async Supabase client configured with the anon key
    """
    global _async_client

    if _async_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_anon_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_ANON_KEY environment variables."
            )
        _async_client = await acreate_client(
            settings.supabase_url.rstrip("/"),
            settings.supabase_anon_key,
        )

    return _async_client


def create_session_client() -> Client:
    """
    Create a fresh anon-key client for one user's auth flow.

    Auth state lives on the client, so these are never shared between
    requests.
    """
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_anon_key:
        raise RuntimeError(
            "Supabase configuration missing. "
            "Set SUPABASE_URL and SUPABASE_ANON_KEY environment variables."
        )
    return create_client(settings.supabase_url.rstrip("/"), settings.supabase_anon_key)


def reset_client_cache() -> None:
    """
    Reset the cached database clients.

    Useful for testing or when configuration changes.
    """
    global _service_client, _async_client
    _service_client = None
    _async_client = None
