"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.
"""

from typing import TYPE_CHECKING

from shared.config import get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService
    from modules.auth.service import SupabaseSessionSource
    from modules.profiles.interfaces import IProfileService
    from modules.profiles.repository import ProfileRepository
    from modules.accounts.interfaces import IAccountStore
    from modules.realtime.interfaces import IChangeFeed


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as
    singletons within the container. Use reset() to clear them for testing.
    """

    def __init__(self) -> None:
        self._auth_service: "IAuthService | None" = None
        self._profile_repository: "ProfileRepository | None" = None
        self._profile_service: "IProfileService | None" = None
        self._account_store: "IAccountStore | None" = None
        self._change_feed: "IChangeFeed | None" = None

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService()
        return self._auth_service

    @property
    def session_source(self) -> "SupabaseSessionSource":
        """
        Get a new session source.

        Not cached: each source owns a client holding one user's auth state.
        """
        from modules.auth.service import SupabaseSessionSource
        from shared.database import create_session_client
        return SupabaseSessionSource(create_session_client())

    @property
    def profile_repository(self) -> "ProfileRepository":
        """Get the profile repository instance."""
        if self._profile_repository is None:
            from modules.profiles.repository import ProfileRepository
            from shared.database import get_supabase_client
            self._profile_repository = ProfileRepository(get_supabase_client())
        return self._profile_repository

    @property
    def profiles(self) -> "IProfileService":
        """Get the profile service instance."""
        if self._profile_service is None:
            from modules.profiles.service import ProfileService
            self._profile_service = ProfileService(self.profile_repository)
        return self._profile_service

    @property
    def accounts(self) -> "IAccountStore":
        """Get the account partition store instance."""
        if self._account_store is None:
            from modules.accounts.store import AccountPartitionStore
            self._account_store = AccountPartitionStore(seed=get_settings().demonstration_seed)
        return self._account_store

    async def change_feed(self) -> "IChangeFeed":
        """Get the realtime change feed (needs the async client)."""
        if self._change_feed is None:
            from modules.realtime.feed import SupabaseChangeFeed
            from shared.database import get_async_supabase_client
            self._change_feed = SupabaseChangeFeed(await get_async_supabase_client())
        return self._change_feed

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._auth_service = None
        self._profile_repository = None
        self._profile_service = None
        self._account_store = None
        self._change_feed = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container.
    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_session_source() -> "SupabaseSessionSource":
    """FastAPI dependency for a per-request session source."""
    return get_container().session_source


def get_profile_service() -> "IProfileService":
    """FastAPI dependency for profile service."""
    return get_container().profiles


def get_account_store() -> "IAccountStore":
    """FastAPI dependency for the account partition store."""
    return get_container().accounts


async def get_change_feed() -> "IChangeFeed":
    """FastAPI dependency for the realtime change feed."""
    return await get_container().change_feed()


def get_watched_tables() -> list[str]:
    """FastAPI dependency for the tables the change stream watches."""
    return list(get_settings().watched_tables)
