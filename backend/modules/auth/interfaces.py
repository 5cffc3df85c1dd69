"""
Authentication module interface.

Other modules should depend on these protocols, not the concrete
implementations. This enables testing with fakes and swapping the
identity provider.
"""

from typing import Callable, Optional, Protocol, runtime_checkable

from shared.models import AuthenticatedUser

from .models import Session


SessionCallback = Callable[[Optional[Session]], None]


@runtime_checkable
class ISessionSubscription(Protocol):
    """Handle returned by ISessionSource.on_change."""

    def unsubscribe(self) -> None:
        ...


@runtime_checkable
class ISessionSource(Protocol):
    """
    Interface over the identity provider's session state.

    This is the only way the routing layer learns whether a user is
    signed in.
    """

    async def get_session(self) -> Optional[Session]:
        """
        Get the current session.

        Returns:
            The current Session, or None when signed out

        Raises:
            TransientFetchError: If the provider cannot be reached
            IdentityProviderError: If the provider rejects the request
        """
        ...

    def on_change(self, callback: SessionCallback) -> ISessionSubscription:
        """
        Subscribe to session changes.

        The callback receives the new session, or None on sign-out
        and provider-side expiry.
        """
        ...

    async def exchange_code(self, code: str, code_verifier: Optional[str] = None) -> Session:
        """
        Exchange a PKCE auth code for a session.

        The verifier defaults to the one stored when the flow started.

        Raises:
            IdentityProviderError: If the provider rejects the code
        """
        ...

    async def update_password(self, new_password: str) -> None:
        """
        Update the signed-in user's password.

        Raises:
            IdentityProviderError: With the provider's message on failure
        """
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for bearer token authentication used by the HTTP API.
    """

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated user.

        Args:
            token: JWT access token from Supabase Auth

        Returns:
            AuthenticatedUser with user ID and basic info

        Raises:
            AuthenticationError: If token is invalid or expired
        """
        ...

    async def session_from_token(self, token: Optional[str]) -> Optional[Session]:
        """
        Resolve a bearer token into a Session.

        Missing, invalid, or expired tokens resolve to None.
        """
        ...
