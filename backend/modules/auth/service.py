"""
Authentication service implementations.

- AuthService validates Supabase JWT tokens for the HTTP API.
- SupabaseSessionSource wraps Supabase Auth as the session source
  consumed by the routing guard.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

import httpx
import jwt
from supabase import AuthError, Client

from shared.config import get_settings
from shared.models import AuthenticatedUser

from .interfaces import IAuthService, ISessionSource, ISessionSubscription, SessionCallback
from .models import JWTPayload, Session
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    TransientFetchError,
    IdentityProviderError,
)

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Uses Supabase JWT tokens (HS256, audience "authenticated").
    """

    def __init__(self):
        self._settings = get_settings()

    def _decode(self, token: str) -> JWTPayload:
        if not token:
            raise MissingTokenError()

        try:
            payload = jwt.decode(
                token,
                self._settings.supabase_jwt_secret,
                algorithms=["HS256"],
                audience="authenticated",
            )
            return JWTPayload(**payload)
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e))

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated user.

        This implementation validates Supabase JWTs using the JWT secret.
        """
        jwt_payload = self._decode(token)

        return AuthenticatedUser(
            id=jwt_payload.sub,
            email=jwt_payload.email or "",
            email_verified=jwt_payload.email_confirmed_at is not None,
            last_sign_in=datetime.fromtimestamp(jwt_payload.iat, tz=timezone.utc),
            role=jwt_payload.role if jwt_payload.role != "authenticated" else "player",
        )

    async def session_from_token(self, token: Optional[str]) -> Optional[Session]:
        """Resolve a bearer token into a Session; bad tokens mean no session."""
        if not token or not self._settings.supabase_jwt_secret:
            return None
        try:
            payload = self._decode(token)
        except (InvalidTokenError, ExpiredTokenError, MissingTokenError) as e:
            logger.debug(f"Bearer token rejected, treating as signed out: {e.code}")
            return None
        return Session.from_payload(token, payload)


class _ProviderSubscription(ISessionSubscription):
    """Adapts the Supabase auth subscription to ISessionSubscription."""

    def __init__(self, subscription: Any):
        self._subscription = subscription
        self.closed = False

    def unsubscribe(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._subscription.unsubscribe()


class SupabaseSessionSource(ISessionSource):
    """
    Session source backed by Supabase Auth.

    The Supabase client is synchronous; calls are wrapped in async
    methods so callers can treat every provider call as a suspension point.
    """

    def __init__(self, client: Client):
        self._client = client

    async def get_session(self) -> Optional[Session]:
        """Get the current session from Supabase Auth."""
        try:
            session = self._client.auth.get_session()
        except AuthError as e:
            raise IdentityProviderError(e.message)
        except httpx.HTTPError as e:
            raise TransientFetchError(f"Session fetch failed: {e}")

        if session is None:
            return None
        return Session.from_provider(session)

    def on_change(self, callback: SessionCallback) -> ISessionSubscription:
        """Forward Supabase auth state changes as Session | None."""

        def _handle(event: Any, session: Any) -> None:
            logger.debug(f"Auth state change: {event}")
            callback(Session.from_provider(session) if session is not None else None)

        subscription = self._client.auth.on_auth_state_change(_handle)
        return _ProviderSubscription(subscription)

    async def exchange_code(self, code: str, code_verifier: Optional[str] = None) -> Session:
        """Exchange a PKCE code for a session."""
        params = {"auth_code": code}
        if code_verifier:
            params["code_verifier"] = code_verifier
        try:
            response = self._client.auth.exchange_code_for_session(params)
        except AuthError as e:
            raise IdentityProviderError(e.message or "Failed to exchange code")
        except httpx.HTTPError as e:
            raise TransientFetchError(f"Code exchange failed: {e}")

        if response.session is None:
            raise IdentityProviderError("Failed to exchange code")
        return Session.from_provider(response.session)

    async def update_password(self, new_password: str) -> None:
        """Update the signed-in user's password."""
        try:
            self._client.auth.update_user({"password": new_password})
        except AuthError as e:
            raise IdentityProviderError(e.message or "Failed to update password.")
        except httpx.HTTPError as e:
            raise TransientFetchError(f"Password update failed: {e}")

    async def restore(self, access_token: str, refresh_token: str) -> Session:
        """
        Make a session issued earlier current on this client.

        Used by request handlers whose client starts signed out.
        """
        try:
            response = self._client.auth.set_session(access_token, refresh_token)
        except AuthError as e:
            raise IdentityProviderError(e.message or "Failed to restore session")
        except httpx.HTTPError as e:
            raise TransientFetchError(f"Session restore failed: {e}")

        if response.session is None:
            raise IdentityProviderError("Failed to restore session")
        return Session.from_provider(response.session)

