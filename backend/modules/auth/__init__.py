"""
Authentication module.

Wraps the identity provider (Supabase Auth) as a session source and
validates bearer tokens for the HTTP API.

Public API:
- ISessionSource: Interface over provider session state
- IAuthService: Interface for token validation
- Session, Identity: Session data
- Auth exceptions: InvalidTokenError, TransientFetchError, etc.
"""

from .interfaces import IAuthService, ISessionSource, ISessionSubscription
from .models import Identity, Session, JWTPayload
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    TransientFetchError,
    IdentityProviderError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "ISessionSource",
    "ISessionSubscription",
    # Models
    "Identity",
    "Session",
    "JWTPayload",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "TransientFetchError",
    "IdentityProviderError",
]
