"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import AuthenticationError, ExternalServiceError


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a JWT token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class TransientFetchError(ExternalServiceError):
    """Raised when the identity provider or data store cannot be reached."""

    def __init__(self, message: str = "Service temporarily unavailable", service: str = "supabase_auth"):
        super().__init__(message, service=service, code="TRANSIENT_FETCH_ERROR")


class IdentityProviderError(ExternalServiceError):
    """
    Raised when the identity provider rejects a request.

    The message is the provider's own, so it can be shown to the user verbatim.
    """

    def __init__(self, message: str):
        super().__init__(message, service="supabase_auth", code="IDENTITY_PROVIDER_ERROR")
