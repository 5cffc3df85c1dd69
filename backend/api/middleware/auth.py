"""
JWT Authentication middleware.

Validates Supabase JWT tokens through the auth service and extracts
user information.
"""

from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.auth.interfaces import IAuthService
from shared.config import get_settings
from shared.exceptions import AuthenticationError
from shared.models import AuthenticatedUser

from ..dependencies import get_auth_service

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


class AuthError(HTTPException):
    """Authentication error with consistent format."""
    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


async def authenticate(token: str, auth: IAuthService) -> AuthenticatedUser:
    """
    Validate a bearer token.

    Raises:
        AuthError: If the token is invalid, expired, or the server has
            no JWT secret configured
    """
    if not get_settings().supabase_jwt_secret:
        raise AuthError("Server authentication not configured")

    try:
        return await auth.validate_token(token)
    except AuthenticationError as e:
        raise AuthError(e.message)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if credentials is None:
        raise AuthError("Missing authorization header")

    return await authenticate(credentials.credentials, auth)

