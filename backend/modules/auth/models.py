"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from typing import Any, Optional
from pydantic import BaseModel, Field


class JWTPayload(BaseModel):
    """
    Decoded JWT token payload from Supabase.

    This matches the structure of Supabase Auth JWTs.
    """

    sub: str = Field(..., description="Subject (user ID)")
    email: Optional[str] = Field(None, description="User's email")
    email_confirmed_at: Optional[str] = Field(None, description="Email confirmation time")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    aud: str = Field(default="authenticated", description="Audience")
    role: str = Field(default="authenticated", description="User role")

    # Supabase-specific claims
    app_metadata: dict = Field(default_factory=dict)
    user_metadata: dict = Field(default_factory=dict)


class Identity(BaseModel):
    """
    Stable identity issued by the identity provider.

    Read-only to the rest of the system.
    """

    id: str = Field(..., description="User ID (UUID from Supabase)")
    email: Optional[str] = Field(None, description="User's email address")

    model_config = {"frozen": True}


class Session(BaseModel):
    """
    An authenticated session.

    Sessions are replaced wholesale on every auth event and are
    never mutated in place.
    """

    access_token: str = Field(..., description="Access token (JWT)")
    refresh_token: str = Field(default="", description="Refresh token")
    expires_at: Optional[int] = Field(None, description="Expiry as epoch seconds")
    user: Identity = Field(..., description="Identity the session belongs to")

    model_config = {"frozen": True}

    @classmethod
    def from_provider(cls, session: Any) -> "Session":
        """Build a Session from a Supabase Auth session object."""
        return cls(
            access_token=session.access_token,
            refresh_token=session.refresh_token or "",
            expires_at=session.expires_at,
            user=Identity(id=str(session.user.id), email=session.user.email),
        )

    @classmethod
    def from_payload(cls, token: str, payload: JWTPayload) -> "Session":
        """Build a Session from a validated bearer token."""
        return cls(
            access_token=token,
            expires_at=payload.exp,
            user=Identity(id=payload.sub, email=payload.email),
        )
