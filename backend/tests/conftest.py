"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta
from typing import Optional
from unittest.mock import patch
import jwt  # PyJWT

from api.dependencies import reset_container
from modules.auth.models import Identity, Session


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
    email_verified: bool = True,
) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        email_verified: Whether the email should be marked as verified

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "email_confirmed_at": now.isoformat() if email_verified else None,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")


def make_session(user_id: str = "user-1", email: Optional[str] = "user@trashfoot.com") -> Session:
    """Build a provider-independent Session for guard and flow tests."""
    return Session(access_token=f"token-{user_id}", user=Identity(id=user_id, email=email))


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the service container around each test."""
    reset_container()
    yield
    reset_container()


@pytest.fixture
def configured_auth():
    """Configure the JWT secret seen by the auth service and middleware."""
    with patch("modules.auth.service.get_settings") as service_settings, \
         patch("api.middleware.auth.get_settings") as middleware_settings:
        service_settings.return_value.supabase_jwt_secret = TEST_JWT_SECRET
        middleware_settings.return_value.supabase_jwt_secret = TEST_JWT_SECRET
        yield


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "test@example.com"


@pytest.fixture
def auth_token(test_user_id: str, test_user_email: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id, email=test_user_email)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
