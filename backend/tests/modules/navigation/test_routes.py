"""
Tests for navigation endpoints.
"""

import pytest
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_profile_service, get_session_source
from modules.auth.exceptions import IdentityProviderError, TransientFetchError
from modules.profiles.models import PlayerProfile

from tests.conftest import create_test_token, make_session


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def profiles(app):
    mock_profiles = AsyncMock()
    app.dependency_overrides[get_profile_service] = lambda: mock_profiles
    yield mock_profiles
    app.dependency_overrides.clear()


def _bearer(user_id="user-1"):
    return {"Authorization": f"Bearer {create_test_token(user_id=user_id)}"}


class TestResolveRoute:
    """Tests for POST /api/navigation/resolve"""

    def test_anonymous_goes_to_auth(self, app, profiles, configured_auth):
        response = TestClient(app).post("/api/navigation/resolve", json={"path": "/home"})

        assert response.status_code == 200
        assert response.json() == {"state": "unauthenticated", "redirect": "/auth"}
        profiles.find_profile_by_identity.assert_not_awaited()

    def test_invalid_token_counts_as_signed_out(self, app, profiles, configured_auth):
        response = TestClient(app).post(
            "/api/navigation/resolve",
            json={"path": "/auth"},
            headers={"Authorization": "Bearer not-a-token"},
        )
        assert response.json() == {"state": "unauthenticated", "redirect": None}

    def test_incomplete_profile(self, app, profiles, configured_auth):
        profiles.find_profile_by_identity.return_value = PlayerProfile(player_id="p1")

        response = TestClient(app).post(
            "/api/navigation/resolve", json={"path": "/auth"}, headers=_bearer()
        )

        assert response.json() == {
            "state": "authenticated_incomplete_profile",
            "redirect": "/complete-profile?playerId=p1",
        }
        profiles.find_profile_by_identity.assert_awaited_once_with("user-1")

    def test_complete_profile_on_root(self, app, profiles, configured_auth):
        profiles.find_profile_by_identity.return_value = PlayerProfile(player_id="p1", name="Sam")

        response = TestClient(app).post("/api/navigation/resolve", json={"path": "/"}, headers=_bearer())

        assert response.json() == {"state": "authenticated_complete", "redirect": "/home"}

    def test_profile_lookup_unavailable(self, app, profiles, configured_auth):
        profiles.find_profile_by_identity.side_effect = TransientFetchError("db down", service="supabase_db")

        response = TestClient(app).post("/api/navigation/resolve", json={"path": "/"}, headers=_bearer())

        assert response.status_code == 503


class TestCodeRoute:
    """Tests for POST /api/navigation/code-route"""

    def test_rewrites_code(self, app):
        response = TestClient(app).post(
            "/api/navigation/code-route",
            json={"path": "/", "params": {"code": "abc", "type": "recovery"}},
        )
        assert response.json() == {"rewrite": "/auth/callback?code=abc&type=recovery"}

    def test_no_code(self, app):
        response = TestClient(app).post("/api/navigation/code-route", json={"path": "/home"})
        assert response.json() == {"rewrite": None}


@pytest.fixture
def session_source(app):
    source = AsyncMock()
    app.dependency_overrides[get_session_source] = lambda: source
    yield source
    app.dependency_overrides.clear()


class TestAuthCallback:
    """Tests for POST /api/navigation/callback"""

    def test_recovery_code(self, app, session_source):
        session_source.exchange_code.return_value = make_session("user-1")

        response = TestClient(app).post(
            "/api/navigation/callback",
            json={"code": "abc", "type": "recovery", "code_verifier": "v"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "redirecting"
        assert data["redirect"] == "/auth/reset-password?from=recovery"
        assert data["session"]["user"]["id"] == "user-1"
        session_source.exchange_code.assert_awaited_once_with("abc", code_verifier="v")

    def test_missing_code(self, app, session_source):
        response = TestClient(app).post("/api/navigation/callback", json={})

        assert response.json()["status"] == "error"
        session_source.exchange_code.assert_not_awaited()


class TestResetPassword:
    """Tests for POST /api/navigation/reset-password"""

    @pytest.fixture
    def settings(self):
        with patch("modules.navigation.routes.get_settings") as mock_settings:
            mock_settings.return_value.min_password_length = 8
            yield mock_settings

    def test_updates_password_for_restored_session(self, app, session_source, settings):
        session_source.get_session.return_value = make_session("user-1")

        response = TestClient(app).post(
            "/api/navigation/reset-password",
            json={"password": "hunter22!", "confirm": "hunter22!", "refresh_token": "r"},
            headers={"Authorization": "Bearer access"},
        )

        assert response.json() == {"status": "success", "error": None, "redirect": "/home"}
        session_source.restore.assert_awaited_once_with("access", "r")
        session_source.update_password.assert_awaited_once_with("hunter22!")

    def test_without_session(self, app, session_source, settings):
        session_source.restore.side_effect = IdentityProviderError("Invalid Refresh Token")
        session_source.get_session.return_value = None

        response = TestClient(app).post(
            "/api/navigation/reset-password",
            json={"password": "hunter22!", "confirm": "hunter22!"},
            headers={"Authorization": "Bearer stale"},
        )

        data = response.json()
        assert data["status"] == "error"
        assert "No active recovery session" in data["error"]
        session_source.update_password.assert_not_awaited()

    def test_mismatch_reported_on_form(self, app, session_source, settings):
        session_source.get_session.return_value = make_session("user-1")

        response = TestClient(app).post(
            "/api/navigation/reset-password",
            json={"password": "hunter22!", "confirm": "hunter23!"},
        )

        assert response.json()["error"] == "Passwords do not match."
        session_source.restore.assert_not_awaited()
