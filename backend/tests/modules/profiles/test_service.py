"""
Tests for the profile service.
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import MagicMock
import httpx

from modules.auth.exceptions import TransientFetchError
from modules.profiles.exceptions import HandleTakenError, InvalidProfileError, ProfileNotFoundError
from modules.profiles.models import PlayerProfile
from modules.profiles.service import ProfileService, suggest_handles


@pytest.fixture
def repository():
    repo = MagicMock()
    repo.get_by_auth_user_id.return_value = PlayerProfile(
        player_id="p1", auth_user_id="user-1", email="sam@trashfoot.com"
    )
    repo.find_handle_owner.return_value = None
    repo.update_name_and_handle.side_effect = lambda player_id, name, handle: PlayerProfile(
        player_id=player_id, auth_user_id="user-1", name=name, gamer_handle=handle
    )
    return repo


@pytest.fixture
def service(repository):
    return ProfileService(repository)


class TestFindProfile:
    @pytest.mark.asyncio
    async def test_returns_profile(self, service, repository):
        profile = await service.find_profile_by_identity("user-1")
        assert profile.player_id == "p1"
        repository.get_by_auth_user_id.assert_called_once_with("user-1")

    @pytest.mark.asyncio
    async def test_missing_profile_is_none(self, service, repository):
        repository.get_by_auth_user_id.return_value = None
        assert await service.find_profile_by_identity("user-1") is None

    @pytest.mark.asyncio
    async def test_transport_failure_is_transient(self, service, repository):
        repository.get_by_auth_user_id.side_effect = httpx.ReadTimeout("slow")
        with pytest.raises(TransientFetchError) as exc_info:
            await service.find_profile_by_identity("user-1")
        assert exc_info.value.service == "supabase_db"


class TestUpdateProfile:
    @pytest.mark.asyncio
    async def test_completes_profile(self, service, repository):
        profile = await service.update_profile("user-1", "  Sam  ", " sam_the_man ")

        repository.find_handle_owner.assert_called_once_with("sam_the_man", exclude_player_id="p1")
        repository.update_name_and_handle.assert_called_once_with("p1", "Sam", "sam_the_man")
        assert profile.name == "Sam"
        assert profile.name_present

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "name,handle",
        [
            ("", "handle"),
            ("S", "handle"),
            ("Sam", "ab"),
            ("Sam", "h" * 21),
            ("   ", "handle"),
        ],
    )
    async def test_rejects_invalid_fields(self, service, repository, name, handle):
        with pytest.raises(InvalidProfileError):
            await service.update_profile("user-1", name, handle)
        repository.update_name_and_handle.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_player(self, service, repository):
        repository.get_by_auth_user_id.return_value = None
        with pytest.raises(ProfileNotFoundError):
            await service.update_profile("user-1", "Sam", "sam_the_man")

    @pytest.mark.asyncio
    async def test_handle_taken(self, service, repository):
        repository.find_handle_owner.return_value = "p2"
        with pytest.raises(HandleTakenError) as exc_info:
            await service.update_profile("user-1", "Sam", "rocket")
        assert exc_info.value.details["gamer_handle"] == "rocket"
        repository.update_name_and_handle.assert_not_called()

    @pytest.mark.asyncio
    async def test_incomplete_update_result(self, service, repository):
        repository.update_name_and_handle.side_effect = None
        repository.update_name_and_handle.return_value = None
        with pytest.raises(InvalidProfileError):
            await service.update_profile("user-1", "Sam", "sam_the_man")


class TestCheckHandle:
    @pytest.mark.asyncio
    async def test_available(self, service):
        result = await service.check_handle("free_handle")
        assert result.available is True
        assert result.suggestions == []

    @pytest.mark.asyncio
    async def test_taken_offers_suggestions(self, service, repository):
        repository.find_handle_owner.return_value = "p2"
        year = datetime.now(timezone.utc).year

        result = await service.check_handle("rocket")

        assert result.available is False
        assert result.suggestions == ["rocket1", "rocket_pro", f"rocket{year}"]

    @pytest.mark.asyncio
    async def test_lookup_failure_reports_available(self, service, repository):
        repository.find_handle_owner.side_effect = RuntimeError("db down")
        result = await service.check_handle("rocket")
        assert result.available is True
        assert result.suggestions == []


def test_suggest_handles_order():
    year = datetime.now(timezone.utc).year
    assert suggest_handles("ace") == ["ace1", "ace_pro", f"ace{year}"]
