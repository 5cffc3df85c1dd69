import pytest
from pydantic import ValidationError

from modules.profiles.models import PlayerProfile, ProfileCheck, UpdateProfileRequest


class TestProfileCheck:
    def test_missing_profile(self):
        check = ProfileCheck.from_profile(None)
        assert check.exists is False
        assert check.complete is False
        assert check.player_id is None

    def test_unnamed_profile(self):
        check = ProfileCheck.from_profile(PlayerProfile(player_id="p1", name="   "))
        assert check.exists is True
        assert check.name_present is False
        assert check.complete is False
        assert check.player_id == "p1"

    def test_named_profile(self):
        check = ProfileCheck.from_profile(PlayerProfile(player_id="p1", name="Sam"))
        assert check.complete is True

    def test_is_hashable_and_comparable(self):
        """Checks are compared as part of the guard snapshot key."""
        a = ProfileCheck(exists=True, name_present=True, player_id="p1")
        b = ProfileCheck(exists=True, name_present=True, player_id="p1")
        assert a == b
        assert hash(a) == hash(b)


class TestUpdateProfileRequest:
    def test_strips_whitespace(self):
        request = UpdateProfileRequest(name=" Sam ", gamer_handle=" ace ")
        assert request.name == "Sam"
        assert request.gamer_handle == "ace"

    def test_rejects_short_handle(self):
        with pytest.raises(ValidationError):
            UpdateProfileRequest(name="Sam", gamer_handle="ab")
