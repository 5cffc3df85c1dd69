"""
Tests for the password reset flow.
"""

import pytest
from unittest.mock import AsyncMock

from modules.auth.exceptions import IdentityProviderError, TransientFetchError
from modules.navigation.models import PasswordResetStatus
from modules.navigation.password import NO_RECOVERY_SESSION_MESSAGE, PasswordResetFlow

from tests.conftest import make_session


@pytest.fixture
def source():
    source = AsyncMock()
    source.get_session.return_value = make_session()
    return source


class TestCheckSession:
    @pytest.mark.asyncio
    async def test_ready_with_session(self, source):
        flow = PasswordResetFlow(source)
        result = await flow.check_session()
        assert result.status == PasswordResetStatus.READY
        assert flow.status == PasswordResetStatus.READY

    @pytest.mark.asyncio
    async def test_no_session(self, source):
        source.get_session.return_value = None
        result = await PasswordResetFlow(source).check_session()
        assert result.status == PasswordResetStatus.ERROR
        assert result.error == NO_RECOVERY_SESSION_MESSAGE

    @pytest.mark.asyncio
    async def test_fetch_failure(self, source):
        source.get_session.side_effect = TransientFetchError("Session fetch failed")
        result = await PasswordResetFlow(source).check_session()
        assert result.status == PasswordResetStatus.ERROR
        assert result.error == "Session fetch failed"


class TestSubmit:
    @pytest.mark.asyncio
    async def test_requires_checked_session(self, source):
        result = await PasswordResetFlow(source).submit("long-enough", "long-enough")
        assert result.error == NO_RECOVERY_SESSION_MESSAGE
        source.update_password.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_too_short(self, source):
        flow = PasswordResetFlow(source)
        await flow.check_session()

        result = await flow.submit("short", "short")

        assert result.status == PasswordResetStatus.READY
        assert result.error == "Password must be at least 8 characters."
        source.update_password.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_mismatch(self, source):
        flow = PasswordResetFlow(source)
        await flow.check_session()

        result = await flow.submit("long-enough", "long-enougH")

        assert result.status == PasswordResetStatus.READY
        assert result.error == "Passwords do not match."

    @pytest.mark.asyncio
    async def test_success_goes_home(self, source):
        flow = PasswordResetFlow(source)
        await flow.check_session()

        result = await flow.submit("long-enough", "long-enough")

        assert result.status == PasswordResetStatus.SUCCESS
        assert result.redirect == "/home"
        source.update_password.assert_awaited_once_with("long-enough")

    @pytest.mark.asyncio
    async def test_provider_message_verbatim(self, source):
        source.update_password.side_effect = IdentityProviderError(
            "New password should be different from the old password."
        )
        flow = PasswordResetFlow(source)
        await flow.check_session()

        result = await flow.submit("long-enough", "long-enough")

        assert result.status == PasswordResetStatus.ERROR
        assert result.error == "New password should be different from the old password."

    @pytest.mark.asyncio
    async def test_custom_minimum(self, source):
        flow = PasswordResetFlow(source, min_length=12)
        await flow.check_session()
        result = await flow.submit("eleven-char", "eleven-char")
        assert result.error == "Password must be at least 12 characters."
