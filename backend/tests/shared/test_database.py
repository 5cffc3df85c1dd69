"""Tests for shared/database.py."""

import pytest
from unittest.mock import patch, MagicMock, AsyncMock

from shared.database import (
    create_session_client,
    get_async_supabase_client,
    get_supabase_client,
    reset_client_cache,
)


class TestSupabaseClient:
    def setup_method(self):
        """Reset cache before each test."""
        reset_client_cache()

    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_creates_client(self, mock_settings, mock_create):
        """Should create client with service role key."""
        mock_settings.return_value.supabase_url = "https://test.supabase.co/"
        mock_settings.return_value.supabase_service_role_key = "test-key"
        mock_create.return_value = MagicMock()

        client = get_supabase_client()

        mock_create.assert_called_once_with("https://test.supabase.co", "test-key")
        assert client is mock_create.return_value

    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_caches_client(self, mock_settings, mock_create):
        """Should cache the client and not recreate it."""
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_service_role_key = "test-key"

        assert get_supabase_client() is get_supabase_client()
        mock_create.assert_called_once()

    @patch("shared.database.get_settings")
    def test_raises_without_config(self, mock_settings):
        """Should raise if configuration is missing."""
        mock_settings.return_value.supabase_url = ""
        mock_settings.return_value.supabase_service_role_key = ""

        with pytest.raises(RuntimeError, match="configuration missing"):
            get_supabase_client()

    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_reset_client_cache(self, mock_settings, mock_create):
        """Should reset the cache and allow new client creation."""
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_service_role_key = "test-key"
        mock_create.side_effect = [MagicMock(name="client1"), MagicMock(name="client2")]

        client1 = get_supabase_client()
        reset_client_cache()
        client2 = get_supabase_client()

        assert mock_create.call_count == 2
        assert client1 is not client2


class TestAsyncSupabaseClient:
    def setup_method(self):
        reset_client_cache()

    @pytest.mark.asyncio
    @patch("shared.database.acreate_client", new_callable=AsyncMock)
    @patch("shared.database.get_settings")
    async def test_creates_and_caches(self, mock_settings, mock_acreate):
        """The realtime client uses the anon key and is created once."""
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_anon_key = "anon-key"

        first = await get_async_supabase_client()
        second = await get_async_supabase_client()

        mock_acreate.assert_awaited_once_with("https://test.supabase.co", "anon-key")
        assert first is second

    @pytest.mark.asyncio
    @patch("shared.database.get_settings")
    async def test_raises_without_config(self, mock_settings):
        mock_settings.return_value.supabase_url = ""
        mock_settings.return_value.supabase_anon_key = ""

        with pytest.raises(RuntimeError, match="configuration missing"):
            await get_async_supabase_client()


class TestSessionClient:
    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_fresh_client_per_call(self, mock_settings, mock_create):
        mock_settings.return_value.supabase_url = "https://test.supabase.co/"
        mock_settings.return_value.supabase_anon_key = "anon-key"
        mock_create.side_effect = [MagicMock(name="first"), MagicMock(name="second")]

        assert create_session_client() is not create_session_client()
        mock_create.assert_called_with("https://test.supabase.co", "anon-key")

    @patch("shared.database.get_settings")
    def test_raises_without_anon_key(self, mock_settings):
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_anon_key = ""

        with pytest.raises(RuntimeError, match="SUPABASE_ANON_KEY"):
            create_session_client()
