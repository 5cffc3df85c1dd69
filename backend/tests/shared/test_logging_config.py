"""Tests for shared/logging_config.py."""

import logging
from unittest.mock import patch

from shared.logging_config import configure_logging


class TestConfigureLogging:
    @patch("shared.logging_config.logging.basicConfig")
    def test_sets_level(self, mock_basic):
        configure_logging("debug")
        assert mock_basic.call_args.kwargs["level"] == logging.DEBUG

    @patch("shared.logging_config.logging.basicConfig")
    def test_unknown_level_falls_back_to_info(self, mock_basic):
        configure_logging("chatty")
        assert mock_basic.call_args.kwargs["level"] == logging.INFO

    @patch("shared.logging_config.logging.basicConfig")
    def test_quiets_client_libraries(self, mock_basic):
        configure_logging()
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("realtime").level == logging.WARNING
