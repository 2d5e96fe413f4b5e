# ABOUTME: Tests for logging configuration module
# ABOUTME: Validates dual-mode logging setup, third-party suppression and structlog forwarding to loguru

import logging
import os
from pathlib import Path
from unittest.mock import patch

import structlog
from loguru import logger as loguru_logger

from municipality_crawler.utils.logging import get_logger
from municipality_crawler.utils.logging.config import (
    LoggingMode,
    configure_logging,
    detect_logging_mode,
)


class TestDetectLoggingMode:
    """Test logging mode detection logic."""

    def test_detect_mode_from_env_production(self):
        with patch.dict(os.environ, {"MUNICIPALITY_CRAWLER_LOG_MODE": "production"}):
            assert detect_logging_mode() == LoggingMode.PRODUCTION

    def test_detect_mode_from_env_is_case_insensitive(self):
        with patch.dict(os.environ, {"MUNICIPALITY_CRAWLER_LOG_MODE": "Interactive"}):
            assert detect_logging_mode() == LoggingMode.INTERACTIVE

    def test_detect_mode_from_env_invalid(self):
        """Invalid values fall back to TTY detection."""
        with (
            patch.dict(os.environ, {"MUNICIPALITY_CRAWLER_LOG_MODE": "invalid"}),
            patch("sys.stdout.isatty", return_value=True),
        ):
            assert detect_logging_mode() == LoggingMode.INTERACTIVE

    def test_detect_mode_from_tty_production(self):
        with patch.dict(os.environ, {}, clear=True), patch("sys.stdout.isatty", return_value=False):
            assert detect_logging_mode() == LoggingMode.PRODUCTION


class TestConfigureLogging:
    """Test logging configuration functionality."""

    def teardown_method(self):
        for logger_name in ["", "httpx", "httpcore", "google_genai", "py.warnings"]:
            logging.getLogger(logger_name).setLevel(logging.NOTSET)
        logging.captureWarnings(False)
        loguru_logger.remove()
        structlog.reset_defaults()

    def test_configure_interactive_mode(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        configure_logging(mode=LoggingMode.INTERACTIVE, log_level="INFO")

        assert Path("logs").is_dir()
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("google_genai").level == logging.WARNING

    def test_interactive_mode_writes_structured_events(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        log_file = tmp_path / "crawl.log"

        configure_logging(mode=LoggingMode.INTERACTIVE, log_level="INFO", log_file=str(log_file))
        get_logger("municipality_crawler.test").info("Processing municipality", municipality="Aarau")
        get_logger("municipality_crawler.test").debug("Hidden detail")

        content = log_file.read_text(encoding="utf-8")
        assert "Processing municipality" in content
        assert "municipality='Aarau'" in content
        assert "Hidden detail" not in content

    def test_configure_production_mode(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        configure_logging(mode=LoggingMode.PRODUCTION, log_level="DEBUG")

        assert not Path("logs").exists()
        assert logging.getLogger().level == logging.DEBUG
