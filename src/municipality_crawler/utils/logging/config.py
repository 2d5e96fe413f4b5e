# ABOUTME: Logging configuration using loguru sinks and structlog loggers
# ABOUTME: Dual-mode operation: interactive CLI (log files) vs production JSON logging on stdout

import logging
import os
import sys
import time
from pathlib import Path
from typing import Any

import structlog
from loguru import logger

LOG_DIR = Path("logs")

NOISY_LOGGERS = ["httpx", "httpcore", "urllib3", "asyncio", "google_genai", "google.auth", "PIL", "cairosvg"]


class LoggingMode:
    """Logging mode constants."""

    INTERACTIVE = "interactive"
    PRODUCTION = "production"


def detect_logging_mode() -> str:
    """Detect whether we're running in interactive or production mode."""
    mode = os.getenv("MUNICIPALITY_CRAWLER_LOG_MODE")
    if mode and mode.lower() in [LoggingMode.INTERACTIVE, LoggingMode.PRODUCTION]:
        return mode.lower()

    return LoggingMode.INTERACTIVE if sys.stdout.isatty() else LoggingMode.PRODUCTION


def setup_third_party_logging() -> None:
    """Raise noisy third-party loggers to WARNING so they don't drown the crawl output."""
    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    logging.captureWarnings(True)
    logging.getLogger("py.warnings").setLevel(logging.ERROR)


def _forward_to_loguru(_, method_name: str, event_dict: dict[str, Any]) -> str:
    """structlog renderer that hands the event to loguru, keeping key/value context as extras."""
    event = str(event_dict.pop("event", ""))
    name = event_dict.pop("logger", None)
    level = "WARNING" if method_name == "warn" else method_name.upper()
    context = " ".join(f"{key}={value!r}" for key, value in event_dict.items())
    message = f"{event} {context}".rstrip()
    logger.bind(logger_name=name, **event_dict).log(level, message)
    raise structlog.DropEvent


def _configure_structlog(log_level: str) -> None:
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            _forward_to_loguru,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=False,
    )


def configure_logging(mode: str | None = None, log_level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging using loguru.

    Args:
        mode: Logging mode (interactive/production), auto-detected if None
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Custom log file path, uses default if None
    """
    if mode is None:
        mode = detect_logging_mode()

    setup_third_party_logging()

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    logging.getLogger().setLevel(numeric_level)

    logger.remove()
    _configure_structlog(log_level)

    if mode == LoggingMode.INTERACTIVE:
        max_retries = 3
        for attempt in range(max_retries):
            try:
                LOG_DIR.mkdir(exist_ok=True)
                break
            except OSError:
                if attempt == max_retries - 1:
                    mode = LoggingMode.PRODUCTION
                    break
                time.sleep(0.01 * (attempt + 1))

        if mode == LoggingMode.PRODUCTION:
            logger.add(sys.stdout, level=log_level, format="{time} | {level} | {name} | {message}", serialize=True)
            return

        log_file_path = log_file or str(LOG_DIR / "municipality-crawler.log")

        # Human-readable logs
        logger.add(
            log_file_path,
            level=log_level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            rotation="10 MB",
            retention="7 days",
        )

        # JSON logs for machine processing
        logger.add(
            LOG_DIR / "municipality-crawler.json",
            level=log_level,
            format="{time} | {level} | {name} | {message}",
            serialize=True,
            rotation="10 MB",
            retention="7 days",
        )

        # Warnings and above also go to stderr so failed municipalities stay visible
        logger.add(sys.stderr, level="WARNING", format="<level>{level: <8}</level> | {message}")

        logger.add(
            LOG_DIR / "errors.log",
            level="ERROR",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            backtrace=True,
            diagnose=True,
        )
    else:
        logger.add(sys.stdout, level=log_level, format="{time} | {level} | {name} | {message}", serialize=True)

