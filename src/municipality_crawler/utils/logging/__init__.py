# ABOUTME: Logging configuration and structured logger helpers
# ABOUTME: Provides loguru sinks and structlog loggers for the crawl pipeline

from .config import LoggingMode, configure_logging, detect_logging_mode
from .utils import get_logger, log_api_call, with_municipality_context, with_pipeline_context

__all__ = [
    # Configuration
    "LoggingMode",
    "configure_logging",
    "detect_logging_mode",
    # Utilities
    "get_logger",
    "log_api_call",
    "with_municipality_context",
    "with_pipeline_context",
]
