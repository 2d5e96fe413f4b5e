# ABOUTME: Cross-cutting utilities and shared infrastructure
# ABOUTME: Supporting services: logging, retry classification, console tables

"""
Utils Layer: Shared infrastructure and cross-cutting concerns

This layer provides:
- Logging configuration
- Transient-error classification and retry helpers
- Rich console tables for run summaries
"""

from . import logging

__all__ = [
    "logging",
]
