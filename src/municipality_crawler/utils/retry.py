# ABOUTME: Retry policy for Gemini generation calls using tenacity
# ABOUTME: Classifies transient server-side failures by message and applies exponential backoff

import asyncio
from collections.abc import Awaitable, Callable

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from municipality_crawler.utils.logging import get_logger

logger = get_logger(__name__)

# Substrings of the error message that mark a failure as transient on the service side.
# Anything else (invalid argument, permission denied, ...) is permanent.
TRANSIENT_ERROR_MARKERS = ("500", "INTERNAL", "RESOURCE_EXHAUSTED")


def is_transient_generation_error(error: BaseException) -> bool:
    """Return True when the error message carries one of the transient markers."""
    message = str(error)
    return any(marker in message for marker in TRANSIENT_ERROR_MARKERS)


def _log_before_retry(label: str, max_attempts: int) -> Callable[[RetryCallState], None]:
    def before_sleep(retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            "Retrying after transient error",
            target=label,
            next_attempt=retry_state.attempt_number + 1,
            max_attempts=max_attempts,
            wait_seconds=retry_state.next_action.sleep if retry_state.next_action else None,
            error=str(error),
        )

    return before_sleep


def generation_retrying(
    max_attempts: int = 3,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    label: str = "generation",
) -> AsyncRetrying:
    """Build the retry controller used around image generation calls.

    Only transient errors are retried; the last error is re-raised once the
    attempts are exhausted so the caller can decide how to report it.

    Args:
        max_attempts: Total number of attempts including the first one
        sleep: Awaitable sleep function, injectable for tests
        label: Name bound to the retry log lines (usually the municipality)
    """
    return AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        # multiplier * 2 ** (attempt_number - 1) == 2 ** attempt_number
        wait=wait_exponential(multiplier=2, exp_base=2),
        retry=retry_if_exception(is_transient_generation_error),
        sleep=sleep,
        before_sleep=_log_before_retry(label, max_attempts),
        reraise=True,
    )
