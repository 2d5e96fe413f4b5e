# ABOUTME: Tests for the generation retry policy built on tenacity
# ABOUTME: Transient error classification, backoff timings and re-raising after the last attempt

from unittest.mock import AsyncMock, call

import pytest

from municipality_crawler.utils.retry import generation_retrying, is_transient_generation_error


@pytest.mark.parametrize(
    "message,expected",
    [
        ("500 Internal Server Error", True),
        ("13 INTERNAL: backend failure", True),
        ("429 RESOURCE_EXHAUSTED. Quota exceeded", True),
        ("400 INVALID_ARGUMENT", False),
        ("403 PERMISSION_DENIED", False),
        ("", False),
    ],
)
def test_is_transient_generation_error(message, expected):
    assert is_transient_generation_error(RuntimeError(message)) is expected


async def _run(retrying, operation):
    async for attempt in retrying:
        with attempt:
            return await operation()


class TestGenerationRetrying:
    @pytest.mark.asyncio
    async def test_backoff_doubles(self):
        sleep = AsyncMock()
        operation = AsyncMock(side_effect=[RuntimeError("500"), RuntimeError("500"), "done"])

        result = await _run(generation_retrying(3, sleep=sleep), operation)

        assert result == "done"
        assert operation.await_count == 3
        assert sleep.await_args_list == [call(2), call(4)]

    @pytest.mark.asyncio
    async def test_reraises_last_error(self):
        sleep = AsyncMock()
        operation = AsyncMock(side_effect=RuntimeError("429 RESOURCE_EXHAUSTED"))

        with pytest.raises(RuntimeError, match="RESOURCE_EXHAUSTED"):
            await _run(generation_retrying(3, sleep=sleep), operation)

        assert operation.await_count == 3
        assert sleep.await_count == 2

    @pytest.mark.asyncio
    async def test_permanent_error_fails_immediately(self):
        sleep = AsyncMock()
        operation = AsyncMock(side_effect=ValueError("400 INVALID_ARGUMENT"))

        with pytest.raises(ValueError):
            await _run(generation_retrying(3, sleep=sleep), operation)

        assert operation.await_count == 1
        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_single_attempt(self):
        sleep = AsyncMock()
        operation = AsyncMock(side_effect=RuntimeError("500"))

        with pytest.raises(RuntimeError):
            await _run(generation_retrying(1, sleep=sleep), operation)

        assert operation.await_count == 1
