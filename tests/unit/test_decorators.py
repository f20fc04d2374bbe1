"""Tests for decorator utilities."""
import logging

import pytest

from currency_converter.utils.decorators import log_execution, retry


@pytest.mark.asyncio
async def test_retry_success():
    """Test retry decorator with successful execution."""
    call_count = 0

    @retry(max_attempts=3, delay=0.01)
    async def flaky_function():
        nonlocal call_count
        call_count += 1
        if call_count < 2:
            raise ValueError("Temporary error")
        return "success"

    result = await flaky_function()
    assert result == "success"
    assert call_count == 2


@pytest.mark.asyncio
async def test_retry_failure():
    """Test retry decorator with persistent failure."""
    call_count = 0

    @retry(max_attempts=3, delay=0.01)
    async def always_fails():
        nonlocal call_count
        call_count += 1
        raise ValueError("Persistent error")

    with pytest.raises(ValueError, match="Persistent error"):
        await always_fails()
    assert call_count == 3


@pytest.mark.asyncio
async def test_retry_ignores_unlisted_exceptions():
    call_count = 0

    @retry(max_attempts=3, delay=0.01, exceptions=(ConnectionError,))
    async def wrong_kind():
        nonlocal call_count
        call_count += 1
        raise KeyError("nope")

    with pytest.raises(KeyError):
        await wrong_kind()
    assert call_count == 1


def test_retry_requires_coroutine():
    with pytest.raises(TypeError):
        @retry()
        def not_async():
            return None


@pytest.mark.asyncio
async def test_log_execution(caplog):
    """Test log_execution decorator."""
    @log_execution
    async def logged_function(x, y):
        return x + y

    with caplog.at_level(logging.INFO, logger="currency_converter.utils.decorators"):
        result = await logged_function(2, 3)

    assert result == 5
    assert "Completed logged_function" in caplog.text


@pytest.mark.asyncio
async def test_log_execution_reraises(caplog):
    @log_execution
    async def broken():
        raise RuntimeError("boom")

    with caplog.at_level(logging.INFO, logger="currency_converter.utils.decorators"):
        with pytest.raises(RuntimeError):
            await broken()

    assert "Failed broken" in caplog.text
