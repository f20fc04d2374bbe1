"""Utility decorators for error handling and resilience."""
import asyncio
import functools
import inspect
import time
from typing import Callable, Tuple, Type

from currency_converter.utils.logging import get_logger

logger = get_logger(__name__)


def retry(
    max_attempts: int = 3,
    delay: float = 1.0,
    backoff: float = 2.0,
    exceptions: Tuple[Type[Exception], ...] = (Exception,)
):
    """
    Retry an async callable with exponential backoff.

    Args:
        max_attempts: Maximum number of attempts
        delay: Initial delay between attempts in seconds
        backoff: Multiplier applied to the delay after each failure
        exceptions: Exceptions that trigger another attempt

    Example:
        @retry(max_attempts=3, delay=1.0, exceptions=(httpx.TransportError,))
        async def fetch():
            ...
    """
    def decorator(func: Callable):
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"retry expects a coroutine function, got {func.__name__}")

        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            current_delay = delay
            for attempt in range(1, max_attempts + 1):
                try:
                    return await func(*args, **kwargs)
                except exceptions as e:
                    if attempt == max_attempts:
                        logger.error(
                            f"{func.__name__} failed after {max_attempts} attempts",
                            extra={"error": str(e), "attempts": attempt}
                        )
                        raise
                    logger.warning(
                        f"{func.__name__} failed (attempt {attempt}/{max_attempts}), retrying in {current_delay}s",
                        extra={"error": str(e), "attempts": attempt}
                    )
                    await asyncio.sleep(current_delay)
                    current_delay *= backoff

        return wrapper

    return decorator


def log_execution(func: Callable):
    """Log start, completion time and failure of an async callable."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        start = time.perf_counter()
        name = func.__name__
        logger.info(f"Starting {name}", extra={"function": name})
        try:
            result = await func(*args, **kwargs)
        except Exception as e:
            elapsed = round((time.perf_counter() - start) * 1000, 2)
            logger.error(
                f"Failed {name}",
                extra={"function": name, "execution_time_ms": elapsed, "error": str(e)}
            )
            raise
        elapsed = round((time.perf_counter() - start) * 1000, 2)
        logger.info(f"Completed {name}", extra={"function": name, "execution_time_ms": elapsed})
        return result

    return wrapper
