"""Shared utilities for the club stats project."""

from __future__ import annotations

import asyncio
import concurrent.futures
import functools
from collections.abc import Callable  # noqa: TC003 — used at runtime in decorators
from typing import Any, TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def async_retry(
    max_attempts: int = 3,
    base_delay: float = 1.0,
    backoff_factor: float = 2.0,
    exceptions: tuple[type[BaseException], ...] = (Exception,),
) -> Callable:
    """Retry a coroutine function on transient failures, backing off between tries.

    The club API client wraps its idempotent requests with this so a dropped
    connection costs a short wait instead of a failed fetch or save. Each
    retry is logged as ``retry_attempt``; the final failure is logged as
    ``retry_exhausted`` and re-raised unchanged.

    Args:
        max_attempts: Total tries, the first one included.
        base_delay: Seconds to wait before the second try.
        backoff_factor: Growth of the wait after every failed try.
        exceptions: Only these exception types trigger a retry; anything
            else propagates on the first failure.
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            delay = base_delay
            for attempt in range(1, max_attempts + 1):
                try:
                    return await func(*args, **kwargs)
                except exceptions as exc:
                    if attempt == max_attempts:
                        logger.error(
                            "retry_exhausted",
                            func=func.__name__,
                            attempts=max_attempts,
                            error=str(exc),
                        )
                        raise
                    logger.warning(
                        "retry_attempt",
                        func=func.__name__,
                        attempt=attempt,
                        max_attempts=max_attempts,
                        delay=delay,
                        error=str(exc),
                    )
                    await asyncio.sleep(delay)
                    delay *= backoff_factor
            raise RuntimeError("unreachable")  # pragma: no cover

        return wrapper

    return decorator


def run_async(coro: Any) -> Any:
    """Drive an engine coroutine to completion from synchronous code.

    The CLI, the leaderboard routes (which FastAPI runs on its threadpool)
    and the test suite all call the async engine through this. When the
    calling thread already has a running loop the coroutine gets a fresh
    loop on a helper thread instead.

    Usage::

        entries = run_async(build_leaderboard(client, metric="runs"))
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
        return pool.submit(asyncio.run, coro).result()
