"""Bounded-attempts retry for coroutines."""

import asyncio
from typing import AbstractSet, Awaitable, Callable, Optional, Tuple, Type, TypeVar

__all__ = ["attempt", "is_retryable_status"]

T = TypeVar("T")


def is_retryable_status(error: BaseException, status_codes: AbstractSet[int] = frozenset({422})) -> bool:
    """True if the error carries one of the given HTTP status codes."""
    return getattr(error, "status_code", None) in status_codes


async def attempt(
    fn: Callable[[], Awaitable[T]],
    max_attempts: int,
    should_retry: Callable[[BaseException], bool],
    backoff: float,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    exceptions: Tuple[Type[BaseException], ...] = (Exception,),
    on_retry: Optional[Callable[[BaseException, int], None]] = None,
) -> T:
    """Await fn() up to max_attempts times.

    A failure is retried only when should_retry(error) is true and attempts
    remain; otherwise the error propagates. The wait between attempts is a
    fixed backoff.

    Args:
        fn: Zero-argument coroutine factory, called once per attempt
        max_attempts: Total attempts, including the first
        should_retry: Decides whether a given error is worth another attempt
        backoff: Seconds to wait before the next attempt
        sleep: Awaitable sleep (swap out in tests)
        exceptions: Exception types considered at all; others propagate at once
        on_retry: Called with (error, attempts_left) before each wait
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")

    for attempt_num in range(1, max_attempts + 1):
        try:
            return await fn()
        except exceptions as e:
            attempts_left = max_attempts - attempt_num
            if attempts_left == 0 or not should_retry(e):
                raise
            if on_retry is not None:
                on_retry(e, attempts_left)
            await sleep(backoff)

    # Unreachable: the last attempt either returns or raises
    raise RuntimeError("attempt() exhausted without result")
