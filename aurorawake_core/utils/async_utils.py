"""
Async utilities for aurorawake-core.

Provides helpers for bounded collaborator I/O and per-key serialization.
"""

import asyncio
import functools
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Coroutine, Dict, Optional, TypeVar

T = TypeVar("T")


async def run_with_timeout(
    coro: Coroutine[Any, Any, T],
    timeout: Optional[float],
) -> T:
    """
    Run a coroutine with a timeout.

    Unlike a plain ``await``, the coroutine can never suspend for longer
    than ``timeout`` seconds. ``None`` disables the bound.

    Args:
        coro: Coroutine to run
        timeout: Timeout in seconds

    Returns:
        Coroutine result

    Raises:
        asyncio.TimeoutError: If the coroutine did not finish in time

    Example:
        >>> alarms = await run_with_timeout(persistence.load_all(), timeout=5.0)
    """
    if timeout is None:
        return await coro
    return await asyncio.wait_for(coro, timeout=timeout)


async def retry_async(
    func: Callable[..., Coroutine[Any, Any, T]],
    *args: Any,
    max_retries: int = 3,
    delay: float = 1.0,
    backoff: float = 2.0,
    **kwargs: Any,
) -> T:
    """
    Retry an async function with exponential backoff.

    Args:
        func: Async function to retry
        *args: Function arguments
        max_retries: Maximum number of retries
        delay: Initial delay between retries (seconds)
        backoff: Backoff multiplier
        **kwargs: Function keyword arguments

    Returns:
        Function result

    Raises:
        Last exception if all retries fail

    Example:
        >>> handle = await retry_async(notifier.arm, alarm, max_retries=2, delay=0.5)
    """
    last_exception = None
    current_delay = delay

    for attempt in range(max_retries + 1):
        try:
            return await func(*args, **kwargs)
        except Exception as e:
            last_exception = e
            if attempt < max_retries:
                await asyncio.sleep(current_delay)
                current_delay *= backoff
            else:
                break

    if last_exception:
        raise last_exception

    raise RuntimeError("Retry failed with no exception")


async def run_in_executor(
    func: Callable[..., T],
    *args: Any,
    **kwargs: Any,
) -> T:
    """
    Run a blocking function in the default executor.

    Keeps file I/O off the event loop so a slow disk never delays other
    alarm transitions.

    Args:
        func: Synchronous function to run
        *args: Function arguments
        **kwargs: Function keyword arguments

    Returns:
        Function result

    Example:
        >>> document = await run_in_executor(json.loads, path.read_text())
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, functools.partial(func, *args, **kwargs))


class KeyedLock:
    """
    One asyncio lock per key, created on demand.

    Locks are discarded as soon as no task holds or waits on them, so the
    number of live locks never exceeds the number of keys in flight.

    Example:
        >>> locks = KeyedLock()
        >>> async with locks.acquire("alarm_123"):
        ...     await apply_transition()
    """

    def __init__(self) -> None:
        """Initialize an empty lock table."""
        self._locks: Dict[str, asyncio.Lock] = {}
        self._users: Dict[str, int] = {}

    @asynccontextmanager
    async def acquire(self, key: str) -> AsyncIterator[None]:
        """
        Hold the lock for ``key`` for the duration of the block.

        Args:
            key: Key to serialize on
        """
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        self._users[key] = self._users.get(key, 0) + 1

        try:
            async with lock:
                yield
        finally:
            self._users[key] -= 1
            if self._users[key] == 0:
                del self._users[key]
                del self._locks[key]

    def locked(self, key: str) -> bool:
        """Return True if some task currently holds the lock for ``key``."""
        lock = self._locks.get(key)
        return lock is not None and lock.locked()

    def __len__(self) -> int:
        """Number of live locks."""
        return len(self._locks)
