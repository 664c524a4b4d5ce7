"""Tests for async utilities."""

import asyncio
import threading

import pytest

from aurorawake_core.utils.async_utils import (KeyedLock, retry_async, run_in_executor,
                                               run_with_timeout)


@pytest.mark.asyncio
class TestRunWithTimeout:
    """Tests for run_with_timeout."""

    async def test_completes(self):
        """Test a fast coroutine returns its result."""

        async def quick():
            return 42

        assert await run_with_timeout(quick(), 1.0) == 42

    async def test_times_out(self):
        """Test a slow coroutine is cut off."""
        with pytest.raises(asyncio.TimeoutError):
            await run_with_timeout(asyncio.sleep(1), 0.01)

    async def test_no_bound(self):
        """Test None disables the timeout."""

        async def quick():
            return "done"

        assert await run_with_timeout(quick(), None) == "done"


@pytest.mark.asyncio
class TestRetryAsync:
    """Tests for retry_async."""

    async def test_succeeds_after_failures(self):
        """Test transient failures are retried."""
        attempts = []

        async def flaky():
            attempts.append(1)
            if len(attempts) < 3:
                raise RuntimeError("transient")
            return "ok"

        assert await retry_async(flaky, max_retries=3, delay=0) == "ok"
        assert len(attempts) == 3

    async def test_raises_last_error(self):
        """Test the last error propagates once retries are exhausted."""

        async def broken():
            raise ValueError("permanent")

        with pytest.raises(ValueError):
            await retry_async(broken, max_retries=1, delay=0)


@pytest.mark.asyncio
class TestRunInExecutor:
    """Tests for run_in_executor."""

    async def test_passes_arguments(self):
        """Test positional and keyword arguments reach the function."""

        def join(*parts, sep="-"):
            return sep.join(parts)

        assert await run_in_executor(join, "a", "b", sep="+") == "a+b"

    async def test_runs_off_the_loop_thread(self):
        """Test the function runs in a worker thread."""
        loop_thread = threading.get_ident()

        assert await run_in_executor(threading.get_ident) != loop_thread

    async def test_propagates_errors(self):
        """Test exceptions raised in the worker reach the caller."""

        def broken():
            raise OSError("disk gone")

        with pytest.raises(OSError, match="disk gone"):
            await run_in_executor(broken)


@pytest.mark.asyncio
class TestKeyedLock:
    """Tests for KeyedLock."""

    async def test_same_key_serializes(self):
        """Test holders of one key never overlap."""
        locks = KeyedLock()
        events = []

        async def worker(name):
            async with locks.acquire("alarm"):
                events.append(f"{name}-start")
                await asyncio.sleep(0.01)
                events.append(f"{name}-end")

        await asyncio.gather(worker("a"), worker("b"))

        assert events == ["a-start", "a-end", "b-start", "b-end"]

    async def test_distinct_keys_run_concurrently(self):
        """Test different keys do not block each other."""
        locks = KeyedLock()
        events = []

        async def worker(key):
            async with locks.acquire(key):
                events.append(f"{key}-start")
                await asyncio.sleep(0.01)
                events.append(f"{key}-end")

        await asyncio.gather(worker("x"), worker("y"))

        assert events[:2] == ["x-start", "y-start"]

    async def test_released_locks_discarded(self):
        """Test idle keys hold no lock."""
        locks = KeyedLock()

        async with locks.acquire("alarm"):
            assert locks.locked("alarm")
            assert len(locks) == 1

        assert not locks.locked("alarm")
        assert len(locks) == 0

    async def test_released_on_error(self):
        """Test the lock is released when the block raises."""
        locks = KeyedLock()

        with pytest.raises(RuntimeError):
            async with locks.acquire("alarm"):
                raise RuntimeError("boom")

        assert len(locks) == 0
