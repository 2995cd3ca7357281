"""Synchronous wrappers for the async msprates API."""

from __future__ import annotations

import asyncio
import functools
import inspect
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

T = TypeVar("T")


def _get_or_create_event_loop() -> asyncio.AbstractEventLoop:
    """
    Get the running event loop or create a new one.

    Special cases:
    - Jupyter notebooks (loop already running)
    - Secondary threads (no default loop)
    """
    try:
        loop = asyncio.get_running_loop()
        try:
            import nest_asyncio

            nest_asyncio.apply()
            return loop
        except ImportError:
            raise RuntimeError(
                "Event loop already running. Install nest_asyncio for Jupyter support: "
                "pip install nest_asyncio"
            ) from None
    except RuntimeError as e:
        if "nest_asyncio" in str(e):
            raise
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        return loop


def run_sync(coro: Awaitable[T]) -> T:
    """
    Run a coroutine synchronously.

    Args:
        coro: Coroutine to run

    Returns:
        The coroutine's result
    """
    loop = _get_or_create_event_loop()

    if loop.is_running():
        return loop.run_until_complete(coro)

    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()
        asyncio.set_event_loop(None)


def sync_wrapper(async_func: Callable[..., Awaitable[T]]) -> Callable[..., T]:
    """
    Decorator building a synchronous version of an async function.

    Usage:
        @sync_wrapper
        async def fetch_data():
            ...

        fetch_data()  # synchronous
    """

    @functools.wraps(async_func)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        return run_sync(async_func(*args, **kwargs))

    if wrapper.__doc__:
        wrapper.__doc__ = f"[SYNC] {wrapper.__doc__}"

    return wrapper


class _SyncModule:
    """Module proxy exposing synchronous versions of its coroutine functions."""

    def __init__(self, async_module: Any) -> None:
        self._async_module = async_module

    def __getattr__(self, name: str) -> Any:
        attr = getattr(self._async_module, name)

        if inspect.iscoroutinefunction(attr):
            return sync_wrapper(attr)

        return attr


class _SyncMsp(_SyncModule):
    """Synchronous MSP API."""

    pass


_msp: _SyncMsp | None = None


def __getattr__(name: str) -> Any:
    """Lazy loading to avoid circular imports."""
    global _msp

    if name == "msp":
        if _msp is None:
            from msprates import msp as async_msp

            _msp = _SyncMsp(async_msp)
        return _msp

    raise AttributeError(f"module 'msprates.sync' has no attribute '{name}'")
