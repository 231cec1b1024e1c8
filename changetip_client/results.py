from __future__ import annotations

import asyncio
from typing import Any, Coroutine, TypeVar

T = TypeVar("T")


def resolved(value: T) -> asyncio.Future[T]:
    """Return a future that already holds ``value``."""
    future: asyncio.Future[T] = asyncio.get_running_loop().create_future()
    future.set_result(value)
    return future


def spawn(coro: Coroutine[Any, Any, T]) -> asyncio.Future[T]:
    """Schedule ``coro`` on the running loop; its outcome settles the returned task once."""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        coro.close()
        raise
    return loop.create_task(coro)
