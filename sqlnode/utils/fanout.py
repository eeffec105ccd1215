"""Concurrent fan-out with an all-or-nothing join."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Iterable, TypeVar

T = TypeVar("T")


async def gather_all(awaitables: Iterable[Awaitable[T]]) -> list[T]:
    """Run awaitables concurrently and return their results in input order.

    Every awaitable runs to completion, even when a sibling fails; nothing
    is cancelled. Once all have finished, the first failure in input order
    is raised.

    Args:
        awaitables: Coroutines or futures to run

    Returns:
        Results in the order the awaitables were given

    Raises:
        Exception: The first failure, if any
    """
    results = await asyncio.gather(*awaitables, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)
