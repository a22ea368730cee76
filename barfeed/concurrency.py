from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

T = TypeVar("T")
R = TypeVar("R")


async def gather_ordered(
    items: Sequence[T],
    fn: Callable[[T], Awaitable[R]],
    limit: int | None = None,
) -> list[R]:
    """Run ``fn`` over ``items`` concurrently and return results in input order.

    At most ``limit`` calls are in flight at once (unbounded when ``None`` or
    ``0``).  The first failure cancels the remaining calls and is re-raised.
    """
    semaphore = asyncio.Semaphore(limit) if limit else None

    async def _run(item: T) -> R:
        if semaphore is None:
            return await fn(item)
        async with semaphore:
            return await fn(item)

    tasks = [asyncio.ensure_future(_run(item)) for item in items]
    try:
        return list(await asyncio.gather(*tasks))
    except Exception:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
