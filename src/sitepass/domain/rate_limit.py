"""Run independent units of async work in rate-limited batches."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable

DEFAULT_BATCH_SIZE = 5
DEFAULT_BATCH_DELAY_SECONDS = 1.0

type Sleep = Callable[[float], Awaitable[None]]


async def run_in_batches[T](
    units: Iterable[Callable[[], Awaitable[T]]],
    *,
    batch_size: int = DEFAULT_BATCH_SIZE,
    delay_seconds: float = DEFAULT_BATCH_DELAY_SECONDS,
    sleep: Sleep = asyncio.sleep,
) -> list[T]:
    """Run ``units`` concurrently ``batch_size`` at a time.

    A batch only starts once every unit of the previous batch has settled, and
    ``delay_seconds`` is awaited between batches (never after the last one).
    The first failure inside a batch propagates to the caller.
    """

    if batch_size < 1:
        raise ValueError("batch_size must be positive")

    pending = list(units)
    results: list[T] = []
    for start in range(0, len(pending), batch_size):
        batch = pending[start : start + batch_size]
        results.extend(await asyncio.gather(*(unit() for unit in batch)))
        if start + batch_size < len(pending):
            await sleep(delay_seconds)
    return results


__all__ = ["DEFAULT_BATCH_DELAY_SECONDS", "DEFAULT_BATCH_SIZE", "Sleep", "run_in_batches"]
