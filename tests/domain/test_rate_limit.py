from __future__ import annotations

import asyncio
import math
from collections.abc import Awaitable, Callable  # noqa: TC003

import pytest

from sitepass.domain.rate_limit import run_in_batches


class _Recorder:
    def __init__(self) -> None:
        self.events: list[str] = []
        self.sleeps: list[float] = []

    async def sleep(self, seconds: float) -> None:
        self.events.append("sleep")
        self.sleeps.append(seconds)

    def unit(self, value: int) -> Callable[[], Awaitable[int]]:
        async def run() -> int:
            self.events.append(f"start {value}")
            await asyncio.sleep(0)
            self.events.append(f"end {value}")
            return value

        return run


@pytest.mark.parametrize(("count", "batch_size"), [(0, 5), (1, 5), (5, 5), (6, 5), (12, 5), (7, 1)])
def test_sleeps_only_between_batches(count: int, batch_size: int) -> None:
    recorder = _Recorder()

    results = asyncio.run(
        run_in_batches(
            [recorder.unit(value) for value in range(count)],
            batch_size=batch_size,
            delay_seconds=0.5,
            sleep=recorder.sleep,
        )
    )

    assert results == list(range(count))
    expected_sleeps = max(math.ceil(count / batch_size) - 1, 0)
    assert recorder.sleeps == [0.5] * expected_sleeps


def test_batch_settles_before_next_starts() -> None:
    recorder = _Recorder()

    asyncio.run(
        run_in_batches(
            [recorder.unit(value) for value in range(4)],
            batch_size=2,
            delay_seconds=1.0,
            sleep=recorder.sleep,
        )
    )

    sleep_at = recorder.events.index("sleep")
    before, after = recorder.events[:sleep_at], recorder.events[sleep_at + 1 :]
    assert sorted(before) == ["end 0", "end 1", "start 0", "start 1"]
    assert sorted(after) == ["end 2", "end 3", "start 2", "start 3"]
    # Units inside one batch run concurrently
    assert before[:2] == ["start 0", "start 1"]


def test_rejects_non_positive_batch_size() -> None:
    with pytest.raises(ValueError, match="batch_size"):
        asyncio.run(run_in_batches([], batch_size=0))


def test_failure_propagates_from_batch() -> None:
    async def boom() -> int:
        raise RuntimeError("boom")

    async def no_sleep(_: float) -> None:
        return None

    with pytest.raises(RuntimeError, match="boom"):
        asyncio.run(run_in_batches([boom], sleep=no_sleep))
