"""Testing utilities: a virtual clock and small waiting helpers."""

from __future__ import annotations

import heapq
import itertools
from typing import Any, Awaitable, Callable, TypeVar

import anyio
from anyio.lowlevel import checkpoint

from ..processor.state import ProcessorState


T = TypeVar("T")


class VirtualClock:
    """
    A clock that only moves when told to.

    Pass it to an `ObservableProcessor` and drive time with `advance()`:
    sleepers whose deadline falls inside the advanced span are woken in
    deadline order, and every task is allowed to settle after each wake-up.
    """

    def __init__(self, start: float = 0.0):
        self._now = start
        self._sleepers: list[tuple[float, int, anyio.Event]] = []
        self._counter = itertools.count()

    def current_time(self) -> float:
        return self._now

    async def sleep(self, seconds: float) -> None:
        if seconds <= 0:
            await checkpoint()
            return
        event = anyio.Event()
        heapq.heappush(self._sleepers, (self._now + seconds, next(self._counter), event))
        await event.wait()

    async def advance(self, seconds: float) -> None:
        """Move time forward by `seconds`, waking due sleepers along the way."""
        target = self._now + seconds
        await anyio.wait_all_tasks_blocked()
        while self._sleepers and self._sleepers[0][0] <= target:
            deadline, _, event = heapq.heappop(self._sleepers)
            self._now = max(self._now, deadline)
            event.set()
            await anyio.wait_all_tasks_blocked()
        self._now = target
        await anyio.wait_all_tasks_blocked()


class StateRecorder:
    """Subscriber that keeps every snapshot it receives."""

    def __init__(self):
        self.states: list[ProcessorState] = []

    def __call__(self, state: ProcessorState) -> None:
        self.states.append(state)

    @property
    def busy_flags(self) -> list[bool]:
        return [state.is_busy for state in self.states]

    @property
    def outputs(self) -> list[Any]:
        return [state.output for state in self.states]


async def with_timeout(awaitable: Awaitable[T], timeout: float) -> T:
    """Await `awaitable`, raising TimeoutError after `timeout` seconds."""
    with anyio.fail_after(timeout):
        return await awaitable


async def wait_for(
    condition: Callable[[], bool],
    timeout: float = 1.0,
    interval: float = 0.01,
) -> None:
    """Poll `condition` in real time until it holds, or raise TimeoutError."""
    with anyio.fail_after(timeout):
        while not condition():
            await anyio.sleep(interval)
