"""
ObservableProcessor - binds asynchronous work to observable state.

A processor turns one evolving input into an output:

    processor = ObservableProcessor(search).debounce(0.3).timeout(5)
    async with processor:
        processor.subscribe(render)
        processor.input = "fon"
        processor.input = "fondue"   # only "fondue" is searched

Lifecycle of every input change:

    Pending   delay + debounce on the processor's clock; a newer input restarts it
    Running   the processor is invoked, raced against the timeout (is_busy=True)
    Retrying  failed attempts are repeated up to `retries` more times
    Done      output (error cleared) or the last error (output kept), is_busy=False

All transitions happen on the single serving task, which owns the mailbox and
notifies subscribers in order. Each cycle is tagged with a generation number;
completions from superseded generations are discarded.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import math
from typing import Any, Callable, Generic

import anyio
from anyio import to_thread
from anyio.abc import TaskGroup, TaskStatus
from typing_extensions import Self

from ..clock import Clock, SystemClock
from ..config import FondueSettings, get_settings
from ..errors import FondueError, ProcessorError, ProcessorTimeout
from ..type_utils import I, O, MaybeAwaitableCallable
from .state import NO_INPUT, ProcessorState


logger = logging.getLogger(__name__)

Subscriber = Callable[[ProcessorState[I, O]], Any]


class ObservableProcessor(Generic[I, O]):
    """
    Generic view-model style wrapper around an async `processor(input)`.

    Facets: `input`, `output`, `is_busy`, `error` (plus `has_error` and the
    combined `state` snapshot). They are only ever changed by the serving
    task, so reading `state` always gives values produced by one transition.

    Configure with the chainable `delay()`, `debounce()`, `timeout()`,
    `retry()` and `queue()` before serving; defaults come from
    `FondueSettings`.
    """

    def __init__(
        self,
        processor: MaybeAwaitableCallable[I, O],
        *,
        clock: Clock | None = None,
        settings: FondueSettings | None = None,
    ):
        settings = settings or get_settings()
        self._processor = processor
        self._clock: Clock = clock or SystemClock()

        self._delay = settings.delay_seconds
        self._debounce = settings.debounce_seconds
        self._timeout = settings.timeout_seconds
        self._retries = settings.retries
        self._limiter: anyio.CapacityLimiter | None = None

        self._state: ProcessorState[I, O] = ProcessorState()
        self._subscribers: list[Subscriber] = []

        self._generation = 0
        self._cycle_scope: anyio.CancelScope | None = None
        self._task_group: TaskGroup | None = None
        self._host: TaskGroup | None = None

        # Unbounded, so submitting input never blocks the caller.
        self._outbox, self._mailbox = anyio.create_memory_object_stream(math.inf)
        self._closed = False

    # --- Facets ---

    @property
    def state(self) -> ProcessorState[I, O]:
        return self._state

    @property
    def input(self) -> I | None:
        return self._state.input

    @input.setter
    def input(self, value: I | None) -> None:
        self.submit(value)

    @property
    def output(self) -> O | None:
        return self._state.output

    @property
    def is_busy(self) -> bool:
        return self._state.is_busy

    @property
    def error(self) -> BaseException | None:
        return self._state.error

    @property
    def has_error(self) -> bool:
        return self._state.has_error

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """
        Call `subscriber` with every new state snapshot.

        The current snapshot is delivered immediately. Returns a function that
        removes the subscription.
        """
        self._subscribers.append(subscriber)
        self._notify(subscriber, self._state)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    # --- Triggers ---

    def submit(self, value: I | None) -> None:
        """
        Queue an input change.

        Any in-flight work for an older input is cancelled. `None` clears the
        input without starting anything. From a foreign thread, use
        `anyio.from_thread.run_sync(processor.submit, value)`.
        """
        self._outbox.send_nowait(("$input", value))

    def start(self) -> Self:
        """Triggers an update without inputs."""
        self.submit(NO_INPUT)
        return self

    def autostart(self) -> Self:
        """Triggers an update without inputs if there is no output yet."""
        if self._state.output is None:
            self.start()
        return self

    # --- Configuration ---

    def delay(self, seconds: float) -> Self:
        self._delay = _non_negative("delay", seconds)
        return self

    def debounce(self, seconds: float) -> Self:
        self._debounce = _non_negative("debounce", seconds)
        return self

    def timeout(self, seconds: float) -> Self:
        if seconds <= 0:
            raise ValueError(f"timeout must be positive, got {seconds!r}")
        self._timeout = seconds
        return self

    def retry(self, count: int) -> Self:
        self._retries = int(_non_negative("retry", count))
        return self

    def queue(self, limiter: anyio.CapacityLimiter | None) -> Self:
        """Limit the worker threads used to run synchronous processors."""
        self._limiter = limiter
        return self

    # --- Serving ---

    async def serve(self, *, task_status: TaskStatus[None] = anyio.TASK_STATUS_IGNORED) -> None:
        """
        Process input changes until cancelled.

        Start it with `await task_group.start(processor.serve)` or use the
        processor as an async context manager.
        """
        if self._task_group is not None:
            raise RuntimeError("ObservableProcessor is already serving")
        if self._closed:
            raise RuntimeError("ObservableProcessor is closed")

        try:
            async with anyio.create_task_group() as tg:
                self._task_group = tg
                task_status.started()
                async for message in self._mailbox:
                    self._handle(message)
        finally:
            self._task_group = None
            self._cycle_scope = None
            self.close()

    def close(self) -> None:
        """
        Release the mailbox. Called when serving stops.

        Only needed for a processor that is discarded without ever serving.
        Submitting input afterwards raises `anyio.ClosedResourceError`.
        """
        self._closed = True
        self._outbox.close()
        self._mailbox.close()

    async def __aenter__(self) -> Self:
        host = anyio.create_task_group()
        await host.__aenter__()
        self._host = host
        await host.start(self.serve)
        return self

    async def __aexit__(self, *exc_info: Any) -> bool | None:
        host, self._host = self._host, None
        assert host is not None
        host.cancel_scope.cancel()
        return await host.__aexit__(*exc_info)

    # --- Internals ---

    def _handle(self, message: tuple[Any, ...]) -> None:
        match message:
            case ("$input", value):
                self._generation += 1
                if self._cycle_scope is not None:
                    self._cycle_scope.cancel()
                    self._cycle_scope = None
                self._publish(input=value, is_busy=False)
                if value is not None:
                    assert self._task_group is not None
                    self._cycle_scope = anyio.CancelScope()
                    self._task_group.start_soon(
                        self._cycle, self._generation, value, self._cycle_scope
                    )

            case ("$busy", int() as generation) if generation == self._generation:
                self._publish(is_busy=True)

            case ("$success", int() as generation, output) if generation == self._generation:
                self._cycle_scope = None
                self._publish(output=output, error=None, is_busy=False)

            case ("$failure", int() as generation, error) if generation == self._generation:
                self._cycle_scope = None
                self._publish(error=error, is_busy=False)

            case (str() as kind, int() as generation, *_):
                logger.debug(
                    f"Discarding stale {kind} from generation {generation} "
                    f"(current is {self._generation})"
                )

            case _:
                logger.warning(f"Unexpected message: {message!r}")

    def _publish(self, **changes: Any) -> None:
        self._state = state = dataclasses.replace(self._state, **changes)
        logger.debug(f"Generation {self._generation}: {state}")
        for subscriber in list(self._subscribers):
            self._notify(subscriber, state)

    @staticmethod
    def _notify(subscriber: Subscriber, state: ProcessorState) -> None:
        try:
            subscriber(state)
        except Exception:
            logger.exception(f"Subscriber {subscriber!r} failed")

    async def _cycle(self, generation: int, value: I, scope: anyio.CancelScope) -> None:
        with scope:
            await self._clock.sleep(self._delay)
            await self._clock.sleep(self._debounce)

            self._outbox.send_nowait(("$busy", generation))
            attempts = self._retries + 1
            last_error: FondueError | None = None
            for attempt in range(1, attempts + 1):
                try:
                    output = await self._attempt(value)
                except (ProcessorTimeout, ProcessorError) as e:
                    last_error = e
                    logger.warning(f"Attempt {attempt}/{attempts} for {value!r} failed: {e}")
                    continue
                self._outbox.send_nowait(("$success", generation, output))
                return

            logger.error(f"All {attempts} attempts for {value!r} failed: {last_error}")
            self._outbox.send_nowait(("$failure", generation, last_error))

    async def _attempt(self, value: I) -> O:
        """Run the processor once, raced against the timeout on our clock."""
        results: list[O] = []
        failures: list[FondueError] = []

        async with anyio.create_task_group() as tg:

            async def work() -> None:
                try:
                    results.append(await self._invoke(value))
                except Exception as e:
                    failures.append(ProcessorError(e))
                tg.cancel_scope.cancel()

            async def watchdog() -> None:
                await self._clock.sleep(self._timeout)
                failures.append(ProcessorTimeout(self._timeout))
                tg.cancel_scope.cancel()

            tg.start_soon(work)
            tg.start_soon(watchdog)

        if results:
            return results[0]
        raise failures[0]

    async def _invoke(self, value: I) -> O:
        if _is_async(self._processor):
            result = self._processor(value)
        else:
            result = await to_thread.run_sync(
                self._processor, value, abandon_on_cancel=True, limiter=self._limiter
            )
        if inspect.isawaitable(result):
            return await result
        return result


def _is_async(processor: Callable[..., Any]) -> bool:
    """Coroutine functions and objects with an `async def __call__`."""
    return inspect.iscoroutinefunction(processor) or inspect.iscoroutinefunction(
        getattr(processor, "__call__", None)
    )


def _non_negative(name: str, value: float) -> float:
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value!r}")
    return value
