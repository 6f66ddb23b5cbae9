"""Pipeline: a fluent chain of outcome-aware steps over one evolving value.

Example:
    outcome = await (
        start_with(order_id)
        .then(load_order)
        .then_async(reserve_stock)
        .check(require_payment)
        .on_failure(lambda o: logger.error(describe(o)))
    )

Every call returns a new ``Pipeline`` wrapping the next pending outcome.
Nothing runs until the pipeline is awaited (or ``run_sync()`` is called);
then each link fully resolves before the next one starts.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Generator, Generic, Iterable, TypeVar

from safepipe.models.outcome import Outcome, Succeeded
from safepipe.services import observers, terminal
from safepipe.services.chain import advance
from safepipe.services.config import PipelineSettings
from safepipe.services.steps import Step

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")


async def _ready(outcome: Outcome[T]) -> Outcome[T]:
    return outcome


class Pipeline(Generic[T]):
    """A pending outcome with chaining, observer and terminal operations.

    A pipeline resolves at most once. The first awaiter wraps the pending
    outcome in a task; every other awaiter, concurrent or later, waits on
    that same task.
    """

    def __init__(
        self,
        pending: Awaitable[Outcome[T]],
        settings: PipelineSettings | None = None,
    ) -> None:
        self._pending = pending
        self._settings = settings or PipelineSettings()
        self._outcome: Outcome[T] | None = None
        self._task: asyncio.Future[Outcome[T]] | None = None

    @classmethod
    def from_outcome(
        cls,
        outcome: Outcome[T],
        settings: PipelineSettings | None = None,
    ) -> Pipeline[T]:
        """Start a pipeline from an outcome that is already known."""
        return cls(_ready(outcome), settings)

    @property
    def settings(self) -> PipelineSettings:
        return self._settings

    @property
    def resolved(self) -> bool:
        return self._outcome is not None

    async def resolve(self) -> Outcome[T]:
        """Await the pending outcome once and cache it."""
        if self._outcome is None:
            if self._task is None:
                self._task = asyncio.ensure_future(self._pending)
            self._outcome = await self._task
        return self._outcome

    def __await__(self) -> Generator[Any, None, Outcome[T]]:
        return self.resolve().__await__()

    def _link(self, pending: Awaitable[Outcome[U]]) -> Pipeline[U]:
        return Pipeline(pending, self._settings)

    # --- Chaining ---

    def step(self, step: Step[T, U]) -> Pipeline[U]:
        """Chain a pre-built ``Step`` of any kind."""
        return self._link(advance(self.resolve(), step, self._settings))

    def then(self, fn: Callable[[T], U], name: str = "") -> Pipeline[U]:
        """Chain a synchronous ``T -> U`` step."""
        return self.step(Step.value(fn, name))

    def then_async(self, fn: Callable[[T], Awaitable[U]], name: str = "") -> Pipeline[U]:
        """Chain an async ``T -> U`` step."""
        return self.step(Step.awaitable_value(fn, name))

    def check(self, fn: Callable[[T], Outcome[U]], name: str = "") -> Pipeline[U]:
        """Chain a step that returns its own outcome (can skip or fail)."""
        return self.step(Step.outcome(fn, name))

    def check_async(self, fn: Callable[[T], Awaitable[Outcome[U]]], name: str = "") -> Pipeline[U]:
        """Async form of :meth:`check`."""
        return self.step(Step.awaitable_outcome(fn, name))

    # --- Observers ---

    def on_success(self, callback: observers.Observer[T]) -> Pipeline[T]:
        return self._link(observers.on_success(self.resolve(), callback))

    def on_failure(self, callback: observers.Observer[T]) -> Pipeline[T]:
        return self._link(observers.on_failure(self.resolve(), callback))

    def on_skip(self, callback: observers.Observer[T]) -> Pipeline[T]:
        return self._link(observers.on_skip(self.resolve(), callback))

    def do(self, callback: observers.Observer[T]) -> Pipeline[T]:
        return self._link(observers.do(self.resolve(), callback))

    # --- Terminal operations ---

    def throw_on_exception(self) -> Pipeline[T]:
        """Raise the captured error when awaited, if the pipeline failed."""
        return self._link(terminal.throw_on_exception(self.resolve()))

    async def value(self) -> T | None:
        return terminal.as_value(await self)

    async def error(self) -> BaseException | None:
        return terminal.as_error(await self)

    def run_sync(self) -> Outcome[T]:
        """Resolve from synchronous code. Not allowed inside an event loop."""
        return terminal.resolve_sync(self.resolve())


def start_with(value: T, settings: PipelineSettings | None = None) -> Pipeline[T]:
    """Entry point: a pipeline whose first outcome is ``Succeeded(value)``."""
    return Pipeline.from_outcome(Succeeded(value), settings)


async def run_pipeline(
    steps: Iterable[Step[Any, Any] | Callable[[Any], Any]],
    initial: Any,
    settings: PipelineSettings | None = None,
) -> Outcome[Any]:
    """Run a list of steps sequentially.

    Plain callables are treated as synchronous ``T -> U`` steps.

    Args:
        steps: Steps to execute, in order
        initial: Initial input value
        settings: Optional pipeline settings

    Returns:
        Final outcome (succeeded with the last value, or the first skip/failure)
    """
    settings = settings or PipelineSettings()
    outcome: Outcome[Any] = Succeeded(initial)
    for step in steps:
        if not isinstance(step, Step):
            step = Step.value(step)
        outcome = await advance(_ready(outcome), step, settings)
    logger.debug(f"Pipeline finished: {observers.describe(outcome)}")
    return outcome
