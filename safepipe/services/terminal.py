"""Terminal operations: turn an outcome back into plain values or exceptions."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Awaitable, TypeVar

from safepipe.models.exceptions import PipelineFailedError, PipelineUsageError
from safepipe.models.outcome import Outcome

logger = logging.getLogger(__name__)

T = TypeVar("T")


def as_value(outcome: Outcome[T]) -> T | None:
    """The succeeded value, or ``None`` for skipped and failed outcomes.

    Check ``is_ok``/``is_skipped`` first: ``None`` here does not tell an
    empty success apart from a failure.
    """
    return outcome.value if outcome.is_succeeded else None


def as_error(outcome: Outcome[Any]) -> BaseException | None:
    """The captured error of a failed outcome, or ``None``."""
    return outcome.error if outcome.is_failed else None


async def throw_on_exception(pending: Awaitable[Outcome[T]]) -> Outcome[T]:
    """Return the outcome unchanged unless it failed; then raise its error.

    A failure with no captured error raises ``PipelineFailedError``.
    """
    outcome = await pending
    if outcome.is_ok:
        return outcome

    error = as_error(outcome)
    if error is None:
        raise PipelineFailedError(outcome)
    raise error


async def _resolve(pending: Awaitable[Outcome[T]]) -> Outcome[T]:
    return await pending


def resolve_sync(pending: Awaitable[Outcome[T]]) -> Outcome[T]:
    """Run a pending outcome to completion from synchronous code.

    Raises:
        PipelineUsageError: If called while an event loop is running
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        pass
    else:
        if inspect.iscoroutine(pending):
            pending.close()
        raise PipelineUsageError(
            "resolve_sync() cannot be used inside a running event loop",
            suggestion="await the pipeline instead",
        )
    logger.debug("Resolving pipeline synchronously")
    return asyncio.run(_resolve(pending))
