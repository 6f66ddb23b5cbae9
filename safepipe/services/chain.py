"""Chain combinator: compute the next outcome from a pending one and a step.

Transition rules, applied once the pending outcome resolves:

1. Succeeded with a non-empty value: run the step. A raised error becomes
   ``Failed(error, last_input=value)``.
2. Succeeded with an empty value (see ``is_default_value``): the step does
   not run; the result is a failure with no error carrying that value.
3. Skipped: passed through unchanged, the step does not run.
4. Failed: passed through with its error and re-keyed last input, the step
   does not run.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, TypeVar

from safepipe.models.outcome import Failed, Outcome, Skipped, Succeeded
from safepipe.services.config import PipelineSettings
from safepipe.services.steps import Step

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")

PendingOutcome = Awaitable[Outcome[T]]


async def advance(
    pending: PendingOutcome[T],
    step: Step[T, U],
    settings: PipelineSettings | None = None,
) -> Outcome[U]:
    """Await ``pending`` and apply ``step`` according to the transition rules."""
    settings = settings or PipelineSettings()
    incoming = await pending

    if isinstance(incoming, Succeeded):
        value = incoming.value
        try:
            empty = settings.treats_as_default(value)
        except Exception as e:
            if settings.log_failures:
                logger.warning(f"Empty-value check failed before step '{step.name}': {type(e).__name__}: {e}")
            return Failed.from_input(value, e)
        if empty:
            logger.debug(f"Step '{step.name}' not run: input {value!r} is empty")
            return Failed.from_input(value)
        return await _run_step(step, value, settings)

    if isinstance(incoming, Skipped):
        logger.debug(f"Step '{step.name}' skipped: {incoming.note}")
        return incoming

    if isinstance(incoming, Failed):
        return Failed(incoming.last_input.carry_forward(), incoming.error)

    raise TypeError(f"Expected an Outcome, got {type(incoming).__name__}")


async def _run_step(step: Step[T, U], value: T, settings: PipelineSettings) -> Outcome[U]:
    logger.debug(f"Running step '{step.name}' ({step.kind.value})")
    try:
        return await step.invoke(value)
    except asyncio.CancelledError as e:
        if not settings.capture_cancellation:
            raise
        if settings.log_failures:
            logger.warning(f"Step '{step.name}' was cancelled")
        return Failed.from_input(value, e)
    except Exception as e:
        if settings.log_failures:
            logger.warning(f"Step '{step.name}' failed: {type(e).__name__}: {e}")
        return Failed.from_input(value, e)


def then(
    pending: PendingOutcome[T],
    fn: Callable[[T], U],
    settings: PipelineSettings | None = None,
) -> Awaitable[Outcome[U]]:
    """Chain a synchronous ``T -> U`` step."""
    return advance(pending, Step.value(fn), settings)


def then_async(
    pending: PendingOutcome[T],
    fn: Callable[[T], Awaitable[U]],
    settings: PipelineSettings | None = None,
) -> Awaitable[Outcome[U]]:
    """Chain an async ``T -> U`` step."""
    return advance(pending, Step.awaitable_value(fn), settings)


def check(
    pending: PendingOutcome[T],
    fn: Callable[[T], Outcome[U]],
    settings: PipelineSettings | None = None,
) -> Awaitable[Outcome[U]]:
    """Chain a step that decides the next outcome itself.

    The step's outcome is returned as-is, so returning ``Skipped`` or
    ``Failed`` stops the rest of the chain.
    """
    return advance(pending, Step.outcome(fn), settings)


def check_async(
    pending: PendingOutcome[T],
    fn: Callable[[T], Awaitable[Outcome[U]]],
    settings: PipelineSettings | None = None,
) -> Awaitable[Outcome[Any]]:
    """Async form of :func:`check`."""
    return advance(pending, Step.awaitable_outcome(fn), settings)
