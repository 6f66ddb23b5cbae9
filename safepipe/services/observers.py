"""Observer combinators: side-effect taps that never change the outcome.

Each observer awaits the pending outcome, calls the callback when the
outcome matches, and returns the very same outcome so the chain can go on.
Callback return values are ignored. Callback errors are not captured; they
propagate to whoever awaits the chain.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, TypeVar

from safepipe.models.outcome import Outcome

T = TypeVar("T")

Observer = Callable[[Outcome[T]], Any]


async def _observe(
    pending: Awaitable[Outcome[T]],
    fires: Callable[[Outcome[T]], bool],
    callback: Observer[T],
) -> Outcome[T]:
    outcome = await pending
    if fires(outcome):
        callback(outcome)
    return outcome


def on_success(pending: Awaitable[Outcome[T]], callback: Observer[T]) -> Awaitable[Outcome[T]]:
    """Call ``callback`` only when the outcome is strictly Succeeded."""
    return _observe(pending, lambda o: o.is_ok and not o.is_skipped, callback)


def on_failure(pending: Awaitable[Outcome[T]], callback: Observer[T]) -> Awaitable[Outcome[T]]:
    """Call ``callback`` only when the outcome is Failed."""
    return _observe(pending, lambda o: not o.is_ok, callback)


def on_skip(pending: Awaitable[Outcome[T]], callback: Observer[T]) -> Awaitable[Outcome[T]]:
    """Call ``callback`` only when the outcome is Skipped."""
    return _observe(pending, lambda o: o.is_skipped, callback)


def do(pending: Awaitable[Outcome[T]], callback: Observer[T]) -> Awaitable[Outcome[T]]:
    """Call ``callback`` whatever the outcome. Meant for logging and diagnostics."""
    return _observe(pending, lambda o: True, callback)


def describe(outcome: Outcome[Any]) -> str:
    """One-line human readable summary of an outcome."""
    if outcome.is_skipped:
        return f"skipped: {outcome.note}"
    if outcome.is_failed:
        error = outcome.error
        cause = f"{type(error).__name__}: {error}" if error is not None else "no error captured"
        return f"failed ({cause}) on input {outcome.input_into_failed_step()!r}"
    return f"succeeded with {outcome.value!r}"


def log_outcome(
    logger: logging.Logger | None = None,
    level: int = logging.INFO,
    prefix: str = "pipeline",
) -> Observer[Any]:
    """Build an observer that writes one log record per outcome.

    Example:
        await start_with(order).then(price).do(log_outcome(logger))
    """
    target = logger or logging.getLogger("safepipe")

    def _log(outcome: Outcome[Any]) -> None:
        target.log(level, f"{prefix} {describe(outcome)}")

    return _log
