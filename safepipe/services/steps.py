"""Step adapter: one contract for the four supported step shapes."""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, TypeVar

from safepipe.models.exceptions import StepShapeError
from safepipe.models.outcome import Outcome, Succeeded

T = TypeVar("T")
U = TypeVar("U")


class StepKind(Enum):
    """The shape of a step function, picked by whoever adds the step."""

    VALUE = "value"  # T -> U
    AWAITABLE_VALUE = "awaitable_value"  # T -> Awaitable[U]
    OUTCOME = "outcome"  # T -> Outcome[U]
    AWAITABLE_OUTCOME = "awaitable_outcome"  # T -> Awaitable[Outcome[U]]

    @property
    def is_async(self) -> bool:
        return self in (StepKind.AWAITABLE_VALUE, StepKind.AWAITABLE_OUTCOME)

    @property
    def returns_outcome(self) -> bool:
        return self in (StepKind.OUTCOME, StepKind.AWAITABLE_OUTCOME)


def _step_name(fn: Callable) -> str:
    return getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None) or repr(fn)


@dataclass(frozen=True)
class Step(Generic[T, U]):
    """A single pipeline step: T -> U, in one of four shapes.

    Example:
        Step.value(str.upper)
        Step.awaitable_outcome(fetch_user)
    """

    fn: Callable[[T], Any]
    kind: StepKind = StepKind.VALUE
    name: str = field(default="")

    def __post_init__(self) -> None:
        if not self.name:
            object.__setattr__(self, "name", _step_name(self.fn))

    @classmethod
    def value(cls, fn: Callable[[T], U], name: str = "") -> Step[T, U]:
        return cls(fn, StepKind.VALUE, name)

    @classmethod
    def awaitable_value(cls, fn: Callable[[T], Awaitable[U]], name: str = "") -> Step[T, U]:
        return cls(fn, StepKind.AWAITABLE_VALUE, name)

    @classmethod
    def outcome(cls, fn: Callable[[T], Outcome[U]], name: str = "") -> Step[T, U]:
        return cls(fn, StepKind.OUTCOME, name)

    @classmethod
    def awaitable_outcome(cls, fn: Callable[[T], Awaitable[Outcome[U]]], name: str = "") -> Step[T, U]:
        return cls(fn, StepKind.AWAITABLE_OUTCOME, name)

    async def invoke(self, value: T) -> Outcome[U]:
        """Run the step on an unwrapped value.

        Raises whatever the step raises, or ``StepShapeError`` when the
        result does not match ``kind``.
        """
        result = self.fn(value)

        if self.kind.is_async:
            if not inspect.isawaitable(result):
                raise StepShapeError(
                    f"Step '{self.name}' is declared async but returned {type(result).__name__}",
                    suggestion="use then()/check() for synchronous steps",
                )
            result = await result
        elif inspect.isawaitable(result):
            if inspect.iscoroutine(result):
                result.close()
            raise StepShapeError(
                f"Step '{self.name}' returned an awaitable",
                suggestion="use then_async()/check_async() for async steps",
            )

        if self.kind.returns_outcome:
            if not isinstance(result, Outcome):
                raise StepShapeError(
                    f"Step '{self.name}' must return an Outcome, got {type(result).__name__}",
                    suggestion="use then()/then_async() for steps returning plain values",
                )
            return result
        if isinstance(result, Outcome):
            raise StepShapeError(
                f"Step '{self.name}' returned an Outcome",
                suggestion="use check()/check_async() for steps deciding their own outcome",
            )
        return Succeeded(result)
