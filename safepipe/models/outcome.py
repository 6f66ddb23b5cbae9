"""Outcome: the value in flight through a pipeline.

An outcome is one of three immutable variants:

- ``Succeeded(value)``: the step produced a value, keep going
- ``Skipped(info)``: stop here, but this is not an error
- ``Failed(last_input, error)``: a step raised (or a failure was synthesized);
  carries the input that was fed into the failing step

All accessors are total. They degrade to ``None`` rather than raising when
asked for something the variant does not hold.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")
X = TypeVar("X")

DEFAULT_SKIP_MESSAGE = "Skipping subsequent actions"


class InputKind(Enum):
    """What a failed outcome remembers about its last good input."""

    VALUE = "value"
    OUTCOME = "outcome"
    ABSENT = "absent"


@dataclass(frozen=True)
class LastGoodInput:
    """The input that was fed into the step that failed.

    A closed union of a plain value, a nested outcome, or nothing. Query it
    with :meth:`recover`, optionally asking for a specific type.
    """

    kind: InputKind = InputKind.ABSENT
    payload: Any = None

    @classmethod
    def of(cls, obj: Any) -> LastGoodInput:
        """Tag ``obj`` with the right kind."""
        if obj is None:
            return cls()
        if isinstance(obj, Outcome):
            return cls(kind=InputKind.OUTCOME, payload=obj)
        return cls(kind=InputKind.VALUE, payload=obj)

    @property
    def raw(self) -> Any:
        """Stored payload exactly as it was captured."""
        return self.payload

    def recover(self, as_type: type[X] | None = None) -> X | None:
        """Recover the input, optionally as a specific type.

        A nested outcome is unwrapped to its value. ``None`` is returned
        when nothing was stored or the stored input is not an ``as_type``.
        """
        if self.kind is InputKind.ABSENT:
            return None
        candidate = self.payload.value if self.kind is InputKind.OUTCOME else self.payload
        if as_type is None or isinstance(candidate, as_type):
            return candidate
        return None

    def carry_forward(self) -> LastGoodInput:
        """Re-key the input for the next link of the chain.

        Nested outcomes whose value can be recovered are flattened into a
        plain value; anything else is kept as stored.
        """
        if self.kind is InputKind.OUTCOME:
            recovered = self.recover()
            if recovered is not None:
                return LastGoodInput(kind=InputKind.VALUE, payload=recovered)
        return self


@dataclass(frozen=True)
class SkipInfo:
    """Diagnostic note attached to a skipped outcome."""

    message: str = DEFAULT_SKIP_MESSAGE


class Outcome(Generic[T]):
    """Base class for the three outcome variants. Never instantiated directly."""

    __slots__ = ()

    @property
    def is_ok(self) -> bool:
        """True for Succeeded and Skipped; skipping is not an error."""
        return not isinstance(self, Failed)

    @property
    def is_succeeded(self) -> bool:
        return isinstance(self, Succeeded)

    @property
    def is_skipped(self) -> bool:
        return isinstance(self, Skipped)

    @property
    def is_failed(self) -> bool:
        return isinstance(self, Failed)

    @property
    def value(self) -> T | None:
        return None

    @property
    def error(self) -> BaseException | None:
        return None

    def recoverable_input(self, as_type: type[X] | None = None) -> X | None:
        """Input into the failed step, recovered as ``as_type``.

        Only failed outcomes carry one; every other variant returns ``None``.
        """
        return None

    def input_into_failed_step(self) -> Any:
        """Untyped input into the failed step, or ``None``."""
        return None


@dataclass(frozen=True)
class Succeeded(Outcome[T]):
    """A step completed and produced ``value``."""

    _value: T

    @property
    def value(self) -> T:
        return self._value

    def __repr__(self) -> str:
        return f"Succeeded({self._value!r})"


@dataclass(frozen=True)
class Skipped(Outcome[T]):
    """The chain was deliberately stopped. Holds no value, only a note."""

    info: SkipInfo = field(default_factory=SkipInfo)

    def __post_init__(self) -> None:
        # Accept a bare message: Skipped("nothing to do")
        if isinstance(self.info, str):
            object.__setattr__(self, "info", SkipInfo(message=self.info))

    @classmethod
    def because(cls, note: str | SkipInfo | None = None) -> Skipped[Any]:
        """Build a skip from a message, a ``SkipInfo`` or nothing."""
        if note is None:
            return cls()
        if isinstance(note, SkipInfo):
            return cls(info=note)
        return cls(info=SkipInfo(message=note))

    @property
    def note(self) -> str:
        return self.info.message

    def __repr__(self) -> str:
        return f"Skipped({self.info.message!r})"


@dataclass(frozen=True)
class Failed(Outcome[T]):
    """A step raised, or a failure was synthesized without an exception.

    ``last_input`` is the value fed into the step that failed. It is never
    changed by later links of the chain, only re-keyed.
    """

    last_input: LastGoodInput = field(default_factory=LastGoodInput)
    cause: BaseException | None = None

    @classmethod
    def from_input(cls, value: Any, error: BaseException | None = None) -> Failed[Any]:
        return cls(last_input=LastGoodInput.of(value), cause=error)

    @property
    def error(self) -> BaseException | None:
        return self.cause

    def recoverable_input(self, as_type: type[X] | None = None) -> X | None:
        return self.last_input.recover(as_type)

    def input_into_failed_step(self) -> Any:
        return self.last_input.raw

    def __repr__(self) -> str:
        return f"Failed(error={self.cause!r}, last_input={self.last_input.raw!r})"
