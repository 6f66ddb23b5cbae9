"""Data models for SafePipe."""

from .outcome import (
    Outcome,
    Succeeded,
    Skipped,
    Failed,
    SkipInfo,
    LastGoodInput,
    InputKind,
)
from .exceptions import (
    SafePipeError,
    StepShapeError,
    PipelineFailedError,
    PipelineUsageError,
    ConfigError,
    ConfigValidationError,
)

__all__ = [
    # Outcomes
    "Outcome",
    "Succeeded",
    "Skipped",
    "Failed",
    "SkipInfo",
    "LastGoodInput",
    "InputKind",
    # Exceptions
    "SafePipeError",
    "StepShapeError",
    "PipelineFailedError",
    "PipelineUsageError",
    "ConfigError",
    "ConfigValidationError",
]
