"""SafePipe: railway-oriented pipelines of outcome-aware steps."""

from safepipe.models import (
    ConfigError,
    ConfigValidationError,
    Failed,
    InputKind,
    LastGoodInput,
    Outcome,
    PipelineFailedError,
    PipelineUsageError,
    SafePipeError,
    SkipInfo,
    Skipped,
    StepShapeError,
    Succeeded,
)
from safepipe.services.config import PipelineSettings, SettingsManager, is_default_value
from safepipe.services.observers import describe, log_outcome
from safepipe.services.pipeline import Pipeline, run_pipeline, start_with
from safepipe.services.steps import Step, StepKind
from safepipe.services.terminal import as_error, as_value, resolve_sync

__version__ = "0.1.0"

__all__ = [
    "Outcome",
    "Succeeded",
    "Skipped",
    "Failed",
    "SkipInfo",
    "LastGoodInput",
    "InputKind",
    "Pipeline",
    "start_with",
    "run_pipeline",
    "Step",
    "StepKind",
    "PipelineSettings",
    "SettingsManager",
    "is_default_value",
    "describe",
    "log_outcome",
    "as_value",
    "as_error",
    "resolve_sync",
    "SafePipeError",
    "StepShapeError",
    "PipelineFailedError",
    "PipelineUsageError",
    "ConfigError",
    "ConfigValidationError",
]
