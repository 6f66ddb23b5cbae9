"""Services for SafePipe."""

from safepipe.services.config import PipelineSettings, SettingsManager, is_default_value
from safepipe.services.steps import Step, StepKind
from safepipe.services.pipeline import Pipeline, run_pipeline, start_with

__all__ = [
    "PipelineSettings",
    "SettingsManager",
    "is_default_value",
    "Step",
    "StepKind",
    "Pipeline",
    "run_pipeline",
    "start_with",
]
