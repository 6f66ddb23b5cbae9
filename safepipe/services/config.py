"""Configuration management for SafePipe.

Pipelines read a ``PipelineSettings`` object. Settings can be built in code
or loaded from a JSON file:

- ~/.config/safepipe/config.json (or $SAFEPIPE_CONFIG_DIR/config.json)

Resolution order: explicit settings passed to a pipeline > file > defaults
"""

import json
import logging
import numbers
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Callable

from safepipe.models.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "SAFEPIPE_CONFIG_DIR"


def is_default_value(value: Any) -> bool:
    """Return True when ``value`` is the "empty" value steps must not see.

    ``None`` and numeric zeros (including ``False``) count as empty. Strings,
    containers and other objects never do, even when they are empty.
    """
    if value is None:
        return True
    if isinstance(value, numbers.Number):
        return value == 0
    return False


# Keys that are serialized; ``is_default`` is a callable and lives in code only
_BOOL_KEYS = ("guard_defaults", "capture_cancellation", "log_failures")


@dataclass
class PipelineSettings:
    """Behaviour switches shared by every link of one pipeline.

    The default-value guard stops a step from running on an "empty" value
    and turns the outcome into a failure with no error. It is kept on by
    default; switch it off with ``guard_defaults=False`` or replace the
    predicate with ``is_default``.
    """

    guard_defaults: bool = True
    capture_cancellation: bool = True
    log_failures: bool = True
    is_default: Callable[[Any], bool] = field(default=is_default_value, repr=False, compare=False)

    def treats_as_default(self, value: Any) -> bool:
        """Whether the guard applies to ``value`` under these settings."""
        return self.guard_defaults and self.is_default(value)

    def to_dict(self) -> dict:
        return {key: getattr(self, key) for key in _BOOL_KEYS}

    @classmethod
    def from_dict(cls, data: dict) -> "PipelineSettings":
        return cls(
            guard_defaults=data.get("guard_defaults", True),
            capture_cancellation=data.get("capture_cancellation", True),
            log_failures=data.get("log_failures", True),
        )

    @classmethod
    def validated_from_dict(cls, data: dict) -> "PipelineSettings":
        """Like ``from_dict`` but reject unknown keys and wrong types."""
        if not isinstance(data, dict):
            raise ConfigValidationError(f"Settings must be a JSON object, got {type(data).__name__}")
        known = {f.name for f in fields(cls)} - {"is_default"}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown setting(s): {', '.join(unknown)}",
                suggestion=f"valid keys are {', '.join(sorted(known))}",
            )
        for key in _BOOL_KEYS:
            if key in data and not isinstance(data[key], bool):
                raise ConfigValidationError(f"Setting '{key}' must be true or false")
        return cls.from_dict(data)

    def merge_with(self, override: dict) -> "PipelineSettings":
        """Return new settings with the keys present in ``override`` applied.

        Takes a dict rather than settings because ``False`` is a meaningful
        override for every switch.
        """
        merged = {**self.to_dict(), **override}
        settings = PipelineSettings.validated_from_dict(merged)
        settings.is_default = self.is_default
        return settings


class SettingsManager:
    """Loads and saves pipeline settings from a JSON file."""

    CONFIG_FILE = "config.json"

    def __init__(self, config_dir: Path | None = None):
        if config_dir is None:
            env_dir = os.environ.get(CONFIG_DIR_ENV)
            config_dir = Path(env_dir) if env_dir else Path.home() / ".config" / "safepipe"
        self._config_dir = config_dir
        self._config_file = config_dir / self.CONFIG_FILE
        self._settings: PipelineSettings | None = None

    @property
    def config_file(self) -> Path:
        return self._config_file

    @property
    def settings(self) -> PipelineSettings:
        if self._settings is None:
            self._settings = self._load_settings()
        return self._settings

    def _load_settings(self) -> PipelineSettings:
        """Load settings from disk, falling back to defaults on a bad file."""
        if self._config_file.exists():
            try:
                data = json.loads(self._config_file.read_text())
                return PipelineSettings.validated_from_dict(data)
            except (json.JSONDecodeError, ConfigValidationError) as e:
                logger.warning(f"Ignoring unreadable config {self._config_file}: {e}")
        return PipelineSettings()

    def save_settings(self, settings: PipelineSettings) -> None:
        self._config_dir.mkdir(parents=True, exist_ok=True)
        self._config_file.write_text(json.dumps(settings.to_dict(), indent=2))
        self._settings = settings

    def resolve(self, override: PipelineSettings | None = None) -> PipelineSettings:
        """Explicit settings win over whatever is on disk."""
        if override is not None:
            return override
        return self.settings
