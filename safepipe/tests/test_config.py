"""Tests for pipeline settings and the settings file."""

import json
import logging
from decimal import Decimal
from pathlib import Path

import pytest

from safepipe.models.exceptions import ConfigValidationError
from safepipe.services.config import (
    CONFIG_DIR_ENV,
    PipelineSettings,
    SettingsManager,
    is_default_value,
)


class TestIsDefaultValue:
    @pytest.mark.parametrize("value", [None, 0, 0.0, 0j, False, Decimal(0)])
    def test_empty_values(self, value):
        assert is_default_value(value) is True

    @pytest.mark.parametrize("value", ["", [], {}, (), 1, True, "None", object()])
    def test_non_empty_values(self, value):
        assert is_default_value(value) is False


class TestPipelineSettings:
    def test_defaults(self):
        settings = PipelineSettings()
        assert settings.guard_defaults is True
        assert settings.capture_cancellation is True
        assert settings.log_failures is True
        assert settings.is_default is is_default_value

    def test_to_dict(self):
        settings = PipelineSettings(guard_defaults=False)
        assert settings.to_dict() == {
            "guard_defaults": False,
            "capture_cancellation": True,
            "log_failures": True,
        }

    def test_from_dict_empty(self):
        assert PipelineSettings.from_dict({}) == PipelineSettings()

    def test_from_dict_with_values(self):
        settings = PipelineSettings.from_dict({"capture_cancellation": False})
        assert settings.capture_cancellation is False
        assert settings.guard_defaults is True

    def test_treats_as_default_respects_switch(self):
        assert PipelineSettings().treats_as_default(0) is True
        assert PipelineSettings(guard_defaults=False).treats_as_default(0) is False

    def test_validated_rejects_unknown_keys(self):
        with pytest.raises(ConfigValidationError) as exc_info:
            PipelineSettings.validated_from_dict({"retries": 3})
        assert "retries" in str(exc_info.value)
        assert "guard_defaults" in str(exc_info.value)

    def test_validated_rejects_wrong_type(self):
        with pytest.raises(ConfigValidationError, match="log_failures"):
            PipelineSettings.validated_from_dict({"log_failures": "yes"})

    def test_merge_with_override(self):
        predicate = lambda v: v == ""
        base = PipelineSettings(is_default=predicate)
        merged = base.merge_with({"guard_defaults": False})
        assert merged.guard_defaults is False
        assert merged.log_failures is True
        assert merged.is_default is predicate

    def test_merge_with_empty_override(self):
        base = PipelineSettings(log_failures=False)
        assert base.merge_with({}) == base


class TestSettingsManager:
    def test_missing_file_gives_defaults(self, config_dir: Path):
        manager = SettingsManager(config_dir=config_dir)
        assert manager.settings == PipelineSettings()

    def test_save_and_reload(self, config_dir: Path):
        manager = SettingsManager(config_dir=config_dir)
        manager.save_settings(PipelineSettings(guard_defaults=False))

        data = json.loads(manager.config_file.read_text())
        assert data["guard_defaults"] is False

        reloaded = SettingsManager(config_dir=config_dir)
        assert reloaded.settings.guard_defaults is False

    def test_corrupt_file_gives_defaults(self, config_dir: Path):
        (config_dir / "config.json").write_text("{not json")
        manager = SettingsManager(config_dir=config_dir)
        assert manager.settings == PipelineSettings()

    def test_wrong_typed_value_gives_defaults(self, config_dir: Path, caplog):
        (config_dir / "config.json").write_text(json.dumps({"guard_defaults": "false"}))
        manager = SettingsManager(config_dir=config_dir)
        with caplog.at_level(logging.WARNING, logger="safepipe.services.config"):
            settings = manager.settings
        assert settings == PipelineSettings()
        assert "guard_defaults" in caplog.text

    def test_unknown_key_gives_defaults(self, config_dir: Path, caplog):
        (config_dir / "config.json").write_text(json.dumps({"guard_defaults": False, "retries": 3}))
        manager = SettingsManager(config_dir=config_dir)
        with caplog.at_level(logging.WARNING, logger="safepipe.services.config"):
            settings = manager.settings
        assert settings == PipelineSettings()
        assert "retries" in caplog.text

    def test_non_object_file_gives_defaults(self, config_dir: Path):
        (config_dir / "config.json").write_text("[1, 2]")
        manager = SettingsManager(config_dir=config_dir)
        assert manager.settings == PipelineSettings()

    def test_env_var_sets_directory(self, config_dir: Path, monkeypatch):
        monkeypatch.setenv(CONFIG_DIR_ENV, str(config_dir))
        manager = SettingsManager()
        assert manager.config_file == config_dir / "config.json"

    def test_resolve_prefers_explicit(self, config_dir: Path):
        manager = SettingsManager(config_dir=config_dir)
        explicit = PipelineSettings(log_failures=False)
        assert manager.resolve(explicit) is explicit
        assert manager.resolve() == PipelineSettings()
