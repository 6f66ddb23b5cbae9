"""Shared test fixtures for SafePipe."""

import pytest

from safepipe.services.config import PipelineSettings
from safepipe.tests.helpers import Monitor


@pytest.fixture
def monitor() -> Monitor:
    return Monitor()


@pytest.fixture
def settings() -> PipelineSettings:
    """Settings with failure logging switched off to keep output quiet."""
    return PipelineSettings(log_failures=False)


@pytest.fixture
def config_dir(tmp_path):
    """Empty directory for settings files."""
    path = tmp_path / "config"
    path.mkdir()
    return path
