"""Tests for terminal operations."""

import pytest

from safepipe.models.exceptions import PipelineFailedError, PipelineUsageError
from safepipe.models.outcome import Failed, Skipped, Succeeded
from safepipe.services.terminal import as_error, as_value, resolve_sync, throw_on_exception


async def ready(outcome):
    return outcome


class TestCoercions:
    def test_as_value(self):
        assert as_value(Succeeded("a")) == "a"
        assert as_value(Skipped()) is None
        assert as_value(Failed.from_input("a")) is None

    def test_as_error(self):
        error = ValueError()
        assert as_error(Failed.from_input("a", error)) is error
        assert as_error(Failed.from_input("a")) is None
        assert as_error(Succeeded("a")) is None
        assert as_error(Skipped()) is None


class TestThrowOnException:
    @pytest.mark.asyncio
    async def test_success_is_returned(self):
        outcome = Succeeded("a")
        assert await throw_on_exception(ready(outcome)) is outcome

    @pytest.mark.asyncio
    async def test_skip_is_returned(self):
        outcome = Skipped()
        assert await throw_on_exception(ready(outcome)) is outcome

    @pytest.mark.asyncio
    async def test_captured_error_is_raised(self):
        error = NotImplementedError("later")
        with pytest.raises(NotImplementedError) as exc_info:
            await throw_on_exception(ready(Failed.from_input("a", error)))
        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_failure_without_error_raises_pipeline_failed(self):
        outcome = Failed.from_input(0)
        with pytest.raises(PipelineFailedError) as exc_info:
            await throw_on_exception(ready(outcome))
        assert exc_info.value.outcome is outcome
        assert exc_info.value.last_input == 0


class TestResolveSync:
    def test_resolves_outside_event_loop(self):
        assert resolve_sync(ready(Succeeded("a"))) == Succeeded("a")

    @pytest.mark.asyncio
    async def test_refuses_inside_event_loop(self):
        with pytest.raises(PipelineUsageError) as exc_info:
            resolve_sync(ready(Succeeded("a")))
        assert "await the pipeline instead" in str(exc_info.value)
