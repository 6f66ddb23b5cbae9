"""Exception hierarchy for SafePipe.

Step errors never use these classes: they are captured into ``Failed``
outcomes. These are raised only at the boundaries where the library hands
control back to the host (terminal operations, configuration, misuse).
"""


class SafePipeError(Exception):
    """Base exception for all SafePipe errors.

    Carries an optional suggestion telling the caller how to recover.
    """

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion

    def __str__(self) -> str:
        if self.suggestion:
            return f"{self.message} ({self.suggestion})"
        return self.message


class StepShapeError(SafePipeError):
    """A step returned something that does not match its declared kind."""

    pass


class PipelineFailedError(SafePipeError):
    """A failed outcome with no captured error was converted to an exception."""

    def __init__(self, outcome, message: str = "Pipeline failed without a captured error") -> None:
        super().__init__(message)
        self.outcome = outcome

    @property
    def last_input(self):
        """The input that was fed into the failing step, if any."""
        return self.outcome.input_into_failed_step()


class PipelineUsageError(SafePipeError):
    """The pipeline API was called in a context that cannot work."""

    pass


class ConfigError(SafePipeError):
    """Configuration is invalid or missing."""

    pass


class ConfigValidationError(ConfigError):
    """Configuration value failed validation."""

    pass
