"""Typed failures raised by the macro tracker core."""


class MacroTrackerError(Exception):
    """Base class for all application errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(MacroTrackerError):
    """A referenced food, meal or log entry does not exist."""


class InvalidInputError(MacroTrackerError):
    """Input is missing a required field or violates a constraint."""


class ConflictError(MacroTrackerError):
    """A write would violate a uniqueness constraint."""


class UnexpectedError(MacroTrackerError):
    """The data store failed in a way the caller cannot fix."""
