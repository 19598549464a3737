"""Custom exceptions for steporder."""


class StepOrderError(Exception):
    """Base exception for all steporder errors."""

    pass


class ValidationError(StepOrderError):
    """Raised when validation fails."""

    pass


class CircularDependencyError(ValidationError):
    """Raised when a run cannot finish because tasks are stuck behind a cycle."""

    def __init__(self, message: str, unfinished: list[str] | None = None):
        super().__init__(message)
        self.unfinished = sorted(unfinished or [])


class MissingReferenceError(ValidationError):
    """Raised when a referenced task does not exist."""

    pass


class InvalidTaskError(ValidationError):
    """Raised when a task cannot be priced by the cost function."""

    pass


class InvariantViolationError(StepOrderError):
    """Raised when the scheduler detects an internal inconsistency."""

    pass


class ParseError(StepOrderError):
    """Raised when instruction parsing fails."""

    pass
