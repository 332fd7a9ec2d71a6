"""Custom exceptions for projplan."""


class ProjplanError(Exception):
    """Base exception for all projplan errors."""

    pass


class ValidationError(ProjplanError):
    """Raised when validation fails."""

    pass


class InvalidTaskError(ValidationError):
    """Raised when a single task is malformed."""

    pass


class CircularDependencyError(ValidationError):
    """Raised when a circular dependency is detected and cycles are rejected."""

    pass


class ParseError(ProjplanError):
    """Raised when an input file cannot be parsed."""

    pass
