"""Custom exceptions for phasedeps."""


class PhasedepsError(Exception):
    """Base exception for all phasedeps errors."""

    pass


class ValidationError(PhasedepsError):
    """Raised when input validation fails."""

    pass


class CircularDependencyError(ValidationError):
    """Raised when the phase dependency graph contains a cycle."""

    pass


class MissingReferenceError(ValidationError):
    """Raised when a dependency references a phase that does not exist."""

    pass


class ParseError(PhasedepsError):
    """Raised when YAML parsing fails."""

    pass
