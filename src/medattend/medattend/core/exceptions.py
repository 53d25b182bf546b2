class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid and cannot be clamped."""


class NotFoundError(DomainError):
    """Raised when a subject, component, entry or posting id is not live."""


class PersistenceError(DomainError):
    """Raised by snapshot repositories when load/save fails."""
