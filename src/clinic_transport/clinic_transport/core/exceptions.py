class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid (bad date, bad form data, ...)."""


class NotFoundError(DomainError):
    """Raised when a referenced patient/therapist/activity/record is missing."""
