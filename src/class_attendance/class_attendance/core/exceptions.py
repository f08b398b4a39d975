class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class MalformedTokenError(ValidationError):
    """Raised when a scanned payload is not a well-formed attendance token."""


class StudentNotFoundError(DomainError):
    """Raised when a student id is not in the roster."""


class StoreUnavailableError(DomainError):
    """Raised when the record store's persistence medium cannot be used."""
