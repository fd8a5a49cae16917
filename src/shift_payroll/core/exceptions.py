class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class MalformedTimeError(ValidationError, ValueError):
    """Raised when a wall-clock value is not a valid "HH:MM" string."""


class NotFoundError(DomainError):
    """Raised when a referenced shift, organization or member does not exist."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
