class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when an actor lacks permission or gives a wrong confirmation secret."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class StaleRevisionError(DomainError):
    """Raised when a meeting is not in the state a transition requires."""


class OracleUnavailableError(DomainError):
    """Raised when the name extraction oracle fails or returns unusable output."""
