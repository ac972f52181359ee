class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class PersistenceError(DomainError):
    """Raised when the store is unreachable or rejects a write."""


class AuthorizationError(DomainError):
    """Raised when the shared passcode does not match."""
