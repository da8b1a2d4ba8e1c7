"""Domain-level exceptions.

Services and adapters raise these errors to express business rule violations
and storage failures. The API layer maps them to HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class PermissionDeniedError(DomainError):
    """Caller lacks permission for the requested action."""


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class AuthenticationError(DomainError):
    """Credentials are missing or do not match a known user."""


class StorageError(DomainError):
    """The backing store failed to complete an operation."""
