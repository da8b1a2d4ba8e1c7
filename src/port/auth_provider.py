from typing import Protocol

from domain.model.user import User
from port.storage import Storage


class AuthProvider(Protocol):
    """Protocol for identity providers consulted before store operations."""

    def resolve(self, token: str | None, storage: Storage) -> User | None:
        """Return the user a bearer token identifies, or None if it identifies nobody."""
        ...

    def issue_token(self, user: User) -> str:
        """Create a bearer token that resolve() maps back to the user."""
        ...
