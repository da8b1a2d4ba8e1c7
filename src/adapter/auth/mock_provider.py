"""Mock identity provider for local development and demos."""

from logging import getLogger

from domain.model.user import User
from port.storage import Storage

logger = getLogger(__name__)

DEFAULT_USER_ID = 1


class MockAuthProvider:
    """Treats the bearer token as a username.

    Requests without a token act as the default user, so the demo works
    without logging in.
    """

    def __init__(self, default_user_id: int | None = DEFAULT_USER_ID):
        self.default_user_id = default_user_id

    def resolve(self, token: str | None, storage: Storage) -> User | None:
        if not token:
            if self.default_user_id is None:
                return None
            return storage.get_user(self.default_user_id)

        user = storage.get_user_by_username(token)
        if user is None:
            logger.debug("Mock token matched no user", extra={"username": token})
        return user

    def issue_token(self, user: User) -> str:
        return user.username
