"""Auth service: password hashing and credential checks.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import bcrypt

from domain.model.errors import AuthenticationError
from domain.model.user import User
from port.storage import Storage

BCRYPT_ROUNDS = 12


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def _verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def authenticate(storage: Storage, username: str, password: str) -> User:
    """Authenticate a user by username and password.

    Does not reveal whether the username exists.

    Raises:
        AuthenticationError: unknown username or wrong password
    """
    user = storage.get_user_by_username(username)
    if not user or not _verify_password(password, user.password):
        raise AuthenticationError("Invalid username or password")
    return user
