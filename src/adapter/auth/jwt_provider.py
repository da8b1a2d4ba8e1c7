"""JWT identity provider backed by python-jose."""

from datetime import datetime, timedelta, timezone
from logging import getLogger

from jose import JWTError, jwt

from domain.model.user import User
from port.storage import Storage

logger = getLogger(__name__)

JWT_ALGORITHM = "HS256"
JWT_EXPIRATION_DAYS = 7


class JwtAuthProvider:
    def __init__(self, secret_key: str | None, expiration_days: int = JWT_EXPIRATION_DAYS):
        if not secret_key:
            raise ValueError(
                "JWT_SECRET_KEY environment variable is required. "
                "Generate a secure key with: openssl rand -hex 32"
            )
        self.secret_key = secret_key
        self.expiration_days = expiration_days

    def issue_token(self, user: User) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user.id),
            "role": user.role,
            "exp": now + timedelta(days=self.expiration_days),
            "iat": now,
        }
        return jwt.encode(payload, self.secret_key, algorithm=JWT_ALGORITHM)

    def _verify(self, token: str) -> int | None:
        """Verify the token signature and expiry and return the user id."""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[JWT_ALGORITHM])
        except JWTError as e:
            logger.debug(f"JWT verification failed: {e}")
            return None

        subject = payload.get("sub")
        if subject is None or not str(subject).isdigit():
            return None
        return int(subject)

    def resolve(self, token: str | None, storage: Storage) -> User | None:
        if not token:
            return None
        user_id = self._verify(token)
        if user_id is None:
            return None
        return storage.get_user(user_id)
