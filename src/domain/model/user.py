from dataclasses import dataclass

from domain.model.errors import PermissionDeniedError

DEFAULT_HOURLY_RATE = 150

ROLE_ADMIN = 'admin'
ROLE_USER = 'user'

# Each role implies the roles it grants.
ROLE_GRANTS: dict[str, frozenset[str]] = {
    ROLE_ADMIN: frozenset({ROLE_ADMIN, ROLE_USER}),
    ROLE_USER: frozenset({ROLE_USER}),
}


@dataclass(frozen=True)
class UserInputs:
    """Fields required to create a user."""
    username: str
    password: str
    name: str
    email: str
    hourly_rate: int | None = None
    role: str = ROLE_USER


@dataclass
class User:
    """Domain model representing a consultant."""
    id: int
    username: str
    password: str
    name: str
    email: str
    hourly_rate: int | None = None
    role: str = ROLE_USER

    @classmethod
    def from_inputs(cls, user_id: int, inputs: UserInputs) -> 'User':
        return cls(
            id=user_id,
            username=inputs.username,
            password=inputs.password,
            name=inputs.name,
            email=inputs.email,
            hourly_rate=inputs.hourly_rate,
            role=inputs.role,
        )

    @property
    def effective_hourly_rate(self) -> int:
        """Hourly rate used for billing, falling back to the default when unset."""
        if self.hourly_rate is None:
            return DEFAULT_HOURLY_RATE
        return self.hourly_rate

    def has_role(self, role: str) -> bool:
        return role in ROLE_GRANTS.get(self.role, frozenset({self.role}))

    def check_role(self, role: str) -> None:
        """Raise PermissionDeniedError unless the user holds the role."""
        if not self.has_role(role):
            raise PermissionDeniedError(f"Role '{role}' required")
