"""Authentication and role-check dependencies.

The identity provider is pluggable (see api.dependencies.build_auth_provider);
these dependencies only consult it and gate on roles.
"""

import logging
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from api.dependencies import get_auth_provider, get_storage
from api.models import UserResponse
from domain.model.errors import PermissionDeniedError
from domain.model.user import ROLE_ADMIN, ROLE_USER, User
from port.auth_provider import AuthProvider
from port.storage import Storage

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def to_user_response(user: User) -> UserResponse:
    """Convert domain User to API UserResponse, dropping the password."""
    return UserResponse(
        id=user.id,
        username=user.username,
        name=user.name,
        email=user.email,
        hourly_rate=user.hourly_rate,
        role=user.role,
    )


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    storage: Storage = Depends(get_storage),
    auth_provider: AuthProvider = Depends(get_auth_provider),
) -> Optional[User]:
    """Get current user (optional). Returns None if the provider resolves nobody."""
    token = credentials.credentials if credentials else None
    return auth_provider.resolve(token, storage)


def get_current_user_required(
    user: Optional[User] = Depends(get_current_user),
) -> User:
    """Get current user (required). Raises 401 if not authenticated."""
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_role(role: str):
    """Build a dependency that returns the current user if they hold ``role``, else 403."""
    def dependency(user: User = Depends(get_current_user_required)) -> User:
        try:
            user.check_role(role)
        except PermissionDeniedError:
            logger.warning("Role check failed", extra={"userId": user.id, "requiredRole": role})
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have permission to perform this action",
            )
        return user
    return dependency


require_user = require_role(ROLE_USER)
require_admin = require_role(ROLE_ADMIN)
