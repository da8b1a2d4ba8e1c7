"""Authentication routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_auth_provider, get_storage
from api.models import AuthResponse, LoginRequest
from api.security import to_user_response
from domain.model.errors import AuthenticationError
from port.auth_provider import AuthProvider
from port.storage import Storage
from services.auth_service import authenticate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    storage: Storage = Depends(get_storage),
    auth_provider: AuthProvider = Depends(get_auth_provider),
):
    """Exchange username and password for a bearer token.

    Raises:
        HTTPException: 401 Unauthorized if the credentials do not match
    """
    try:
        user = authenticate(storage, request.username, request.password)
    except AuthenticationError as e:
        logger.info("Login failed", extra={"username": request.username})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.info("User logged in", extra={"userId": user.id})
    return AuthResponse(token=auth_provider.issue_token(user), user=to_user_response(user))
