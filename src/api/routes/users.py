"""User routes."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from api.models import UserResponse
from api.security import get_current_user, to_user_response
from domain.model.user import User

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/current", response_model=UserResponse)
async def get_current_user_endpoint(current_user: Optional[User] = Depends(get_current_user)):
    """Get the signed-in user, without the password. 404 before the demo user is seeded."""
    if current_user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return to_user_response(current_user)
