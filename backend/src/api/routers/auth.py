"""Endpoints for the signed-in user's identity."""
from fastapi import APIRouter, Depends

from api.dependencies import get_current_user
from models.user import User
from schemas.user import UserResponse


router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("/user", response_model=UserResponse)
async def get_auth_user(current_user: User = Depends(get_current_user)) -> User:
    """
    Get the current authenticated user's full record.

    The record is created on first sign-in.
    """
    return current_user
