"""Travel profile endpoints."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user, get_current_user_optional
from models.user import User
from schemas.user import ProfileUpdate, PublicProfileResponse, UserResponse
from services import user_service
from services.exceptions import ProfilePrivateError, UsernameTakenError


router = APIRouter(prefix="/api/profile", tags=["profiles"])


@router.put("", response_model=UserResponse)
async def update_profile(
    data: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> User:
    """
    Update the current user's profile.

    Only fields present in the body change. Identity fields, points, badges
    and timestamps are ignored.
    """
    try:
        return await user_service.update_profile(db, current_user, data)
    except UsernameTakenError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.get("/{user_id}", response_model=PublicProfileResponse)
async def get_profile(
    user_id: int,
    viewer: User | None = Depends(get_current_user_optional),
    db: AsyncSession = Depends(get_async_session),
) -> User:
    """
    Get a user's public profile.

    Private profiles are only visible to their owner (403 for everyone else).
    """
    try:
        user = await user_service.get_visible_profile(db, user_id, viewer)
    except ProfilePrivateError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Profile is private",
        )
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user
