"""Country review endpoints."""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user, get_settings
from core.config import Settings
from models.user import User
from schemas.review import (
    CountryReviewsResponse,
    MessageResponse,
    ReviewCreate,
    ReviewResponse,
)
from services import review_service
from services.exceptions import ReviewTooLongError


router = APIRouter(prefix="/api/reviews", tags=["reviews"])


@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
async def create_review(
    data: ReviewCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> ReviewResponse:
    """
    Post a review of a country.

    Review text may be at most `max_review_length` characters as submitted
    (400 otherwise) and is stored trimmed.
    """
    try:
        review = await review_service.create_review(
            db, current_user.id, data, max_length=settings.max_review_length,
        )
    except ReviewTooLongError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return review_service.to_review_response(review)


@router.get("/country/{country_id}", response_model=CountryReviewsResponse)
async def get_country_reviews(
    country_id: str,
    limit: int | None = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> CountryReviewsResponse:
    """
    Get a page of a country's reviews (newest first) with rating stats.

    Stats cover all of the country's reviews, not just the returned page.
    """
    page_size = min(
        limit or settings.country_reviews_default_limit,
        settings.country_reviews_max_limit,
    )
    reviews = await review_service.get_country_reviews(
        db, country_id, limit=page_size, offset=offset,
    )
    stats = await review_service.get_country_review_stats(db, country_id)
    return CountryReviewsResponse(reviews=reviews, stats=stats)


@router.get("/user/{user_id}", response_model=list[ReviewResponse])
async def get_user_reviews(
    user_id: int,
    db: AsyncSession = Depends(get_async_session),
) -> list[ReviewResponse]:
    """Get all reviews written by a user, newest first."""
    return await review_service.get_user_reviews(db, user_id)


@router.delete("/{review_id}", response_model=MessageResponse)
async def delete_review(
    review_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> MessageResponse:
    """Delete one of the current user's reviews."""
    deleted = await review_service.delete_review(db, review_id, current_user.id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Review not found or unauthorized",
        )
    return MessageResponse(message="Review deleted successfully")
