"""Service layer for country review operations."""
import logging

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from models.review import Review
from schemas.review import ReviewCreate, ReviewResponse, ReviewStats
from services.exceptions import ReviewTooLongError

logger = logging.getLogger(__name__)

DEFAULT_MAX_REVIEW_LENGTH = 250

# Author display fields hidden on anonymous reviews
AUTHOR_FIELDS = ("username", "first_name", "last_name", "profile_image_url")


def to_review_response(review: Review) -> ReviewResponse:
    """
    Build the public representation of a review.

    Author fields are filled from the joined user unless the review is
    anonymous, in which case they are None. The stored user link is not
    affected.
    """
    response = ReviewResponse.model_validate(review)
    if review.is_anonymous or review.user is None:
        return response
    return response.model_copy(
        update={field: getattr(review.user, field) for field in AUTHOR_FIELDS},
    )


async def create_review(
    db: AsyncSession,
    user_id: int,
    data: ReviewCreate,
    max_length: int = DEFAULT_MAX_REVIEW_LENGTH,
) -> Review:
    """
    Create a review for a country.

    Raises:
        ReviewTooLongError: If the submitted review text, before trimming,
            exceeds `max_length` characters.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    if len(data.review_text) > max_length:
        raise ReviewTooLongError(len(data.review_text), max_length)

    review = Review(
        user_id=user_id,
        country_id=data.country_id,
        country_name=data.country_name,
        rating=data.rating,
        review_text=data.review_text.strip(),
        is_anonymous=data.is_anonymous,
    )
    db.add(review)
    await db.flush()
    await db.refresh(review, attribute_names=["user", "created_at", "updated_at"])
    logger.info(
        "Created review id=%s country_id=%s user_id=%s",
        review.id,
        review.country_id,
        user_id,
    )
    return review


async def get_country_reviews(
    db: AsyncSession,
    country_id: str,
    limit: int = 10,
    offset: int = 0,
) -> list[ReviewResponse]:
    """Get a page of a country's reviews, newest first, with anonymity applied."""
    result = await db.execute(
        select(Review)
        .options(joinedload(Review.user))
        .where(Review.country_id == country_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .offset(offset)
        .limit(limit),
    )
    return [to_review_response(review) for review in result.scalars().all()]


async def get_country_review_stats(db: AsyncSession, country_id: str) -> ReviewStats:
    """Get the average rating and review count for a country. Both are 0 with no reviews."""
    result = await db.execute(
        select(func.avg(Review.rating), func.count(Review.id))
        .where(Review.country_id == country_id),
    )
    average, total = result.one()
    return ReviewStats(
        average_rating=float(average) if average is not None else 0.0,
        total_reviews=total or 0,
    )


async def get_user_reviews(db: AsyncSession, user_id: int) -> list[ReviewResponse]:
    """Get all reviews written by a user, newest first, with anonymity applied."""
    result = await db.execute(
        select(Review)
        .options(joinedload(Review.user))
        .where(Review.user_id == user_id)
        .order_by(Review.created_at.desc(), Review.id.desc()),
    )
    return [to_review_response(review) for review in result.scalars().all()]


async def delete_review(db: AsyncSession, review_id: int, user_id: int) -> bool:
    """
    Delete a review owned by `user_id`. Returns True if deleted, False if not
    found or owned by someone else.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    result = await db.execute(
        delete(Review).where(Review.id == review_id, Review.user_id == user_id),
    )
    deleted = result.rowcount > 0
    if deleted:
        logger.info("Deleted review id=%s user_id=%s", review_id, user_id)
    return deleted
