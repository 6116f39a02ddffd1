"""Pydantic schemas for review endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from schemas.validators import country_slug


class ReviewCreate(BaseModel):
    """
    Schema for creating a review.

    `country_id` defaults to the slug of `country_name` when omitted.
    `review_text` is kept as submitted: the service checks the configurable
    maximum against the submitted length and trims before storing.
    """

    country_id: str | None = Field(default=None, max_length=255)
    country_name: str = Field(..., min_length=1, max_length=255)
    rating: int = Field(..., ge=1, le=5)
    review_text: str
    is_anonymous: bool = False

    @field_validator("country_name")
    @classmethod
    def trim_country_name(cls, v: str) -> str:
        """Trim and require a non-empty country name."""
        trimmed = v.strip()
        if not trimmed:
            raise ValueError("Country name cannot be empty")
        return trimmed

    @field_validator("review_text")
    @classmethod
    def require_review_text(cls, v: str) -> str:
        """Require review text with at least one non-whitespace character."""
        if not v.strip():
            raise ValueError("Review text cannot be empty")
        return v

    @model_validator(mode="after")
    def default_country_id(self) -> "ReviewCreate":
        """Derive the country identifier from the country name when not given."""
        if not self.country_id or not self.country_id.strip():
            self.country_id = country_slug(self.country_name)
        else:
            self.country_id = self.country_id.strip()
        return self


class ReviewResponse(BaseModel):
    """
    Schema for review responses, including author display fields.

    Author fields are None for anonymous reviews.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    country_id: str
    country_name: str
    rating: int
    review_text: str
    is_anonymous: bool
    created_at: datetime
    updated_at: datetime
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None


class ReviewStats(BaseModel):
    """Aggregate rating statistics for a country."""

    average_rating: float
    total_reviews: int


class CountryReviewsResponse(BaseModel):
    """A page of a country's reviews plus its aggregate stats."""

    reviews: list[ReviewResponse]
    stats: ReviewStats


class MessageResponse(BaseModel):
    """Simple message response."""

    message: str
