"""Pydantic schemas for user and profile endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schemas.validators import (
    normalize_country_list,
    normalize_optional_text,
    validate_username,
)


class UserResponse(BaseModel):
    """Full user record, returned only to the user themselves."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    auth0_id: str
    email: str | None
    username: str | None
    first_name: str | None
    last_name: str | None
    profile_image_url: str | None
    bio: str | None
    home_country: str | None
    home_city: str | None
    visited_countries: list[str]
    wishlist_countries: list[str]
    favorite_destinations: list[str]
    points: int
    badges: list[str]
    is_profile_public: bool
    created_at: datetime
    updated_at: datetime


class PublicProfileResponse(BaseModel):
    """
    Public projection of a user profile.

    Excludes email, Auth0 identity and the wishlist.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str | None
    first_name: str | None
    last_name: str | None
    profile_image_url: str | None
    bio: str | None
    home_country: str | None
    home_city: str | None
    visited_countries: list[str]
    favorite_destinations: list[str]
    points: int
    badges: list[str]
    is_profile_public: bool
    created_at: datetime


class ProfileUpdate(BaseModel):
    """
    Schema for self-service profile updates.

    Only fields present in the request body are applied. Identity fields,
    points, badges and timestamps are not accepted here.
    """

    model_config = ConfigDict(extra="ignore")

    username: str | None = Field(default=None, max_length=50)
    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)
    profile_image_url: str | None = None
    bio: str | None = Field(default=None, max_length=2000)
    home_country: str | None = Field(default=None, max_length=255)
    home_city: str | None = Field(default=None, max_length=255)
    visited_countries: list[str] | None = None
    wishlist_countries: list[str] | None = None
    favorite_destinations: list[str] | None = None
    is_profile_public: bool | None = None

    @field_validator("username")
    @classmethod
    def check_username(cls, v: str | None) -> str | None:
        """Validate username format."""
        return validate_username(v)

    @field_validator(
        "first_name", "last_name", "profile_image_url", "bio", "home_country", "home_city",
    )
    @classmethod
    def trim_text(cls, v: str | None) -> str | None:
        """Trim text fields; blank values clear the field."""
        return normalize_optional_text(v)

    @field_validator("visited_countries", "wishlist_countries", "favorite_destinations")
    @classmethod
    def normalize_countries(cls, v: list[str] | None) -> list[str] | None:
        """Trim and de-duplicate country lists."""
        return normalize_country_list(v)
