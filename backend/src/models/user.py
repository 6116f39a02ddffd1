"""User model for storing authenticated users and their travel profiles."""
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Integer, String, Text, true
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from models.review import Review


class User(Base, TimestampMixin):
    """User model - Auth0 identity plus self-managed profile fields."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    auth0_id: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        comment="Auth0 'sub' claim - unique identifier from Auth0",
    )
    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)

    username: Mapped[str | None] = mapped_column(String(50), unique=True, nullable=True)
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    profile_image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    home_country: Mapped[str | None] = mapped_column(String(255), nullable=True)
    home_city: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Informational travel metadata, no lifecycle rules
    visited_countries: Mapped[list[str]] = mapped_column(
        ARRAY(String), server_default="{}", default=list,
    )
    wishlist_countries: Mapped[list[str]] = mapped_column(
        ARRAY(String), server_default="{}", default=list,
    )
    favorite_destinations: Mapped[list[str]] = mapped_column(
        ARRAY(String), server_default="{}", default=list,
    )
    points: Mapped[int] = mapped_column(Integer, server_default="0", default=0)
    badges: Mapped[list[str]] = mapped_column(
        ARRAY(String), server_default="{}", default=list,
    )

    is_profile_public: Mapped[bool] = mapped_column(
        Boolean, server_default=true(), default=True,
    )

    reviews: Mapped[list["Review"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
