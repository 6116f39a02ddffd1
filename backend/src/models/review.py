"""Review model for star-rated country reviews."""
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, String, Text, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from models.user import User


class Review(Base, TimestampMixin):
    """
    Review model - a 1-5 rating and short text about a country.

    `country_id` is the slug of the country's display name, not a foreign key:
    countries are never persisted.
    """

    __tablename__ = "reviews"
    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_reviews_rating_range"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
    )
    country_id: Mapped[str] = mapped_column(String(255), index=True)
    country_name: Mapped[str] = mapped_column(String(255))
    rating: Mapped[int]
    review_text: Mapped[str] = mapped_column(Text)
    is_anonymous: Mapped[bool] = mapped_column(
        Boolean, server_default=false(), default=False,
    )

    user: Mapped["User"] = relationship(back_populates="reviews")
