"""SQLAlchemy models."""
from models.base import Base, TimestampMixin
from models.review import Review
from models.user import User

__all__ = [
    "Base",
    "Review",
    "TimestampMixin",
    "User",
]
