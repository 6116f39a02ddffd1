"""Service layer for user identity and profile operations."""
import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models.user import User
from schemas.user import ProfileUpdate
from services.exceptions import ProfilePrivateError, UsernameTakenError

logger = logging.getLogger(__name__)

# Array columns; null in an update clears the list
LIST_FIELDS = ("visited_countries", "wishlist_countries", "favorite_destinations")


@dataclass
class IdentityClaims:
    """Identity attributes supplied by the identity provider at sign-in."""

    auth0_id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None


async def get_user(db: AsyncSession, user_id: int) -> User | None:
    """Get a user by ID. Returns None if not found."""
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_auth0_id(db: AsyncSession, auth0_id: str) -> User | None:
    """Get a user by Auth0 ID. Returns None if not found."""
    result = await db.execute(select(User).where(User.auth0_id == auth0_id))
    return result.scalar_one_or_none()


def _apply_claims(user: User, claims: IdentityClaims) -> bool:
    """
    Refresh identity fields from sign-in claims. Returns True if anything changed.

    Email always follows the identity provider. Names and avatar only fill
    empty fields so self-service profile edits are not overwritten on the next
    sign-in.
    """
    changed = False
    if claims.email and user.email != claims.email:
        user.email = claims.email
        changed = True
    for field in ("first_name", "last_name", "profile_image_url"):
        value = getattr(claims, field)
        if value and getattr(user, field) is None:
            setattr(user, field, value)
            changed = True
    return changed


async def upsert_user(db: AsyncSession, claims: IdentityClaims) -> User:
    """
    Get the user for an identity, creating it on first sign-in.

    Handles the race where concurrent first requests try to create the same
    user: on IntegrityError from the unique auth0_id, rolls back and fetches
    the user the other request created.

    Note: Uses flush(), not commit. Session generator handles commit at request end.
    This runs during authentication before any other database work in the request,
    so the rollback cannot discard earlier changes.
    """
    user = await get_user_by_auth0_id(db, claims.auth0_id)

    if user is None:
        user = User(
            auth0_id=claims.auth0_id,
            email=claims.email,
            first_name=claims.first_name,
            last_name=claims.last_name,
            profile_image_url=claims.profile_image_url,
        )
        db.add(user)
        try:
            await db.flush()
            await db.refresh(user)
            logger.info("Created user for auth0_id=%s", claims.auth0_id)
            return user
        except IntegrityError:
            await db.rollback()
            user = await get_user_by_auth0_id(db, claims.auth0_id)
            if user is None:
                # Conflict was on another unique column (e.g. email)
                raise

    if _apply_claims(user, claims):
        await db.flush()
        await db.refresh(user)

    return user


async def update_profile(db: AsyncSession, user: User, data: ProfileUpdate) -> User:
    """
    Apply a self-service profile update. Only fields present in the request are set.

    Raises:
        UsernameTakenError: If the requested username belongs to another user.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    update_data = data.model_dump(exclude_unset=True)

    username = update_data.get("username")
    if username is not None and username != user.username:
        result = await db.execute(
            select(User.id).where(User.username == username, User.id != user.id),
        )
        if result.scalar_one_or_none() is not None:
            raise UsernameTakenError(username)

    for field, value in update_data.items():
        if field in LIST_FIELDS:
            setattr(user, field, value or [])
        elif field == "is_profile_public":
            if value is not None:
                user.is_profile_public = value
        else:
            setattr(user, field, value)

    await db.flush()
    await db.refresh(user)
    return user


async def get_visible_profile(
    db: AsyncSession,
    user_id: int,
    viewer: User | None,
) -> User | None:
    """
    Get a user's profile as seen by `viewer` (None for anonymous callers).

    Returns None if the user does not exist.

    Raises:
        ProfilePrivateError: If the profile is private and the viewer is not its owner.
    """
    user = await get_user(db, user_id)
    if user is None:
        return None
    is_own_profile = viewer is not None and viewer.id == user.id
    if not user.is_profile_public and not is_own_profile:
        raise ProfilePrivateError(user_id)
    return user
