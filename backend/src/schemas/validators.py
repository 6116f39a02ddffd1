"""
Shared validation functions for Pydantic schemas.

The country slug is also computed by front ends when linking reviews to a
country, so the rule here must match what clients send.
"""
import re

WHITESPACE_PATTERN = re.compile(r"\s+")

# Username format: letters, numbers, underscores, dots and hyphens
USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


def country_slug(name: str) -> str:
    """
    Build the review country identifier from a country's display name.

    Lowercases the name and replaces each run of whitespace with a hyphen,
    e.g. 'United Kingdom' -> 'united-kingdom'.
    """
    return WHITESPACE_PATTERN.sub("-", name.strip().lower())


def normalize_optional_text(value: str | None) -> str | None:
    """Trim whitespace; empty strings become None."""
    if value is None:
        return None
    trimmed = value.strip()
    return trimmed or None


def validate_username(username: str | None) -> str | None:
    """
    Validate username format.

    Raises:
        ValueError: If username contains characters other than letters, numbers,
            underscores, dots or hyphens.
    """
    username = normalize_optional_text(username)
    if username is None:
        return None
    if not USERNAME_PATTERN.match(username):
        raise ValueError(
            f"Invalid username: '{username}'. "
            "Use letters, numbers, underscores, dots and hyphens only.",
        )
    return username


def normalize_country_list(countries: list[str] | None) -> list[str] | None:
    """Trim entries, drop blanks and duplicates (preserving first occurrence order)."""
    if countries is None:
        return None
    normalized = []
    seen: set[str] = set()
    for country in countries:
        trimmed = country.strip()
        if not trimmed or trimmed in seen:
            continue
        seen.add(trimmed)
        normalized.append(trimmed)
    return normalized
