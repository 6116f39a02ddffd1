"""Country image galleries from the Unsplash search API."""
import asyncio
import logging

import httpx

from core.config import Settings
from core.content_cache import ContentCache
from schemas.country import IMAGE_CATEGORIES, CountryGallery, ImageCategory, UnsplashImage
from services.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

SERVICE_NAME = "unsplash"
DEFAULT_PER_PAGE = 3


def parse_photo(photo: dict) -> UnsplashImage:
    """Convert an Unsplash photo object to an UnsplashImage."""
    urls = photo.get("urls") or {}
    user = photo.get("user") or {}
    return UnsplashImage(
        id=str(photo.get("id", "")),
        regular_url=urls.get("regular", ""),
        small_url=urls.get("small", ""),
        alt_description=photo.get("alt_description"),
        photographer=user.get("name"),
    )


async def search_images(
    client: httpx.AsyncClient,
    settings: Settings,
    query: str,
    per_page: int = DEFAULT_PER_PAGE,
    cache: ContentCache | None = None,
) -> list[UnsplashImage]:
    """
    Search Unsplash photos.

    Raises:
        ExternalServiceError: If no access key is configured, or Unsplash cannot
            be reached or returns an error.
    """
    cache_key = ContentCache.key(SERVICE_NAME, query, str(per_page))
    if cache is not None:
        cached = await cache.get_json(cache_key)
        if cached is not None:
            return [UnsplashImage.model_validate(item) for item in cached]

    if not settings.unsplash_access_key:
        raise ExternalServiceError(SERVICE_NAME, "Access key not configured")

    try:
        response = await client.get(
            f"{settings.unsplash_api_url.rstrip('/')}/search/photos",
            params={
                "query": query,
                "per_page": per_page,
                "client_id": settings.unsplash_access_key,
            },
        )
        response.raise_for_status()
        payload = response.json()
    except httpx.HTTPStatusError as e:
        logger.warning(
            "Unsplash search for %r failed with HTTP %s", query, e.response.status_code,
        )
        raise ExternalServiceError(SERVICE_NAME, f"HTTP {e.response.status_code}") from e
    except httpx.HTTPError as e:
        logger.warning("Unsplash search for %r failed: %s", query, e)
        raise ExternalServiceError(SERVICE_NAME, "Request failed") from e
    except ValueError as e:
        raise ExternalServiceError(SERVICE_NAME, "Invalid response") from e

    results = payload.get("results") if isinstance(payload, dict) else None
    if not isinstance(results, list):
        raise ExternalServiceError(SERVICE_NAME, "Invalid response")

    images = [parse_photo(photo) for photo in results if isinstance(photo, dict)]
    if cache is not None:
        await cache.set_json(
            cache_key,
            [image.model_dump() for image in images],
            settings.content_cache_ttl,
        )
    return images


async def fetch_category_images(
    client: httpx.AsyncClient,
    settings: Settings,
    country_name: str,
    category: ImageCategory,
    cache: ContentCache | None = None,
) -> list[UnsplashImage]:
    """Search images for one gallery category of a country, e.g. 'Japan landmarks'."""
    return await search_images(client, settings, f"{country_name} {category}", cache=cache)


async def fetch_country_gallery(
    client: httpx.AsyncClient,
    settings: Settings,
    country_name: str,
    cache: ContentCache | None = None,
) -> CountryGallery:
    """
    Fetch all gallery categories concurrently.

    Each category succeeds or fails on its own; a failed category is None.
    """
    results = await asyncio.gather(
        *(
            fetch_category_images(client, settings, country_name, category, cache=cache)
            for category in IMAGE_CATEGORIES
        ),
        return_exceptions=True,
    )
    sections: dict[str, list[UnsplashImage] | None] = {}
    for category, result in zip(IMAGE_CATEGORIES, results, strict=True):
        field = category.replace(" ", "_")
        if isinstance(result, ExternalServiceError):
            sections[field] = None
        elif isinstance(result, BaseException):
            raise result
        else:
            sections[field] = result
    return CountryGallery(**sections)
