"""Wikipedia article summaries for countries."""
import logging
from urllib.parse import quote

import httpx

from core.config import Settings
from core.content_cache import ContentCache
from schemas.country import WikipediaSummary
from services.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

SERVICE_NAME = "wikipedia"


def parse_summary(payload: dict) -> WikipediaSummary:
    """Convert a Wikipedia REST summary payload to a WikipediaSummary."""
    page_url = (
        payload.get("content_urls", {}).get("desktop", {}).get("page")
        if isinstance(payload.get("content_urls"), dict)
        else None
    )
    return WikipediaSummary(
        title=payload.get("title") or "",
        extract=payload.get("extract") or "",
        page_url=page_url,
    )


async def fetch_summary(
    client: httpx.AsyncClient,
    settings: Settings,
    country_name: str,
    cache: ContentCache | None = None,
) -> WikipediaSummary:
    """
    Fetch the Wikipedia summary for a country.

    Raises:
        ExternalServiceError: If Wikipedia cannot be reached or returns a non-2xx
            status or an unexpected payload.
    """
    cache_key = ContentCache.key(SERVICE_NAME, country_name)
    if cache is not None:
        cached = await cache.get_json(cache_key)
        if cached:
            return WikipediaSummary.model_validate(cached)

    url = f"{settings.wikipedia_summary_url.rstrip('/')}/{quote(country_name, safe='')}"
    try:
        response = await client.get(url, headers={"Accept": "application/json"})
        response.raise_for_status()
        payload = response.json()
    except httpx.HTTPStatusError as e:
        logger.warning(
            "Wikipedia summary for %s failed with HTTP %s",
            country_name,
            e.response.status_code,
        )
        raise ExternalServiceError(SERVICE_NAME, f"HTTP {e.response.status_code}") from e
    except httpx.HTTPError as e:
        logger.warning("Wikipedia summary for %s failed: %s", country_name, e)
        raise ExternalServiceError(SERVICE_NAME, "Request failed") from e
    except ValueError as e:
        logger.warning("Wikipedia summary for %s was not valid JSON", country_name)
        raise ExternalServiceError(SERVICE_NAME, "Invalid response") from e

    if not isinstance(payload, dict):
        raise ExternalServiceError(SERVICE_NAME, "Invalid response")

    summary = parse_summary(payload)
    if cache is not None:
        await cache.set_json(cache_key, summary.model_dump(), settings.content_cache_ttl)
    return summary
