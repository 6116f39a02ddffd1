"""Country discovery endpoints: the country list, random selection and per-country content."""
import asyncio
import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.dependencies import get_cache, get_http_client, get_settings
from core.config import Settings
from core.content_cache import ContentCache
from schemas.country import (
    Country,
    CountryDescriptions,
    CountryDiscovery,
    CountryFacts,
    ImageCategory,
    RandomCountryResponse,
    UnsplashImage,
    WikipediaSummary,
)
from services import country_service, description_service, image_service, wikipedia_service
from services.exceptions import ExternalServiceError


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/countries", tags=["countries"])


async def _get_country(
    name: str,
    client: httpx.AsyncClient,
    settings: Settings,
    cache: ContentCache | None,
) -> Country:
    """Look up a listed country by common name or slug; 404 if unknown."""
    countries = await country_service.fetch_all_countries(client, settings, cache)
    country = country_service.find_country(countries, name)
    if country is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Country not found")
    return country


@router.get("", response_model=list[Country])
async def list_countries(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
    cache: ContentCache | None = Depends(get_cache),
) -> list[Country]:
    """
    Get the full country list.

    Falls back to a mirror and then to a small built-in sample, so the list is
    never empty.
    """
    return await country_service.fetch_all_countries(client, settings, cache)


@router.get("/random", response_model=RandomCountryResponse)
async def random_country(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
    cache: ContentCache | None = Depends(get_cache),
) -> RandomCountryResponse:
    """Spin the wheel: pick a country uniformly at random. Repeats are possible."""
    countries = await country_service.fetch_all_countries(client, settings, cache)
    country = country_service.select_random_country(countries)
    return RandomCountryResponse(country=country, facts=country_service.country_facts(country))


@router.get("/{name}/facts", response_model=CountryFacts)
async def get_country_facts(
    name: str,
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
    cache: ContentCache | None = Depends(get_cache),
) -> CountryFacts:
    """Get display facts for a country."""
    country = await _get_country(name, client, settings, cache)
    return country_service.country_facts(country)


@router.get("/{name}/summary", response_model=WikipediaSummary)
async def get_country_summary(
    name: str,
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
    cache: ContentCache | None = Depends(get_cache),
) -> WikipediaSummary:
    """Get the Wikipedia summary for a country name."""
    try:
        return await wikipedia_service.fetch_summary(client, settings, name, cache)
    except ExternalServiceError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Unable to load Wikipedia summary",
        )


@router.get("/{name}/descriptions", response_model=CountryDescriptions)
async def get_country_descriptions(
    name: str,
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
    cache: ContentCache | None = Depends(get_cache),
) -> CountryDescriptions:
    """Get AI-generated landmark, cuisine and culture descriptions (static text on failure)."""
    return await description_service.generate_descriptions(client, settings, name, cache)


@router.get("/{name}/images", response_model=list[UnsplashImage])
async def get_country_images(
    name: str,
    category: ImageCategory = Query(...),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
    cache: ContentCache | None = Depends(get_cache),
) -> list[UnsplashImage]:
    """Get one image gallery category for a country."""
    try:
        return await image_service.fetch_category_images(
            client, settings, name, category, cache=cache,
        )
    except ExternalServiceError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Unable to load images",
        )


@router.get("/{name}/discover", response_model=CountryDiscovery)
async def discover_country(
    name: str,
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
    cache: ContentCache | None = Depends(get_cache),
) -> CountryDiscovery:
    """
    Get everything shown for a selected country in one call.

    Summary, descriptions and galleries are fetched concurrently and fail
    independently: an unavailable summary is null, unavailable gallery
    categories are null, descriptions fall back to static text.
    """
    country = await _get_country(name, client, settings, cache)
    country_name = country.name.common

    summary_result, descriptions, gallery = await asyncio.gather(
        wikipedia_service.fetch_summary(client, settings, country_name, cache),
        description_service.generate_descriptions(client, settings, country_name, cache),
        image_service.fetch_country_gallery(client, settings, country_name, cache),
        return_exceptions=True,
    )
    for result in (descriptions, gallery):
        if isinstance(result, BaseException):
            raise result

    summary = None
    if isinstance(summary_result, ExternalServiceError):
        logger.info("Discovery for %s without summary: %s", country_name, summary_result)
    elif isinstance(summary_result, BaseException):
        raise summary_result
    else:
        summary = summary_result

    return CountryDiscovery(
        facts=country_service.country_facts(country),
        summary=summary,
        descriptions=descriptions,
        gallery=gallery,
    )
