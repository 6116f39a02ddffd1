"""
Country list retrieval and random selection.

The country list comes from a fallback chain so it is never empty:

1. REST Countries (independent countries).
2. A static JSON mirror of an older REST Countries release, normalized into
   the v3 record shape.
3. A hardcoded sample of five countries.
"""
import logging
import random
from collections.abc import Sequence
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from core.config import Settings
from core.content_cache import ContentCache
from schemas.country import Country, CountryFacts
from schemas.validators import country_slug

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"

FALLBACK_COUNTRIES: list[dict[str, Any]] = [
    {
        "name": {"common": "Japan", "official": "Japan"},
        "flags": {"png": "https://flagcdn.com/w320/jp.png", "svg": "https://flagcdn.com/w320/jp.png"},
        "capital": ["Tokyo"],
        "region": "Asia",
        "subregion": "Eastern Asia",
        "population": 125800000,
        "languages": {"ja": "Japanese"},
        "currencies": {"JPY": {"name": "Japanese yen", "symbol": "¥"}},
        "timezones": ["UTC+09:00"],
        "idd": {"root": "+81", "suffixes": []},
        "maps": {"googleMaps": "https://www.google.com/maps/search/Japan"},
    },
    {
        "name": {"common": "France", "official": "French Republic"},
        "flags": {"png": "https://flagcdn.com/w320/fr.png", "svg": "https://flagcdn.com/w320/fr.png"},
        "capital": ["Paris"],
        "region": "Europe",
        "subregion": "Western Europe",
        "population": 67400000,
        "languages": {"fr": "French"},
        "currencies": {"EUR": {"name": "Euro", "symbol": "€"}},
        "timezones": ["UTC+01:00"],
        "idd": {"root": "+33", "suffixes": []},
        "maps": {"googleMaps": "https://www.google.com/maps/search/France"},
    },
    {
        "name": {"common": "Brazil", "official": "Federative Republic of Brazil"},
        "flags": {"png": "https://flagcdn.com/w320/br.png", "svg": "https://flagcdn.com/w320/br.png"},
        "capital": ["Brasília"],
        "region": "Americas",
        "subregion": "South America",
        "population": 215300000,
        "languages": {"pt": "Portuguese"},
        "currencies": {"BRL": {"name": "Brazilian real", "symbol": "R$"}},
        "timezones": ["UTC-05:00"],
        "idd": {"root": "+55", "suffixes": []},
        "maps": {"googleMaps": "https://www.google.com/maps/search/Brazil"},
    },
    {
        "name": {"common": "Australia", "official": "Commonwealth of Australia"},
        "flags": {"png": "https://flagcdn.com/w320/au.png", "svg": "https://flagcdn.com/w320/au.png"},
        "capital": ["Canberra"],
        "region": "Oceania",
        "subregion": "Australia and New Zealand",
        "population": 25687000,
        "languages": {"en": "English"},
        "currencies": {"AUD": {"name": "Australian dollar", "symbol": "$"}},
        "timezones": ["UTC+10:00"],
        "idd": {"root": "+61", "suffixes": []},
        "maps": {"googleMaps": "https://www.google.com/maps/search/Australia"},
    },
    {
        "name": {"common": "Egypt", "official": "Arab Republic of Egypt"},
        "flags": {"png": "https://flagcdn.com/w320/eg.png", "svg": "https://flagcdn.com/w320/eg.png"},
        "capital": ["Cairo"],
        "region": "Africa",
        "subregion": "Northern Africa",
        "population": 104000000,
        "languages": {"ar": "Arabic"},
        "currencies": {"EGP": {"name": "Egyptian pound", "symbol": "£"}},
        "timezones": ["UTC+02:00"],
        "idd": {"root": "+20", "suffixes": []},
        "maps": {"googleMaps": "https://www.google.com/maps/search/Egypt"},
    },
]


def fallback_countries() -> list[Country]:
    """Return the hardcoded sample countries."""
    return [Country.model_validate(record) for record in FALLBACK_COUNTRIES]


def normalize_mirror_record(record: dict[str, Any]) -> dict[str, Any]:
    """
    Convert a record from the JSON mirror (REST Countries v2 style) to the v3 shape.

    The mirror uses flat names, a scalar capital, lists of language and
    currency objects and `callingCodes`.
    """
    name = record.get("name") or ""
    alpha2 = (record.get("alpha2Code") or "").lower()
    flag = record.get("flag") or f"https://flagcdn.com/w320/{alpha2}.png"

    languages = None
    if record.get("languages"):
        languages = {
            f"lang{index}": lang.get("name", "") if isinstance(lang, dict) else str(lang)
            for index, lang in enumerate(record["languages"])
        }

    currencies = None
    if record.get("currencies"):
        currencies = {
            curr.get("code") or f"cur{index}": {
                "name": curr.get("name") or "",
                "symbol": curr.get("symbol") or "",
            }
            for index, curr in enumerate(record["currencies"])
            if isinstance(curr, dict)
        }

    calling_codes = record.get("callingCodes") or []
    root = f"+{calling_codes[0]}" if calling_codes and calling_codes[0] else ""

    return {
        "name": {"common": name, "official": record.get("officialName") or name},
        "flags": {"png": flag, "svg": flag},
        "capital": [record["capital"]] if record.get("capital") else [],
        "region": record.get("region") or "",
        "subregion": record.get("subregion") or "",
        "population": record.get("population") or 0,
        "languages": languages,
        "currencies": currencies,
        "timezones": record.get("timezones") or [],
        "idd": {"root": root, "suffixes": []},
        "maps": {
            "googleMaps": f"https://www.google.com/maps/search/{quote(name, safe='')}",
        },
    }


def _parse_countries(records: Any) -> list[Country]:
    """Validate a list of v3-shaped records, skipping malformed ones."""
    if not isinstance(records, list):
        raise ValueError("Expected a JSON list of countries")
    countries = []
    for record in records:
        try:
            countries.append(Country.model_validate(record))
        except ValidationError as e:
            logger.debug("Skipping malformed country record: %s", e)
    return countries


async def _fetch_json(client: httpx.AsyncClient, url: str) -> Any:
    response = await client.get(url)
    response.raise_for_status()
    return response.json()


async def fetch_primary_countries(client: httpx.AsyncClient, url: str) -> list[Country]:
    """Fetch countries from REST Countries."""
    return _parse_countries(await _fetch_json(client, url))


async def fetch_mirror_countries(client: httpx.AsyncClient, url: str) -> list[Country]:
    """Fetch countries from the JSON mirror and normalize them."""
    records = await _fetch_json(client, url)
    if not isinstance(records, list):
        raise ValueError("Expected a JSON list of countries")
    return _parse_countries(
        [normalize_mirror_record(record) for record in records if isinstance(record, dict)],
    )


async def fetch_all_countries(
    client: httpx.AsyncClient,
    settings: Settings,
    cache: ContentCache | None = None,
) -> list[Country]:
    """
    Get the full country list. Never empty.

    Tries REST Countries, then the JSON mirror, then the hardcoded sample.
    Lists fetched from a remote source are cached for `country_cache_ttl`;
    the hardcoded fallback is not cached so a recovered upstream is picked up
    on the next request.
    """
    cache_key = ContentCache.key("countries")
    if cache is not None:
        cached = await cache.get_json(cache_key)
        if cached:
            return _parse_countries(cached)

    sources = (
        ("restcountries", settings.restcountries_url, fetch_primary_countries),
        ("mirror", settings.countries_mirror_url, fetch_mirror_countries),
    )
    for source_name, url, fetch in sources:
        try:
            countries = await fetch(client, url)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Failed to fetch countries from %s: %s", source_name, e)
            continue
        if not countries:
            logger.warning("Country source %s returned no countries", source_name)
            continue
        if cache is not None:
            await cache.set_json(
                cache_key,
                [country.model_dump(by_alias=True) for country in countries],
                settings.country_cache_ttl,
            )
        return countries

    logger.warning("Using fallback sample countries")
    return fallback_countries()


def select_random_country(
    countries: Sequence[Country],
    rng: random.Random | None = None,
) -> Country:
    """
    Pick one country with uniform probability. Consecutive picks may repeat.

    Raises:
        ValueError: If `countries` is empty.
    """
    if not countries:
        raise ValueError("Cannot select from an empty country list")
    return (rng or random).choice(countries)


def find_country(countries: Sequence[Country], name: str) -> Country | None:
    """Find a country by common name or slug, case-insensitively."""
    wanted = country_slug(name)
    for country in countries:
        if country_slug(country.name.common) == wanted:
            return country
    return None


def format_population(population: int) -> str:
    """Format a population as e.g. '125.8M', '12.3K' or '950'."""
    if population >= 1_000_000:
        return f"{population / 1_000_000:.1f}M"
    if population >= 1_000:
        return f"{population / 1_000:.1f}K"
    return f"{population:,}"


def country_facts(country: Country) -> CountryFacts:
    """Build the display facts for a country."""
    currency = NOT_AVAILABLE
    if country.currencies:
        first = next(iter(country.currencies.values()))
        currency = f"{first.name} ({first.symbol})"

    calling_code = NOT_AVAILABLE
    if country.idd.root:
        suffix = country.idd.suffixes[0] if country.idd.suffixes else ""
        calling_code = f"{country.idd.root}{suffix}"

    return CountryFacts(
        name=country.name.common,
        official_name=country.name.official,
        country_id=country_slug(country.name.common),
        flag_url=country.flags.png or country.flags.svg,
        region=country.region or NOT_AVAILABLE,
        capital=country.capital[0] if country.capital else NOT_AVAILABLE,
        population=format_population(country.population),
        languages=", ".join(country.languages.values()) if country.languages else NOT_AVAILABLE,
        subregion=country.subregion or NOT_AVAILABLE,
        currency=currency,
        calling_code=calling_code,
        timezone=country.timezones[0] if country.timezones else NOT_AVAILABLE,
        google_maps_url=country.maps.google_maps,
    )
