"""AI-generated descriptions of a country's landmarks, cuisine and culture."""
import json
import logging

import httpx

from core.config import Settings
from core.content_cache import ContentCache
from schemas.country import CountryDescriptions

logger = logging.getLogger(__name__)

SERVICE_NAME = "descriptions"

SYSTEM_PROMPT = (
    "You are a knowledgeable travel and culture expert. Provide accurate, engaging "
    "descriptions that would help someone learn about a country's landmarks, food, "
    "and culture."
)

USER_PROMPT_TEMPLATE = """Generate detailed, engaging descriptions for {country} in the following categories. Each description should be 2-3 sentences long and educational:

1. Famous Landmarks: Describe the most iconic landmarks, monuments, or natural wonders
2. Traditional Cuisine: Describe the food culture, signature dishes, and culinary traditions
3. Cultural Highlights: Describe unique cultural aspects, traditions, festivals, or customs

Respond with JSON in this exact format:
{{
  "landmarks": "description here",
  "cuisine": "description here",
  "culture": "description here"
}}"""  # noqa: E501

# Used for keys missing from an otherwise valid model response
GENERIC_DESCRIPTIONS = {
    "landmarks": (
        "Discover the remarkable landmarks that define this country's landscape and heritage."
    ),
    "cuisine": (
        "Experience the unique flavors and culinary traditions that make this country's "
        "food culture special."
    ),
    "culture": (
        "Explore the rich cultural traditions and customs that shape daily life in this "
        "fascinating country."
    ),
}

MAX_TOKENS = 800
TEMPERATURE = 0.7


def fallback_descriptions(country_name: str) -> CountryDescriptions:
    """Static descriptions used whenever generation fails."""
    return CountryDescriptions(
        landmarks=(
            f"Discover the remarkable landmarks that define {country_name}'s "
            "landscape and heritage."
        ),
        cuisine=(
            f"Experience the unique flavors and culinary traditions that make "
            f"{country_name}'s food culture special."
        ),
        culture=(
            f"Explore the rich cultural traditions and customs that shape daily life "
            f"in {country_name}."
        ),
    )


def build_request(settings: Settings, country_name: str) -> dict:
    """Build the chat-completions request body."""
    return {
        "model": settings.openai_model,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": USER_PROMPT_TEMPLATE.format(country=country_name)},
        ],
        "response_format": {"type": "json_object"},
        "max_tokens": MAX_TOKENS,
        "temperature": TEMPERATURE,
    }


def parse_completion(payload: dict) -> CountryDescriptions:
    """
    Extract descriptions from a chat-completions response.

    Raises:
        ValueError: If the response has no content or the content is not a JSON object.
    """
    try:
        content = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise ValueError("Malformed completion response") from e
    if not content:
        raise ValueError("No content received from the model")

    descriptions = json.loads(content)
    if not isinstance(descriptions, dict):
        raise ValueError("Model content is not a JSON object")

    sections = {}
    for key, default in GENERIC_DESCRIPTIONS.items():
        value = descriptions.get(key)
        sections[key] = value.strip() if isinstance(value, str) and value.strip() else default
    return CountryDescriptions(**sections)


async def generate_descriptions(
    client: httpx.AsyncClient,
    settings: Settings,
    country_name: str,
    cache: ContentCache | None = None,
) -> CountryDescriptions:
    """
    Generate descriptions for a country. Never raises.

    Any failure (no API key, transport error, HTTP error, empty or invalid
    content) returns the static fallback descriptions. Only generated results
    are cached.
    """
    cache_key = ContentCache.key(SERVICE_NAME, country_name)
    if cache is not None:
        cached = await cache.get_json(cache_key)
        if cached:
            return CountryDescriptions.model_validate(cached)

    if not settings.openai_api_key:
        logger.info("OpenAI API key not configured; using fallback descriptions")
        return fallback_descriptions(country_name)

    try:
        response = await client.post(
            f"{settings.openai_api_url.rstrip('/')}/chat/completions",
            json=build_request(settings, country_name),
            headers={"Authorization": f"Bearer {settings.openai_api_key}"},
        )
        response.raise_for_status()
        descriptions = parse_completion(response.json())
    except (httpx.HTTPError, ValueError) as e:
        logger.error("Error generating AI descriptions for %s: %s", country_name, e)
        return fallback_descriptions(country_name)

    if cache is not None:
        await cache.set_json(cache_key, descriptions.model_dump(), settings.content_cache_ttl)
    return descriptions
