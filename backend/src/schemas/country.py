"""Pydantic schemas for country data and third-party country content."""
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class CountryName(BaseModel):
    """Common and official names of a country."""

    model_config = ConfigDict(extra="ignore")

    common: str
    official: str


class CountryFlags(BaseModel):
    """Flag image URLs."""

    model_config = ConfigDict(extra="ignore")

    png: str = ""
    svg: str = ""


class Currency(BaseModel):
    """A currency used in a country."""

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    symbol: str = ""


class CallingCode(BaseModel):
    """International direct dialling prefix."""

    model_config = ConfigDict(extra="ignore")

    root: str | None = None
    suffixes: list[str] = []


class CountryMaps(BaseModel):
    """Map links for a country."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    google_maps: str = Field(default="", alias="googleMaps")


class Country(BaseModel):
    """
    A country record in the REST Countries v3 shape.

    Records from the secondary mirror are normalized into this shape before
    validation. Unknown upstream fields are ignored.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: CountryName
    flags: CountryFlags = CountryFlags()
    capital: list[str] = []
    region: str = ""
    subregion: str = ""
    population: int = 0
    languages: dict[str, str] | None = None
    currencies: dict[str, Currency] | None = None
    timezones: list[str] = []
    idd: CallingCode = CallingCode()
    maps: CountryMaps = CountryMaps()


class CountryFacts(BaseModel):
    """Display-ready facts about a country. Missing values are 'N/A'."""

    name: str
    official_name: str
    country_id: str
    flag_url: str
    region: str
    capital: str
    population: str
    languages: str
    subregion: str
    currency: str
    calling_code: str
    timezone: str
    google_maps_url: str


class RandomCountryResponse(BaseModel):
    """A randomly selected country with its facts."""

    country: Country
    facts: CountryFacts


class WikipediaSummary(BaseModel):
    """Summary of a Wikipedia article."""

    title: str
    extract: str
    page_url: str | None = None


ImageCategory = Literal["landmarks", "traditional food", "culture"]

IMAGE_CATEGORIES: tuple[ImageCategory, ...] = ("landmarks", "traditional food", "culture")


class UnsplashImage(BaseModel):
    """A photo returned by the Unsplash search API."""

    id: str
    regular_url: str
    small_url: str
    alt_description: str | None = None
    photographer: str | None = None


class CountryGallery(BaseModel):
    """Image galleries for a country; a category is None when its search failed."""

    landmarks: list[UnsplashImage] | None = None
    traditional_food: list[UnsplashImage] | None = None
    culture: list[UnsplashImage] | None = None


class CountryDescriptions(BaseModel):
    """AI-generated descriptive text for a country."""

    landmarks: str
    cuisine: str
    culture: str


class CountryDiscovery(BaseModel):
    """
    Everything shown for a selected country.

    Sections are fetched concurrently; `summary` is None when Wikipedia
    could not be reached.
    """

    facts: CountryFacts
    summary: WikipediaSummary | None
    descriptions: CountryDescriptions
    gallery: CountryGallery
