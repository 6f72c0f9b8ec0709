"""Core data models for Global News."""

from dataclasses import dataclass, field
from enum import StrEnum


class Country(StrEnum):
    """Countries offered by the headlines selector (ISO 3166-1 alpha-2)."""

    US = "us"
    IN = "in"
    GB = "gb"
    AU = "au"
    CA = "ca"
    JP = "jp"
    FR = "fr"
    DE = "de"
    RU = "ru"
    BR = "br"
    ZA = "za"
    NG = "ng"
    KR = "kr"
    CN = "cn"
    AR = "ar"


COUNTRY_NAMES: dict[Country, str] = {
    Country.US: "United States",
    Country.IN: "India",
    Country.GB: "United Kingdom",
    Country.AU: "Australia",
    Country.CA: "Canada",
    Country.JP: "Japan",
    Country.FR: "France",
    Country.DE: "Germany",
    Country.RU: "Russia",
    Country.BR: "Brazil",
    Country.ZA: "South Africa",
    Country.NG: "Nigeria",
    Country.KR: "South Korea",
    Country.CN: "China",
    Country.AR: "Argentina",
}

DEFAULT_COUNTRY = Country.US


class RequestMode(StrEnum):
    """Which NewsAPI endpoint a request targets."""

    SEARCH = "everything"
    HEADLINES = "top-headlines"


@dataclass(frozen=True)
class NewsRequest:
    """A single outbound request: either a search or country headlines."""

    mode: RequestMode
    query: str | None = None
    country: str | None = None

    @classmethod
    def search(cls, query: str) -> "NewsRequest":
        return cls(mode=RequestMode.SEARCH, query=query)

    @classmethod
    def headlines(cls, country: str) -> "NewsRequest":
        return cls(mode=RequestMode.HEADLINES, country=country)


@dataclass(frozen=True)
class Article:
    """A news article as returned by the provider.

    Only ``title``, ``url``, ``description`` and ``url_to_image`` drive the
    view; the remaining fields are informational.
    """

    url: str
    title: str = ""
    description: str | None = None
    url_to_image: str | None = None
    source: str = "Unknown"
    published_at: str | None = None
    author: str | None = None


@dataclass
class QueryState:
    """UI state owned by the fetch controller."""

    country: str = DEFAULT_COUNTRY.value
    query: str = ""
    articles: list[Article] = field(default_factory=list)
    loading: bool = False
    error: str = ""


@dataclass
class Usage:
    """Outbound request counters accumulated over a session."""

    requests: int = 0
    fallback_requests: int = 0
    failed_requests: int = 0

    def __add__(self, other: "Usage") -> "Usage":
        return Usage(
            requests=self.requests + other.requests,
            fallback_requests=self.fallback_requests + other.fallback_requests,
            failed_requests=self.failed_requests + other.failed_requests,
        )

    def __iadd__(self, other: "Usage") -> "Usage":
        self.requests += other.requests
        self.fallback_requests += other.fallback_requests
        self.failed_requests += other.failed_requests
        return self
