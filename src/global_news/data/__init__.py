"""Data models for Global News."""

from global_news.data.models import (
    COUNTRY_NAMES,
    DEFAULT_COUNTRY,
    Article,
    Country,
    NewsRequest,
    QueryState,
    RequestMode,
    Usage,
)

__all__ = [
    "COUNTRY_NAMES",
    "DEFAULT_COUNTRY",
    "Article",
    "Country",
    "NewsRequest",
    "QueryState",
    "RequestMode",
    "Usage",
]
