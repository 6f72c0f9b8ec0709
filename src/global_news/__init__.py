"""Global News: top headlines by country and free-text news search."""

from global_news.config import GlobalNewsConfig, create_from_config, load_config
from global_news.controller import (
    FAILURE_MESSAGE,
    FALLBACK_QUERY,
    NO_RESULTS_MESSAGE,
    NewsFetchController,
)
from global_news.data import (
    COUNTRY_NAMES,
    DEFAULT_COUNTRY,
    Article,
    Country,
    NewsRequest,
    QueryState,
    RequestMode,
    Usage,
)
from global_news.run_logger import RunLogger
from global_news.search import NewsAPISource, NewsFetchError, NewsSource
from global_news.view import format_country_menu, render_article, render_state

__all__ = [
    # Models
    "Article",
    "COUNTRY_NAMES",
    "Country",
    "DEFAULT_COUNTRY",
    "NewsRequest",
    "QueryState",
    "RequestMode",
    "Usage",
    # Protocols
    "NewsSource",
    # Sources
    "NewsAPISource",
    "NewsFetchError",
    # Controller
    "FAILURE_MESSAGE",
    "FALLBACK_QUERY",
    "NO_RESULTS_MESSAGE",
    "NewsFetchController",
    # View
    "format_country_menu",
    "render_article",
    "render_state",
    # Logging
    "RunLogger",
    # Config
    "GlobalNewsConfig",
    "create_from_config",
    "load_config",
]
