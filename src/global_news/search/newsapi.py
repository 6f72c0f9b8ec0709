"""NewsAPI v2 source using httpx."""

import logging
import os
from typing import Any

import httpx

from global_news.data import Article, NewsRequest, RequestMode
from global_news.search.base import NewsFetchError

logger = logging.getLogger(__name__)

NEWSAPI_BASE_URL = "https://newsapi.org"
NEWSAPI_KEY_ENV = "NEWSAPI_KEY"


class NewsAPISource:
    """Fetch articles from the NewsAPI ``everything`` and ``top-headlines`` endpoints.

    Args:
        api_key: NewsAPI key (defaults to the ``api_key_env`` env var).
        api_key_env: Environment variable holding the key (default: NEWSAPI_KEY).
        base_url: API root, without the ``/v2`` suffix.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        api_key_env: str = NEWSAPI_KEY_ENV,
        base_url: str = NEWSAPI_BASE_URL,
        timeout: float = 30.0,
    ) -> None:
        self._api_key = api_key or os.environ.get(api_key_env)
        if not self._api_key:
            raise ValueError(
                f"NewsAPI key required. Pass api_key or set {api_key_env} env var."
            )
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    def endpoint(self, request: NewsRequest) -> tuple[str, dict[str, str]]:
        """Build the URL and query parameters for a request."""
        params: dict[str, str] = {}
        if request.mode is RequestMode.SEARCH:
            params["q"] = request.query or ""
        else:
            params["country"] = request.country or ""
        params["apiKey"] = self._api_key  # type: ignore[assignment]
        return f"{self._base_url}/v2/{request.mode.value}", params

    async def fetch(self, request: NewsRequest) -> list[Article]:
        """Execute a single request.

        Args:
            request: Search or headlines request.

        Returns:
            Articles from the response, in provider order.

        Raises:
            NewsFetchError: On transport errors, HTTP errors or malformed payloads.
        """
        url, params = self.endpoint(request)
        logger.debug("GET %s (%s)", url, request.query or request.country)

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise NewsFetchError(f"NewsAPI request failed: {e}") from e
        except ValueError as e:
            raise NewsFetchError(f"NewsAPI returned invalid JSON: {e}") from e

        return _parse_articles(data)


def _parse_articles(data: Any) -> list[Article]:
    """Convert a NewsAPI response body into articles."""
    if not isinstance(data, dict):
        raise NewsFetchError("Malformed NewsAPI response: expected an object")
    if data.get("status") == "error":
        raise NewsFetchError(
            f"NewsAPI error {data.get('code', 'unknown')}: {data.get('message', '')}"
        )

    items = data.get("articles")
    if not isinstance(items, list):
        raise NewsFetchError("Malformed NewsAPI response: 'articles' is not a list")

    articles: list[Article] = []
    for item in items:
        if not isinstance(item, dict):
            raise NewsFetchError("Malformed NewsAPI response: article is not an object")
        source = item.get("source")
        source_name = source.get("name") if isinstance(source, dict) else None
        articles.append(
            Article(
                url=item.get("url") or "",
                title=item.get("title") or "",
                description=item.get("description") or None,
                url_to_image=item.get("urlToImage") or None,
                source=source_name or "Unknown",
                published_at=item.get("publishedAt"),
                author=item.get("author"),
            )
        )
    return articles
