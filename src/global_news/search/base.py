from typing import Protocol

from global_news.data import Article, NewsRequest


class NewsFetchError(Exception):
    """Raised by a news source when a request cannot produce articles.

    Covers transport failures, non-success HTTP status and malformed payloads
    alike; callers are not expected to tell them apart.
    """


class NewsSource(Protocol):
    """Interface for fetching articles for a single request."""

    async def fetch(self, request: NewsRequest) -> list[Article]:
        """Fetch articles for the given request.

        Args:
            request: Search or headlines request to execute.

        Returns:
            Articles in provider order (possibly empty).

        Raises:
            NewsFetchError: If the request fails for any reason.
        """
        ...
