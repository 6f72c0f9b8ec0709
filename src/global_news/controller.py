"""Fetch controller: owns the query state and the fetch/fallback sequence."""

import logging
import time

from global_news.data import DEFAULT_COUNTRY, Article, NewsRequest, QueryState, Usage
from global_news.run_logger import RunLogger
from global_news.search.base import NewsSource

logger = logging.getLogger(__name__)

FALLBACK_QUERY = "latest"
FAILURE_MESSAGE = "Failed to load news. Please try again."
NO_RESULTS_MESSAGE = "No news found for the selected country ({country}). Showing global news."


class NewsFetchController:
    """Holds the query state and runs fetches against a news source.

    Flow of one fetch:
    1. Mark the state as loading
    2. Search for the query if one is set, otherwise fetch country headlines
    3. If that returns nothing, search for the fallback term instead
    4. Commit articles/error and clear loading

    Every fetch takes a new generation number. Only the most recently started
    fetch may commit to the state; superseded fetches still run to completion
    but their results are discarded.

    Args:
        source: News source used for all requests.
        country: Initially selected country code.
        fallback_query: Search term used when the primary request is empty.
        run_logger: Optional RunLogger recording each fetch cycle.
    """

    def __init__(
        self,
        source: NewsSource,
        *,
        country: str = DEFAULT_COUNTRY.value,
        fallback_query: str = FALLBACK_QUERY,
        run_logger: RunLogger | None = None,
    ) -> None:
        self._source = source
        self._fallback_query = fallback_query
        self._run_logger = run_logger
        self._state = QueryState(country=country)
        self._generation = 0
        self._usage = Usage()

    @property
    def state(self) -> QueryState:
        return self._state

    @property
    def usage(self) -> Usage:
        """Requests issued since the controller was created."""
        return self._usage

    @property
    def generation(self) -> int:
        """Generation number of the most recently started fetch."""
        return self._generation

    def build_request(self) -> NewsRequest:
        """Select the primary request for the current query/country pair."""
        if self._state.query:
            return NewsRequest.search(self._state.query)
        return NewsRequest.headlines(self._state.country)

    async def mount(self) -> QueryState:
        """Run the initial fetch for the default state."""
        return await self.fetch_news()

    async def set_country(self, country: str) -> QueryState:
        """Select a country, fetching again if the selection changed.

        With a non-empty query the fetch still takes the search branch, so the
        new country only shows up in the fallback advisory.
        """
        if country == self._state.country:
            return self._state
        self._state.country = country
        return await self.fetch_news()

    def set_query(self, query: str) -> None:
        """Update the search text. Does not fetch."""
        self._state.query = query

    async def search(self) -> QueryState:
        """Fetch immediately with the current query and country."""
        return await self.fetch_news()

    async def fetch_news(self) -> QueryState:
        """Run one fetch cycle and return the resulting state.

        Failures of either request leave ``articles`` untouched and set the
        generic failure message. ``loading`` is cleared on every exit path of
        the latest fetch.
        """
        self._generation += 1
        generation = self._generation
        country = self._state.country
        request = self.build_request()

        self._state.loading = True
        t0 = time.monotonic()

        primary_count: int | None = None
        fallback_count: int | None = None
        articles: list[Article] | None = None
        error = ""
        resolved = False

        try:
            self._usage.requests += 1
            articles = await self._source.fetch(request)
            primary_count = len(articles)

            if not articles:
                logger.info(
                    "No articles for %s, falling back to '%s'", country, self._fallback_query
                )
                self._usage.requests += 1
                self._usage.fallback_requests += 1
                articles = await self._source.fetch(NewsRequest.search(self._fallback_query))
                fallback_count = len(articles)
                error = NO_RESULTS_MESSAGE.format(country=country)
            resolved = True
        except Exception as e:
            logger.warning("Error fetching news: %s", e)
            self._usage.failed_requests += 1
            articles = None
            error = FAILURE_MESSAGE
            resolved = True
        finally:
            # Cancelled fetches only release the loading flag.
            committed = generation == self._generation
            if committed:
                if resolved:
                    if articles is not None:
                        self._state.articles = articles
                    self._state.error = error
                self._state.loading = False
            else:
                logger.debug(
                    "Discarding result of fetch %d (latest is %d)", generation, self._generation
                )

            if self._run_logger and resolved:
                self._run_logger.log_fetch(
                    generation,
                    request,
                    country=country,
                    primary_count=primary_count,
                    fallback_count=fallback_count,
                    error=error,
                    committed=committed,
                    duration_seconds=time.monotonic() - t0,
                )

        return self._state
