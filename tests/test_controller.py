"""Tests for NewsFetchController."""

import asyncio
from pathlib import Path

import pytest

from global_news.controller import (
    FAILURE_MESSAGE,
    NO_RESULTS_MESSAGE,
    NewsFetchController,
)
from global_news.data import Article, Country, NewsRequest, RequestMode
from global_news.run_logger import RunLogger
from global_news.search.base import NewsFetchError

from tests.fakes import FakeSource, make_articles


def _always(articles: list[Article]) -> FakeSource:
    return FakeSource(lambda request: list(articles))


def _empty_then(fallback: list[Article]) -> FakeSource:
    def handler(request: NewsRequest) -> list[Article]:
        if request.query == "latest":
            return list(fallback)
        return []

    return FakeSource(handler)


def _failing(exc: Exception) -> FakeSource:
    def handler(request: NewsRequest) -> list[Article]:
        raise exc

    return FakeSource(handler)


class TestRequestSelection:
    """Tests for choosing between search and headlines requests."""

    @pytest.mark.parametrize("country", list(Country))
    async def test_empty_query_requests_country_headlines(self, country: Country) -> None:
        source = _always(make_articles(1))
        controller = NewsFetchController(source, country=country.value)

        await controller.fetch_news()

        assert source.requests == [NewsRequest.headlines(country.value)]
        assert source.requests[0].mode is RequestMode.HEADLINES

    @pytest.mark.parametrize("query", ["election", "climate change", "a", "  spaced  "])
    @pytest.mark.parametrize("country", ["us", "jp", "ar"])
    async def test_non_empty_query_always_searches(self, query: str, country: str) -> None:
        source = _always(make_articles(1))
        controller = NewsFetchController(source, country=country)
        controller.set_query(query)

        await controller.fetch_news()

        assert source.requests == [NewsRequest.search(query)]

    def test_build_request_prefers_query(self) -> None:
        controller = NewsFetchController(_always([]), country="fr")
        assert controller.build_request() == NewsRequest.headlines("fr")
        controller.set_query("rugby")
        assert controller.build_request() == NewsRequest.search("rugby")


class TestFetchOutcomes:
    """Tests for the success, fallback and failure branches."""

    async def test_scenario_a_headlines_success(self) -> None:
        source = _always(make_articles(5))
        controller = NewsFetchController(source, country="jp")

        state = await controller.fetch_news()

        assert len(state.articles) == 5
        assert state.error == ""
        assert state.loading is False

    async def test_non_empty_result_issues_no_fallback(self) -> None:
        source = _always(make_articles(2))
        controller = NewsFetchController(source)

        await controller.fetch_news()

        assert len(source.requests) == 1
        assert controller.usage.fallback_requests == 0

    async def test_success_clears_previous_error(self) -> None:
        source = _always(make_articles(2))
        controller = NewsFetchController(source)
        controller.state.error = "stale error"

        state = await controller.fetch_news()

        assert state.error == ""

    async def test_scenario_b_empty_result_falls_back(self) -> None:
        source = _empty_then(make_articles(3, "global"))
        controller = NewsFetchController(source, country="xx-empty")

        state = await controller.fetch_news()

        assert len(state.articles) == 3
        assert "xx-empty" in state.error
        assert state.error == NO_RESULTS_MESSAGE.format(country="xx-empty")
        assert state.loading is False

    async def test_fallback_is_issued_exactly_once(self) -> None:
        source = _empty_then([])
        controller = NewsFetchController(source, country="ng")

        state = await controller.fetch_news()

        assert source.requests == [
            NewsRequest.headlines("ng"),
            NewsRequest.search("latest"),
        ]
        assert state.articles == []
        assert "ng" in state.error
        assert controller.usage.requests == 2
        assert controller.usage.fallback_requests == 1

    async def test_empty_fallback_replaces_existing_articles(self) -> None:
        source = _empty_then([])
        controller = NewsFetchController(source)
        controller.state.articles = make_articles(4)

        state = await controller.fetch_news()

        assert state.articles == []

    async def test_empty_search_also_falls_back(self) -> None:
        source = _empty_then(make_articles(2, "global"))
        controller = NewsFetchController(source, country="de")
        controller.set_query("nothing matches this")

        state = await controller.fetch_news()

        assert source.requests[-1] == NewsRequest.search("latest")
        assert len(state.articles) == 2
        assert "(de)" in state.error

    async def test_custom_fallback_query(self) -> None:
        source = FakeSource(lambda request: [] if request.query != "world" else make_articles(1))
        controller = NewsFetchController(source, fallback_query="world")

        state = await controller.fetch_news()

        assert source.requests[-1] == NewsRequest.search("world")
        assert len(state.articles) == 1

    async def test_scenario_c_failure_keeps_articles(self) -> None:
        source = _failing(NewsFetchError("boom"))
        controller = NewsFetchController(source, country="us")
        controller.set_query("election")
        previous = make_articles(2, "previous")
        controller.state.articles = previous

        state = await controller.fetch_news()

        assert state.error == "Failed to load news. Please try again."
        assert state.error == FAILURE_MESSAGE
        assert state.articles == previous
        assert state.loading is False
        assert controller.usage.failed_requests == 1

    async def test_unexpected_exception_is_collapsed(self) -> None:
        source = _failing(RuntimeError("malformed payload"))
        controller = NewsFetchController(source)

        state = await controller.fetch_news()

        assert state.error == FAILURE_MESSAGE
        assert state.articles == []

    async def test_fallback_failure_keeps_articles(self) -> None:
        def handler(request: NewsRequest) -> list[Article]:
            if request.mode is RequestMode.SEARCH:
                raise NewsFetchError("fallback down")
            return []

        controller = NewsFetchController(FakeSource(handler))
        previous = make_articles(3, "previous")
        controller.state.articles = previous

        state = await controller.fetch_news()

        assert state.error == FAILURE_MESSAGE
        assert state.articles == previous
        assert state.loading is False

    async def test_cancellation_propagates_and_clears_loading(self) -> None:
        source = _always(make_articles(1))
        source.gates[0] = asyncio.Event()
        controller = NewsFetchController(source)

        task = asyncio.create_task(controller.fetch_news())
        await asyncio.sleep(0)
        assert controller.state.loading is True
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert controller.state.loading is False
        assert controller.state.articles == []
        assert controller.state.error == ""


class TestLoadingFlag:
    """Tests for the loading flag lifecycle."""

    async def test_loading_true_only_while_in_flight(self) -> None:
        observed: list[bool] = []
        controller: NewsFetchController

        def handler(request: NewsRequest) -> list[Article]:
            observed.append(controller.state.loading)
            return make_articles(1)

        controller = NewsFetchController(FakeSource(handler))
        assert controller.state.loading is False

        await controller.fetch_news()

        assert observed == [True]
        assert controller.state.loading is False

    async def test_loading_stays_true_through_fallback(self) -> None:
        observed: list[bool] = []
        controller: NewsFetchController

        def handler(request: NewsRequest) -> list[Article]:
            observed.append(controller.state.loading)
            return [] if request.mode is RequestMode.HEADLINES else make_articles(1)

        controller = NewsFetchController(FakeSource(handler))
        await controller.fetch_news()

        assert observed == [True, True]
        assert controller.state.loading is False

    async def test_loading_cleared_after_failure(self) -> None:
        controller = NewsFetchController(_failing(NewsFetchError("down")))
        state = await controller.fetch_news()
        assert state.loading is False


class TestTriggers:
    """Tests for mount, country, query and search triggers."""

    async def test_mount_fetches_default_country(self) -> None:
        source = _always(make_articles(1))
        controller = NewsFetchController(source)

        await controller.mount()

        assert source.requests == [NewsRequest.headlines("us")]

    async def test_set_country_fetches_on_change(self) -> None:
        source = _always(make_articles(1))
        controller = NewsFetchController(source)

        await controller.set_country("gb")

        assert controller.state.country == "gb"
        assert source.requests == [NewsRequest.headlines("gb")]

    async def test_set_country_same_value_does_not_fetch(self) -> None:
        source = _always(make_articles(1))
        controller = NewsFetchController(source, country="in")

        await controller.set_country("in")

        assert source.requests == []

    async def test_set_country_with_query_still_searches(self) -> None:
        source = _always(make_articles(1))
        controller = NewsFetchController(source)
        controller.set_query("football")

        await controller.set_country("br")

        assert source.requests == [NewsRequest.search("football")]

    async def test_set_query_does_not_fetch(self) -> None:
        source = _always(make_articles(1))
        controller = NewsFetchController(source)

        controller.set_query("markets")

        assert controller.state.query == "markets"
        assert source.requests == []

    async def test_search_fetches_immediately(self) -> None:
        source = _always(make_articles(1))
        controller = NewsFetchController(source)
        controller.set_query("markets")

        await controller.search()

        assert source.requests == [NewsRequest.search("markets")]

    async def test_clearing_query_returns_to_headlines(self) -> None:
        source = _always(make_articles(1))
        controller = NewsFetchController(source, country="kr")
        controller.set_query("chips")
        await controller.search()

        controller.set_query("")
        await controller.search()

        assert source.requests[-1] == NewsRequest.headlines("kr")


class TestOverlappingFetches:
    """Tests for the generation guard on overlapping fetches."""

    async def test_only_latest_fetch_commits(self) -> None:
        def handler(request: NewsRequest) -> list[Article]:
            return make_articles(1 if request.country == "us" else 2, request.country or "")

        source = FakeSource(handler)
        slow = asyncio.Event()
        source.gates[0] = slow
        controller = NewsFetchController(source)

        first = asyncio.create_task(controller.fetch_news())
        await asyncio.sleep(0)
        await controller.set_country("fr")

        assert len(controller.state.articles) == 2
        assert controller.state.loading is False

        slow.set()
        await first

        assert len(controller.state.articles) == 2
        assert controller.state.articles[0].url.startswith("https://example.com/fr/")
        assert controller.generation == 2

    async def test_superseded_fetch_does_not_clear_loading(self) -> None:
        source = _always(make_articles(1))
        fast_gate = asyncio.Event()
        slow_gate = asyncio.Event()
        source.gates[0] = fast_gate
        source.gates[1] = slow_gate
        controller = NewsFetchController(source)

        first = asyncio.create_task(controller.fetch_news())
        await asyncio.sleep(0)
        second = asyncio.create_task(controller.fetch_news())
        await asyncio.sleep(0)

        fast_gate.set()
        await first
        assert controller.state.loading is True

        slow_gate.set()
        await second
        assert controller.state.loading is False

    async def test_superseded_failure_is_discarded(self) -> None:
        def handler(request: NewsRequest) -> list[Article]:
            if request.country == "us":
                raise NewsFetchError("late failure")
            return make_articles(3)

        source = FakeSource(handler)
        gate = asyncio.Event()
        source.gates[0] = gate
        controller = NewsFetchController(source)

        first = asyncio.create_task(controller.fetch_news())
        await asyncio.sleep(0)
        await controller.set_country("ca")

        gate.set()
        await first

        assert controller.state.error == ""
        assert len(controller.state.articles) == 3


class TestRunLoggerIntegration:
    """Tests for fetch records written through RunLogger."""

    async def test_records_each_fetch(self, tmp_path: Path) -> None:
        run_logger = RunLogger(log_dir=tmp_path)
        run_logger.start_session("us")
        source = _empty_then(make_articles(2))
        controller = NewsFetchController(source, run_logger=run_logger)

        await controller.fetch_news()

        record = run_logger.record
        assert record is not None
        assert len(record.fetches) == 1
        fetch = record.fetches[0]
        assert fetch.mode == "top-headlines"
        assert fetch.country == "us"
        assert fetch.primary_count == 0
        assert fetch.fallback_used is True
        assert fetch.fallback_count == 2
        assert fetch.committed is True

    async def test_records_failure(self, tmp_path: Path) -> None:
        run_logger = RunLogger(log_dir=tmp_path)
        run_logger.start_session("us")
        controller = NewsFetchController(
            _failing(NewsFetchError("down")), run_logger=run_logger
        )
        controller.set_query("election")

        await controller.fetch_news()

        assert run_logger.record is not None
        fetch = run_logger.record.fetches[0]
        assert fetch.mode == "everything"
        assert fetch.query == "election"
        assert fetch.primary_count is None
        assert fetch.error == FAILURE_MESSAGE
