"""Tests for the Usage data model."""

from global_news.data import Usage


def test_usage_empty() -> None:
    usage = Usage()
    assert usage.requests == 0
    assert usage.fallback_requests == 0
    assert usage.failed_requests == 0


def test_usage_add() -> None:
    a = Usage(requests=2, fallback_requests=1)
    b = Usage(requests=1, failed_requests=1)
    total = a + b
    assert total.requests == 3
    assert total.fallback_requests == 1
    assert total.failed_requests == 1
    # Operands unchanged
    assert a.requests == 2
    assert b.requests == 1


def test_usage_iadd() -> None:
    usage = Usage(requests=1)
    usage += Usage(requests=2, fallback_requests=1, failed_requests=1)
    assert usage.requests == 3
    assert usage.fallback_requests == 1
    assert usage.failed_requests == 1
