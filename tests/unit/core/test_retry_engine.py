"""Tests for RetryEngine."""

from datetime import datetime, timedelta, timezone
from email.utils import format_datetime
from unittest.mock import Mock

import pytest

from ean_search.core.config import RetryConfig
from ean_search.core.exceptions import ConnectionError, HTTPStatusError, RateLimitedError
from ean_search.core.retry_engine import RetryEngine

URL = "https://api.ean-search.org/api"


def make_response(status_code=429, headers=None):
    response = Mock()
    response.status_code = status_code
    response.headers = headers or {}
    return response


def test_should_retry_rate_limited():
    engine = RetryEngine(RetryConfig(max_attempts=4))
    assert engine.should_retry(1, RateLimitedError(URL)) is True


def test_should_not_retry_after_max_attempts():
    engine = RetryEngine(RetryConfig(max_attempts=4))
    error = RateLimitedError(URL)

    assert engine.should_retry(3, error) is True
    assert engine.should_retry(4, error) is False


@pytest.mark.parametrize("status", [400, 404, 500, 503])
def test_should_not_retry_other_statuses(status):
    engine = RetryEngine(RetryConfig())
    assert engine.should_retry(1, HTTPStatusError(status, URL)) is False


def test_should_not_retry_transport_errors():
    engine = RetryEngine(RetryConfig())
    assert engine.should_retry(1, ConnectionError("refused", URL)) is False


def test_only_rate_limit_is_retryable():
    engine = RetryEngine(RetryConfig())

    assert engine.should_retry(1, RateLimitedError(URL)) is True
    assert engine.should_retry(1, HTTPStatusError(503, URL)) is False
    assert not hasattr(RetryConfig(), "retryable_status_codes")


def test_get_wait_time_exponential():
    engine = RetryEngine(RetryConfig(backoff_base=1.0, backoff_factor=2.0, backoff_jitter=False))

    assert engine.get_wait_time(1) == 1.0
    assert engine.get_wait_time(2) == 2.0
    assert engine.get_wait_time(3) == 4.0


def test_get_wait_time_capped():
    engine = RetryEngine(RetryConfig(backoff_base=1.0, backoff_max=3.0, backoff_jitter=False))
    assert engine.get_wait_time(10) == 3.0


def test_get_wait_time_jitter_range():
    engine = RetryEngine(RetryConfig(backoff_base=2.0, backoff_jitter=True))
    for _ in range(50):
        assert 1.0 <= engine.get_wait_time(1) <= 3.0


def test_zero_backoff():
    engine = RetryEngine(RetryConfig(backoff_base=0, backoff_jitter=False))
    assert engine.get_wait_time(1) == 0


def test_retry_after_seconds():
    engine = RetryEngine(RetryConfig(backoff_jitter=False))
    assert engine.get_wait_time(1, make_response(headers={"Retry-After": "7"})) == 7.0


def test_retry_after_capped():
    engine = RetryEngine(RetryConfig(retry_after_max=30))
    assert engine.get_wait_time(1, make_response(headers={"Retry-After": "3600"})) == 30


def test_retry_after_http_date():
    engine = RetryEngine(RetryConfig())
    when = datetime.now(timezone.utc) + timedelta(seconds=20)
    wait = engine.get_wait_time(1, make_response(headers={"Retry-After": format_datetime(when)}))
    assert 15 <= wait <= 20


def test_retry_after_in_the_past():
    engine = RetryEngine(RetryConfig())
    when = datetime.now(timezone.utc) - timedelta(hours=1)
    assert engine.get_wait_time(1, make_response(headers={"Retry-After": format_datetime(when)})) == 0.0


@pytest.mark.parametrize("value", ["soon", "-5", "x" * 200])
def test_retry_after_invalid_falls_back_to_backoff(value):
    engine = RetryEngine(RetryConfig(backoff_base=1.5, backoff_jitter=False))
    assert engine.get_wait_time(1, make_response(headers={"Retry-After": value})) == 1.5


def test_retry_after_ignored_when_disabled():
    engine = RetryEngine(RetryConfig(backoff_base=0.25, backoff_jitter=False, respect_retry_after=False))
    assert engine.get_wait_time(1, make_response(headers={"Retry-After": "9"})) == 0.25
