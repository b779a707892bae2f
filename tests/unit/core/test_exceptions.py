"""Tests for the exception hierarchy and classification."""

import pytest
import requests

from ean_search.core.exceptions import (
    ConnectionError,
    EANSearchException,
    HTTPStatusError,
    RateLimitedError,
    TimeoutError,
    TooManyRetriesError,
    TransportError,
    classify_requests_exception,
    classify_response,
)

URL = "https://api.ean-search.org/api?op=x&token=***REDACTED***&format=json"


def make_response(status_code, text="", headers=None):
    response = requests.Response()
    response.status_code = status_code
    response._content = text.encode()
    response.headers.update(headers or {})
    return response


def test_hierarchy():
    assert issubclass(TimeoutError, TransportError)
    assert issubclass(ConnectionError, TransportError)
    assert issubclass(RateLimitedError, HTTPStatusError)
    for cls in (TransportError, HTTPStatusError, TooManyRetriesError):
        assert issubclass(cls, EANSearchException)


def test_flags():
    assert RateLimitedError(URL).retryable is True
    assert RateLimitedError(URL).fatal is False
    assert HTTPStatusError(404, URL).fatal is True
    assert ConnectionError("x", URL).fatal is True


@pytest.mark.parametrize("exc,expected", [
    (requests.exceptions.ConnectTimeout(), TimeoutError),
    (requests.exceptions.ReadTimeout(), TimeoutError),
    (requests.exceptions.ConnectionError(), ConnectionError),
    (requests.exceptions.SSLError(), ConnectionError),
    (requests.exceptions.InvalidURL(), TransportError),
])
def test_classify_requests_exception(exc, expected):
    error = classify_requests_exception(exc, URL)
    assert type(error) is expected
    assert error.url == URL


def test_classify_http_error_as_transport_error():
    # status codes are classified from the response, not from raise_for_status
    exc = requests.exceptions.HTTPError(response=make_response(404))
    error = classify_requests_exception(exc, URL)
    assert type(error) is TransportError
    assert "HTTPError" in str(error)


def test_classify_unknown_exception():
    error = classify_requests_exception(ValueError("boom"), URL)
    assert type(error) is EANSearchException


def test_classify_rate_limited_response():
    error = classify_response(make_response(429, headers={"Retry-After": "3"}), URL)
    assert isinstance(error, RateLimitedError)
    assert error.retry_after == "3"
    assert error.status_code == 429


def test_classify_response_keeps_body_excerpt():
    error = classify_response(make_response(400, text="Invalid token" + "x" * 500), URL)
    assert error.status_code == 400
    assert "Invalid token" in str(error)
    assert len(error.message) < 400


def test_too_many_retries_message():
    last = RateLimitedError(URL)
    error = TooManyRetriesError(4, last_error=last, url=URL)
    assert "4 attempts" in str(error)
    assert error.last_error is last
