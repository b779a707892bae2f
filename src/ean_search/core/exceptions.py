"""
Exception hierarchy of the EAN Search client.

Classification:
- retryable=True - the request may be sent again (only HTTP 429)
- fatal=True - never retried

Exceptions never leave the public EANSearch facade; they are raised by
RequestExecutor.execute() and folded into CallResult by RequestExecutor.call().
"""

from typing import Optional

import requests

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class EANSearchException(Exception):
    """Base exception of the EAN Search client."""

    retryable: bool = False
    fatal: bool = False

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TRANSPORT
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TransportError(EANSearchException):
    """
    The request never produced an HTTP response.

    Examples: DNS failure, refused connection, timeout.
    """
    fatal = True

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        full_message = message
        if url:
            full_message += f" (url: {url})"
        super().__init__(full_message)


class TimeoutError(TransportError):
    """Connect or read timeout."""
    pass


class ConnectionError(TransportError):
    """
    Connection could not be established or was dropped.

    Covers DNS resolution failures, since requests reports them the same way.
    """
    pass

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# HTTP STATUS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class HTTPStatusError(EANSearchException):
    """
    Response status outside [200, 300).

    Args:
        status_code: HTTP status
        url: Request URL (token masked)
        message: Extra detail, usually the start of the body
    """
    fatal = True

    def __init__(self, status_code: int, url: str, message: str = ""):
        self.status_code = status_code
        self.url = url

        msg = f"HTTP {status_code} error for {url}"
        if message:
            msg += f": {message}"

        super().__init__(msg)


class RateLimitedError(HTTPStatusError):
    """
    429 Too Many Requests.

    Args:
        url: Request URL (token masked)
        retry_after: Raw Retry-After header value, if any
    """
    retryable = True
    fatal = False

    def __init__(self, url: str, retry_after: Optional[str] = None, message: str = ""):
        self.retry_after = retry_after
        super().__init__(429, url, message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# OTHERS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TooManyRetriesError(EANSearchException):
    """
    The service kept rate limiting until the attempt limit was reached.

    Args:
        max_attempts: Attempts made, including the first one
        last_error: Error of the final attempt
        url: Request URL (token masked)
    """

    def __init__(
        self,
        max_attempts: int,
        last_error: Optional[Exception] = None,
        url: Optional[str] = None
    ):
        self.max_attempts = max_attempts
        self.last_error = last_error
        self.url = url

        msg = f"Gave up after {max_attempts} attempts"
        if url:
            msg += f" for {url}"
        if last_error:
            msg += f". Last error: {last_error}"

        super().__init__(msg)


class InvalidResponseError(EANSearchException):
    """Body is not valid JSON."""
    fatal = True


class ConfigurationError(EANSearchException):
    """Invalid client setup (for example an empty token)."""
    fatal = True

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CLASSIFICATION
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def classify_requests_exception(exc: Exception, url: str) -> EANSearchException:
    """
    Convert a requests exception into the client's taxonomy.

    Args:
        exc: Exception raised by requests
        url: Request URL (token masked)

    Examples:
        >>> err = classify_requests_exception(requests.exceptions.Timeout(), "https://x")
        >>> isinstance(err, TimeoutError)
        True
    """
    if isinstance(exc, requests.exceptions.Timeout):
        return TimeoutError("Request timeout", url)

    if isinstance(exc, requests.exceptions.ConnectionError):
        return ConnectionError("Connection error", url)

    if isinstance(exc, requests.exceptions.RequestException):
        return TransportError(f"Request failed: {type(exc).__name__}", url)

    return EANSearchException(f"Unexpected error: {exc}")


def classify_response(response: requests.Response, url: str) -> HTTPStatusError:
    """
    Map a non-2xx response to an exception.

    Args:
        response: Response with a status outside [200, 300)
        url: Request URL (token masked)
    """
    message = response.text[:200] if response.text else ""

    if response.status_code == 429:
        return RateLimitedError(
            url,
            retry_after=response.headers.get('Retry-After'),
            message=message
        )

    return HTTPStatusError(response.status_code, url, message)
