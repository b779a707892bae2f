"""Core modules: request execution, decoding, configuration."""

from .config import (
    TimeoutConfig,
    RetryConfig,
    EANSearchConfig,
)
from .retry_engine import RetryEngine
from .exceptions import (
    EANSearchException,
    TransportError,
    TimeoutError,
    ConnectionError,
    HTTPStatusError,
    RateLimitedError,
    TooManyRetriesError,
    InvalidResponseError,
    ConfigurationError,
    classify_requests_exception,
    classify_response,
)
from .decoder import ResponseDecoder
from .executor import RequestExecutor, CallResult, CREDITS_HEADER, UNKNOWN_CREDITS

__all__ = [
    # Config
    "TimeoutConfig",
    "RetryConfig",
    "EANSearchConfig",
    # Pipeline
    "RetryEngine",
    "ResponseDecoder",
    "RequestExecutor",
    "CallResult",
    "CREDITS_HEADER",
    "UNKNOWN_CREDITS",
    # Exceptions
    "EANSearchException",
    "TransportError",
    "TimeoutError",
    "ConnectionError",
    "HTTPStatusError",
    "RateLimitedError",
    "TooManyRetriesError",
    "InvalidResponseError",
    "ConfigurationError",
    "classify_requests_exception",
    "classify_response",
]
