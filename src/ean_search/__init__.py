"""EAN Search client - barcode, ISBN and product lookups on EAN-Search.org."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .client import EANSearch
from .language import Language
from .models import Product, ProductFull
from .core.config import EANSearchConfig, TimeoutConfig, RetryConfig
from .core.logging import LoggingConfig
from .core.exceptions import (
    EANSearchException,
    TransportError,
    TimeoutError,
    ConnectionError,
    HTTPStatusError,
    RateLimitedError,
    TooManyRetriesError,
    InvalidResponseError,
    ConfigurationError,
)

# Users configure output themselves via logging.getLogger('ean_search')
logging.getLogger('ean_search').addHandler(logging.NullHandler())

try:
    __version__ = version("ean-search-client")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

__license__ = "MIT"

__all__ = [
    # Client
    "EANSearch",
    "Language",

    # Records
    "Product",
    "ProductFull",

    # Config
    "EANSearchConfig",
    "TimeoutConfig",
    "RetryConfig",
    "LoggingConfig",

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

    # Version
    "__version__",
]
