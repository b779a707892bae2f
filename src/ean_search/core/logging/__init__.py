"""
Structured logging for the EAN Search client.

Example:
    >>> from ean_search import EANSearch, EANSearchConfig
    >>> from ean_search.core.logging import LoggingConfig
    >>>
    >>> config = EANSearchConfig.create(
    ...     logging=LoggingConfig.create(level="DEBUG", format="json")
    ... )
    >>> client = EANSearch("my-token", config=config)
"""

from .config import LoggingConfig, LogLevel, LogFormat
from .logger import EANSearchLogger
from .formatters import JSONFormatter, TextFormatter, ColoredFormatter, get_formatter
from .filters import (
    CorrelationIdFilter,
    ExtraFieldsFilter,
    set_correlation_id,
    get_correlation_id,
    clear_correlation_id,
)
from .handlers import create_console_handler, create_file_handler

__all__ = [
    # Config
    "LoggingConfig",
    "LogLevel",
    "LogFormat",
    # Logger
    "EANSearchLogger",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    "ColoredFormatter",
    "get_formatter",
    # Filters
    "CorrelationIdFilter",
    "ExtraFieldsFilter",
    "set_correlation_id",
    "get_correlation_id",
    "clear_correlation_id",
    # Handlers
    "create_console_handler",
    "create_file_handler",
]
