"""
Structured logger used by RequestExecutor when a LoggingConfig is given.
"""

import logging
from typing import Any, Dict, Optional

from ..utils import mask_sensitive_data
from .config import LoggingConfig
from .filters import CorrelationIdFilter, ExtraFieldsFilter
from .formatters import get_formatter
from .handlers import create_console_handler, create_file_handler

# Keys that logging.makeRecord refuses in `extra`
_RESERVED_KEYS = {'message', 'asctime', 'args', 'msg', 'name', 'levelname', 'module'}


class EANSearchLogger:
    """
    Logger with keyword fields, console/file handlers and token masking.

    Example:
        >>> logger = EANSearchLogger(LoggingConfig.create(level="DEBUG"))
        >>> logger.info("Request completed", op="barcode-lookup", status_code=200)
    """

    def __init__(self, config: Optional[LoggingConfig] = None, name: str = "ean_search.client"):
        """
        Args:
            config: Logging configuration (defaults if None)
            name: Python logger name
        """
        self.config = config or LoggingConfig()
        self.name = name
        self._closed = False

        level = getattr(logging, self.config.level.value)

        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)
        self._logger.propagate = False
        self._logger.handlers.clear()

        filters = []
        if self.config.enable_correlation_id:
            filters.append(CorrelationIdFilter())
        if self.config.extra_fields:
            filters.append(ExtraFieldsFilter(self.config.extra_fields))

        formatter = get_formatter(self.config.format.value)

        if self.config.enable_console:
            self._logger.addHandler(create_console_handler(level, formatter, filters))

        if self.config.enable_file and self.config.file_path:
            self._logger.addHandler(create_file_handler(
                file_path=self.config.file_path,
                level=level,
                formatter=formatter,
                max_bytes=self.config.max_bytes,
                backup_count=self.config.backup_count,
                filters=filters
            ))

    @staticmethod
    def _fields(kwargs: Dict[str, Any]) -> Dict[str, Any]:
        masked = mask_sensitive_data(kwargs)
        return {
            (f"field_{key}" if key in _RESERVED_KEYS else key): value
            for key, value in masked.items()
        }

    def debug(self, message: str, **kwargs: Any) -> None:
        self._logger.debug(message, extra=self._fields(kwargs))

    def info(self, message: str, **kwargs: Any) -> None:
        self._logger.info(message, extra=self._fields(kwargs))

    def warning(self, message: str, **kwargs: Any) -> None:
        self._logger.warning(message, extra=self._fields(kwargs))

    def error(self, message: str, **kwargs: Any) -> None:
        self._logger.error(message, extra=self._fields(kwargs))

    def close(self) -> None:
        """
        Flush and close all handlers.

        Idempotent.
        """
        if self._closed:
            return

        for handler in self._logger.handlers[:]:
            handler.flush()
            handler.close()
            self._logger.removeHandler(handler)

        self._closed = True
