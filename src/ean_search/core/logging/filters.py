"""
Log filters adding per-call and static context to records.
"""

import logging
import threading
from typing import Any, Dict, Optional

_correlation_id_storage = threading.local()


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation id for the current thread."""
    _correlation_id_storage.value = correlation_id


def get_correlation_id() -> Optional[str]:
    """Correlation id of the current thread, or None."""
    return getattr(_correlation_id_storage, 'value', None)


def clear_correlation_id() -> None:
    """Remove the correlation id of the current thread."""
    if hasattr(_correlation_id_storage, 'value'):
        del _correlation_id_storage.value


class CorrelationIdFilter(logging.Filter):
    """
    Adds the thread's correlation id to every record.

    RequestExecutor sets one id per call, so all attempts of a retried
    request share it.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        correlation_id = get_correlation_id()
        if correlation_id:
            record.correlation_id = correlation_id
        return True


class ExtraFieldsFilter(logging.Filter):
    """
    Adds static fields (service, environment, ...) to every record.

    Fields already present on the record win.
    """

    def __init__(self, extra_fields: Dict[str, Any]):
        super().__init__()
        self.extra_fields = extra_fields

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in self.extra_fields.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
