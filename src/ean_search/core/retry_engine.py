"""
Retry engine for rate-limited requests.

Includes:
- Exponential backoff with jitter
- Retry-After header parsing
"""

import logging
import random
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional

from .config import RetryConfig

logger = logging.getLogger(__name__)

# Normal values are "60" or "Wed, 21 Oct 2015 07:28:00 GMT"
MAX_RETRY_AFTER_LENGTH = 100


class RetryEngine:
    """
    Retry decisions for RequestExecutor.

    The engine holds no per-request state; the executor passes the number of
    attempts already made, so one engine can serve concurrent calls.

    Examples:
        >>> engine = RetryEngine(RetryConfig(max_attempts=4))
        >>> if engine.should_retry(attempt, error):
        >>>     time.sleep(engine.get_wait_time(attempt, response))
    """

    def __init__(self, config: RetryConfig):
        self.config = config

    def should_retry(self, attempt: int, error: Exception) -> bool:
        """
        Decide whether another attempt is allowed.

        Args:
            attempt: Attempts made so far (1 after the first request)
            error: Classified error of the last attempt

        Returns:
            True if the request should be sent again
        """
        if attempt >= self.config.max_attempts:
            return False

        if getattr(error, 'fatal', False):
            return False

        return bool(getattr(error, 'retryable', False))

    def get_wait_time(self, attempt: int, response=None) -> float:
        """
        Seconds to wait before the next attempt.

        Args:
            attempt: Attempts made so far
            response: Response of the last attempt, if any
        """
        if self.config.respect_retry_after and response is not None:
            retry_after = self._parse_retry_after(response)
            if retry_after is not None:
                return min(retry_after, self.config.retry_after_max)

        wait = self.config.backoff_base * (
            self.config.backoff_factor ** max(attempt - 1, 0)
        )
        wait = min(wait, self.config.backoff_max)

        if self.config.backoff_jitter:
            wait = wait * (0.5 + random.random())

        return wait

    def _parse_retry_after(self, response) -> Optional[float]:
        """
        Parse the Retry-After header (seconds or HTTP date).

        Returns:
            Seconds, or None when absent or malformed
        """
        retry_after = response.headers.get('Retry-After')
        if not retry_after:
            return None

        if len(retry_after) > MAX_RETRY_AFTER_LENGTH:
            logger.warning(
                "Retry-After header too long (%d chars), ignoring", len(retry_after)
            )
            return None

        try:
            seconds = float(retry_after)
        except ValueError:
            pass
        else:
            if seconds < 0:
                logger.warning("Negative Retry-After value ignored: %s", retry_after)
                return None
            return seconds

        try:
            retry_date = parsedate_to_datetime(retry_after)
        except (ValueError, TypeError, OverflowError) as e:
            logger.debug("Failed to parse Retry-After header %r: %s", retry_after, e)
            return None

        if retry_date.tzinfo is None:
            retry_date = retry_date.replace(tzinfo=timezone.utc)
        delta = (retry_date - datetime.now(timezone.utc)).total_seconds()
        return max(0.0, delta)
