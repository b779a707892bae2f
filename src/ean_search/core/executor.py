"""
Request execution: URL composition, the retry loop and outcome classification.
"""

import logging
import time
import uuid
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple

import requests

from .config import EANSearchConfig
from .exceptions import (
    ConfigurationError,
    EANSearchException,
    TooManyRetriesError,
    classify_requests_exception,
    classify_response,
)
from .logging import EANSearchLogger, clear_correlation_id, set_correlation_id
from .retry_engine import RetryEngine
from .session_manager import ThreadSafeSessionManager
from .utils import sanitize_url

logger = logging.getLogger(__name__)

CREDITS_HEADER = "X-Credits-Remaining"
UNKNOWN_CREDITS = -1
OUTPUT_FORMAT = "json"

Params = Sequence[Tuple[str, Any]]


@dataclass(frozen=True)
class CallResult:
    """
    Outcome of one logical API call (all attempts included).

    Attributes:
        body: Response text on success, None otherwise
        error: Classified failure, None on success
        status_code: Status of the final response, None on transport failure
        attempts: Requests sent, including retries
    """
    body: Optional[str] = None
    error: Optional[EANSearchException] = None
    status_code: Optional[int] = None
    attempts: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None and self.body is not None


class RequestExecutor:
    """
    Sends authenticated GET requests to the EAN Search API.

    Features:
        - Deterministic URL: caller params in order, then token, then format
        - Retries HTTP 429 up to RetryConfig.max_attempts in total
        - No retry for other statuses or transport failures
        - Tracks the X-Credits-Remaining header of every response
        - Thread-safe: each thread gets its own requests.Session

    Example:
        >>> executor = RequestExecutor("my-token")
        >>> result = executor.call([("op", "verify-checksum"), ("ean", "5099750442227")])
        >>> if result.ok:
        ...     print(result.body)
    """

    def __init__(self, token: str, config: Optional[EANSearchConfig] = None):
        """
        Args:
            token: API access token
            config: Client configuration (defaults if None)

        Raises:
            ConfigurationError: If the token is empty or not a string
        """
        if not isinstance(token, str) or not token:
            raise ConfigurationError("API token must be a non-empty string")

        self._token = token
        self._config = config or EANSearchConfig()
        self._retry_engine = RetryEngine(self._config.retry)
        self._session_manager = ThreadSafeSessionManager(session_factory=self._create_session)
        self._credits_remaining = UNKNOWN_CREDITS

        self._logger: Optional[EANSearchLogger] = None
        if self._config.logging:
            self._logger = EANSearchLogger(config=self._config.logging)

    @property
    def config(self) -> EANSearchConfig:
        return self._config

    def _create_session(self) -> requests.Session:
        session = requests.Session()
        session.headers.update({
            'User-Agent': self._config.user_agent,
            'Accept': 'application/json',
        })
        return session

    # ==================== Credits ====================

    @property
    def credits_remaining(self) -> int:
        """Last value of the credits header, -1 if never seen."""
        return self._credits_remaining

    def record_credits(self, value: int) -> None:
        """Store a credit count reported by the service."""
        self._credits_remaining = value
        self._log("debug", "Credits updated", credits=value)

    def reset_credits(self) -> None:
        """Forget the credit count so the next inquiry queries the service."""
        self._credits_remaining = UNKNOWN_CREDITS

    def _observe_credits(self, response: requests.Response) -> None:
        raw = response.headers.get(CREDITS_HEADER)
        if raw is None:
            return
        try:
            self.record_credits(int(raw.strip()))
        except ValueError:
            self._log("debug", "Ignoring malformed credits header", value=raw[:50])

    # ==================== Requests ====================

    def build_url(self, params: Params) -> str:
        """
        Compose the request URL.

        Values are inserted as given; escaping free text is the caller's job.

        Example:
            >>> executor.build_url([("op", "barcode-lookup"), ("ean", "5099750442227")])
            'https://api.ean-search.org/api?op=barcode-lookup&ean=5099750442227&token=...&format=json'
        """
        pairs = list(params) + [("token", self._token), ("format", OUTPUT_FORMAT)]
        query = "&".join(f"{key}={_format_value(value)}" for key, value in pairs)
        return f"{self._config.base_url}?{query}"

    def execute(self, params: Params) -> str:
        """
        Perform a call and return the body.

        Raises:
            EANSearchException: Classified failure of the call
        """
        result = self.call(params)
        if result.error is not None:
            raise result.error
        return result.body

    def call(self, params: Params) -> CallResult:
        """
        Perform a call, folding every failure into the result.

        Args:
            params: Operation parameters in URL order, without token/format

        Returns:
            CallResult with the body on success or the error otherwise
        """
        url = self.build_url(params)
        safe_url = sanitize_url(url)
        op = next((value for key, value in params if key == "op"), None)

        correlation_id = str(uuid.uuid4())
        if self._logger:
            set_correlation_id(correlation_id)

        start_time = time.monotonic()
        max_attempts = self._config.retry.max_attempts
        attempt = 0

        self._log("info", "Request started", op=op, url=safe_url, max_attempts=max_attempts)

        try:
            while True:
                attempt += 1

                try:
                    response = self._session_manager.get_session().get(
                        url,
                        timeout=self._config.timeout.as_tuple(),
                    )
                except requests.exceptions.RequestException as e:
                    error = classify_requests_exception(e, safe_url)
                    self._log_failure(op, safe_url, error, attempt, start_time)
                    return CallResult(error=error, attempts=attempt)

                self._observe_credits(response)

                if 200 <= response.status_code < 300:
                    self._log(
                        "info",
                        "Request completed",
                        op=op,
                        url=safe_url,
                        status_code=response.status_code,
                        attempt=attempt,
                        duration_ms=_elapsed_ms(start_time),
                    )
                    return CallResult(
                        body=response.text,
                        status_code=response.status_code,
                        attempts=attempt,
                    )

                error = classify_response(response, safe_url)

                if self._retry_engine.should_retry(attempt, error):
                    wait_time = self._retry_engine.get_wait_time(attempt, response)
                    self._log(
                        "warning",
                        "Rate limited (will retry)",
                        op=op,
                        url=safe_url,
                        status_code=response.status_code,
                        attempt=attempt,
                        max_attempts=max_attempts,
                        wait_time_s=round(wait_time, 2),
                    )
                    if wait_time > 0:
                        time.sleep(wait_time)
                    continue

                if error.retryable:
                    error = TooManyRetriesError(attempt, last_error=error, url=safe_url)

                self._log_failure(op, safe_url, error, attempt, start_time)
                return CallResult(error=error, status_code=response.status_code, attempts=attempt)
        finally:
            if self._logger:
                clear_correlation_id()

    # ==================== Logging ====================

    def _log(self, level: str, message: str, **fields: Any) -> None:
        if self._logger is not None:
            getattr(self._logger, level)(message, **fields)
        elif logger.isEnabledFor(getattr(logging, level.upper())):
            details = " ".join(f"{key}={value}" for key, value in fields.items())
            getattr(logger, level)("%s %s", message, details)

    def _log_failure(
        self,
        op: Optional[str],
        safe_url: str,
        error: EANSearchException,
        attempt: int,
        start_time: float,
    ) -> None:
        self._log(
            "error",
            "Request failed",
            op=op,
            url=safe_url,
            error=str(error),
            error_type=type(error).__name__,
            attempt=attempt,
            duration_ms=_elapsed_ms(start_time),
        )

    # ==================== Lifecycle ====================

    def close(self) -> None:
        """Close the sessions of all threads and the structured logger."""
        if self._logger is not None:
            self._logger.close()
        self._session_manager.close_all()


def _format_value(value: Any) -> str:
    # IntEnum members (Language) must render as their number
    if isinstance(value, int) and not isinstance(value, bool):
        return str(int(value))
    return str(value)


def _elapsed_ms(start_time: float) -> float:
    return round((time.monotonic() - start_time) * 1000, 2)
