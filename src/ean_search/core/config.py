"""
Configuration for the EAN Search client.

All configs are immutable (frozen dataclasses) so a client can be shared
between threads.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from .logging import LoggingConfig

DEFAULT_BASE_URL = "https://api.ean-search.org/api"
DEFAULT_USER_AGENT = "python-eansearch/1.0"

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TIMEOUT CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class TimeoutConfig:
    """
    Transport timeouts.

    Args:
        connect: Connect timeout (seconds)
        read: Read timeout (seconds)

    Examples:
        >>> TimeoutConfig(connect=5, read=30)
    """
    connect: float = 5
    read: float = 30

    def __post_init__(self):
        if self.connect <= 0:
            raise ValueError("connect timeout must be positive")
        if self.read <= 0:
            raise ValueError("read timeout must be positive")

    def as_tuple(self) -> Tuple[float, float]:
        """Return (connect, read) as expected by requests."""
        return (self.connect, self.read)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# RETRY CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class RetryConfig:
    """
    Retry policy for rate-limited responses.

    Args:
        max_attempts: Total attempts, including the first one
        backoff_base: Base delay (seconds)
        backoff_factor: Multiplier for exponential backoff
        backoff_max: Upper bound for a single delay (seconds)
        backoff_jitter: Randomize delays (50-150%)
        respect_retry_after: Honour the Retry-After header
        retry_after_max: Upper bound for Retry-After waits (seconds)

    Examples:
        >>> RetryConfig(max_attempts=4)
        >>> RetryConfig(backoff_base=0, respect_retry_after=False)  # no waiting
    """
    max_attempts: int = 4
    backoff_base: float = 0.5
    backoff_factor: float = 2.0
    backoff_max: float = 10.0
    backoff_jitter: bool = True

    respect_retry_after: bool = True
    retry_after_max: float = 60.0

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.backoff_base < 0:
            raise ValueError("backoff_base must be non-negative")
        if self.backoff_factor < 1:
            raise ValueError("backoff_factor must be >= 1")
        if self.backoff_max < 0:
            raise ValueError("backoff_max must be non-negative")
        if self.retry_after_max < 0:
            raise ValueError("retry_after_max must be non-negative")

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# MAIN CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class EANSearchConfig:
    """
    Main configuration of the EAN Search client.

    Args:
        base_url: API endpoint
        user_agent: Value of the User-Agent header
        timeout: Transport timeouts
        retry: Retry policy for HTTP 429
        logging: Structured logging config (None = library loggers only)

    Examples:
        >>> config = EANSearchConfig()
        >>> config = EANSearchConfig.create(timeout=10, max_retries=5)
    """
    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)
    logging: Optional['LoggingConfig'] = None

    def __post_init__(self):
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError("base_url must be an http(s) URL")

        # The query string is appended directly, so drop trailing slashes
        normalized = self.base_url.rstrip('/')
        if normalized != self.base_url:
            object.__setattr__(self, 'base_url', normalized)

    @classmethod
    def create(
        cls,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Union[float, Tuple[float, float], TimeoutConfig] = 30,
        max_retries: int = 3,
        user_agent: str = DEFAULT_USER_AGENT,
        logging: Optional['LoggingConfig'] = None,
    ) -> 'EANSearchConfig':
        """
        Convenience constructor.

        Args:
            base_url: API endpoint
            timeout: Read timeout, (connect, read) tuple or TimeoutConfig
            max_retries: Retries after the first attempt (not attempts)
            user_agent: User-Agent header value
            logging: Structured logging config

        Examples:
            >>> EANSearchConfig.create(timeout=(3, 10), max_retries=1)
        """
        return cls(
            base_url=base_url,
            user_agent=user_agent,
            timeout=_as_timeout(timeout),
            retry=RetryConfig(max_attempts=max_retries + 1),
            logging=logging,
        )

    def with_timeout(self, timeout: Union[float, Tuple[float, float], TimeoutConfig]) -> 'EANSearchConfig':
        """Return a copy with another timeout."""
        return replace(self, timeout=_as_timeout(timeout))

    def with_retries(self, max_attempts: int) -> 'EANSearchConfig':
        """
        Return a copy with another attempt limit.

        Args:
            max_attempts: Total attempts, including the first one
        """
        return replace(self, retry=replace(self.retry, max_attempts=max_attempts))


def _as_timeout(timeout: Union[float, Tuple[float, float], TimeoutConfig]) -> TimeoutConfig:
    if isinstance(timeout, TimeoutConfig):
        return timeout
    if isinstance(timeout, tuple):
        return TimeoutConfig(connect=timeout[0], read=timeout[1])
    return TimeoutConfig(read=timeout)
