"""
Pytest configuration and fixtures for ean-search-client tests.
"""

import pytest
import responses as responses_lib

from ean_search import EANSearch
from ean_search.core.config import EANSearchConfig, RetryConfig
from ean_search.core.executor import RequestExecutor
from ean_search.core.logging.config import LoggingConfig

API_URL = "https://api.ean-search.org/api"
TOKEN = "test-token"


@pytest.fixture
def api_url():
    """Endpoint the client talks to."""
    return API_URL


@pytest.fixture
def token():
    return TOKEN


@pytest.fixture
def fast_config():
    """Config that retries 429 without waiting."""
    return EANSearchConfig(
        retry=RetryConfig(
            max_attempts=4,
            backoff_base=0,
            backoff_jitter=False,
            respect_retry_after=False,
        )
    )


@pytest.fixture
def mock_responses():
    """Mock HTTP responses using responses library."""
    with responses_lib.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def client(fast_config):
    """EANSearch instance for testing."""
    client = EANSearch(TOKEN, config=fast_config)
    yield client
    client.close()


@pytest.fixture
def executor(fast_config):
    """RequestExecutor instance for testing."""
    executor = RequestExecutor(TOKEN, config=fast_config)
    yield executor
    executor.close()


@pytest.fixture
def logging_config_with_file(tmp_path):
    """JSON file logging into a temporary directory."""
    return LoggingConfig.create(
        level="DEBUG",
        format="json",
        enable_console=False,
        enable_file=True,
        file_path=str(tmp_path / "client.log")
    )
