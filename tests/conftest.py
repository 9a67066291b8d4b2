"""Shared pytest fixtures and configuration.

Fixture Categories:
1. Credentials & Settings: eddie_credentials, mock_settings
2. HTTP: respx_mock, mock_http_client, eddie_client
3. Sample Parameters: sample_urls, sample_crawl_params, sample_search_params
4. Observability: logfire_capture
"""

import os
from unittest.mock import patch

import pytest

try:
    import respx
except ImportError:
    respx = None

try:
    import logfire
except ImportError:
    logfire = None

from src.models.credential_models import EddieCredentials
from src.services.client_protocol import EddieClient, MockHttpClient

# Suppress warnings when logfire isn't configured in tests
os.environ.setdefault("LOGFIRE_IGNORE_NO_CONFIG", "1")

TEST_BASE_URL = "https://api.eddie.test"
TEST_API_KEY = "eddie-test-key-123"


@pytest.fixture
def respx_mock():
    """Respx mock fixture for HTTP mocking."""
    if respx is None:
        pytest.skip("respx not available")
    with respx.mock:
        yield respx


# =============================================================================
# Credentials & Settings
# =============================================================================


@pytest.fixture
def eddie_credentials():
    """Credentials pointing at the test base URL."""
    return EddieCredentials(api_key=TEST_API_KEY, base_url=TEST_BASE_URL)


@pytest.fixture
def eddie_client(eddie_credentials):
    """Real EddieClient against the test base URL (mock it with respx)."""
    return EddieClient(eddie_credentials, timeout=5.0)


@pytest.fixture
def mock_settings(monkeypatch):
    """Application settings with test credentials, bypassing env files."""
    from src.config import Settings, get_settings

    get_settings.cache_clear()
    settings = Settings(
        eddie_api_key=TEST_API_KEY,
        eddie_base_url=TEST_BASE_URL,
        eddie_api_timeout_seconds=5.0,
        continue_on_fail=False,
        env="local",
        logfire_token=None,
    )

    monkeypatch.setattr("src.config.get_settings", lambda: settings)
    monkeypatch.setattr("src.services.client_protocol.get_settings", lambda: settings)
    monkeypatch.setattr("src.cli.eddie_cli.get_settings", lambda: settings)
    monkeypatch.setattr("src.cli.eddie_cli.setup_logfire", lambda settings=None: None)
    yield settings
    get_settings.cache_clear()


# =============================================================================
# HTTP Client Mocks
# =============================================================================


@pytest.fixture
def mock_http_client():
    """MockHttpClient that returns a queued-job response for every request."""
    return MockHttpClient(response={"job_id": "job-123", "status": "queued"})


# =============================================================================
# Sample Parameters
# =============================================================================


@pytest.fixture
def sample_urls():
    """Three well-formed URLs."""
    return ["https://example.com", "https://example.org/about", "http://example.net"]


@pytest.fixture
def make_urls():
    """Factory generating ``count`` distinct, well-formed URLs."""

    def _make(count: int, scheme: str = "https") -> list[str]:
        return [f"{scheme}://site{i}.example.com/page" for i in range(count)]

    return _make


@pytest.fixture
def sample_crawl_params(sample_urls):
    """Item parameters for a crawl with no advanced options."""
    return {
        "operation": "crawl",
        "urls": ", ".join(sample_urls),
        "context": {},
        "jsonSchema": {},
    }


@pytest.fixture
def sample_search_params():
    """Item parameters for a smart search."""
    return {
        "operation": "smartSearch",
        "query": "find pricing pages",
        "context": {"industry": "saas"},
        "advancedOptions": {"maxResults": 25, "websiteOnly": True},
    }


# =============================================================================
# Observability
# =============================================================================


@pytest.fixture
def logfire_capture():
    """
    Capture Logfire logs for testing.

    This fixture patches Logfire to capture log calls for assertion.
    """
    if logfire is None:
        pytest.skip("logfire not available")

    captured_logs = []

    original_info = logfire.info
    original_warning = logfire.warning
    original_error = logfire.error

    def capture_info(*args, **kwargs):
        captured_logs.append(("info", args, kwargs))
        return original_info(*args, **kwargs)

    def capture_warning(*args, **kwargs):
        captured_logs.append(("warning", args, kwargs))
        return original_warning(*args, **kwargs)

    def capture_error(*args, **kwargs):
        captured_logs.append(("error", args, kwargs))
        return original_error(*args, **kwargs)

    with (
        patch("logfire.info", side_effect=capture_info),
        patch("logfire.warning", side_effect=capture_warning),
        patch("logfire.error", side_effect=capture_error),
    ):
        yield captured_logs
