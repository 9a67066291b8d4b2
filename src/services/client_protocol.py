"""HTTP client abstraction for sending built Eddie Surf requests.

This module provides a Protocol-based abstraction for the authenticated
HTTP client, allowing the node executor to:
- Send requests without knowing how credentials are applied
- Mock the API in tests without httpx mocking
- Support dry runs that record requests instead of sending them
"""

import copy
from typing import Any, Protocol

from src.config import Settings, get_settings
from src.constants import EDDIE_API_TIMEOUT_SECONDS
from src.models.credential_models import EddieCredentials
from src.models.request_models import HttpRequestDescriptor


class HttpClient(Protocol):
    """Protocol for sending request descriptors with credentials applied."""

    async def send(self, request: HttpRequestDescriptor) -> Any:
        """Send a request and return the decoded JSON response.

        Args:
            request: Method, relative path and optional JSON body

        Returns:
            Decoded response body
        """
        ...


class EddieClient:
    """Authenticated Eddie Surf implementation of HttpClient.

    Wraps the eddie_service functions, holding the credential and timeout.

    Example:
        >>> client = EddieClient(EddieCredentials(api_key="key"))
        >>> await client.send(build_status_query("crawl", "job-1"))
        {'status': 'completed', ...}
    """

    def __init__(
        self,
        credentials: EddieCredentials,
        timeout: float = EDDIE_API_TIMEOUT_SECONDS,
    ):
        """Initialize with credentials.

        Args:
            credentials: API key and base URL
            timeout: Local HTTP timeout in seconds
        """
        self.credentials = credentials
        self.timeout = timeout

    async def send(self, request: HttpRequestDescriptor) -> Any:
        """Send a request through the Eddie Surf API."""
        from src.services.eddie_service import send_request

        return await send_request(self.credentials, request, timeout=self.timeout)

    async def test_credentials(self) -> bool:
        """Run the credential test request. Never raises on network errors."""
        from src.services.eddie_service import check_credentials

        return await check_credentials(self.credentials, timeout=self.timeout)


class MockHttpClient:
    """Mock implementation for tests and dry runs.

    Example:
        >>> client = MockHttpClient(response={"job_id": "abc"})
        >>> await client.send(request)
        {'job_id': 'abc'}
        >>> client.sent_requests
        [HttpRequestDescriptor(method='POST', path='/crawl', body={...})]
    """

    def __init__(
        self,
        response: Any = None,
        error: Exception | None = None,
        fail_on_paths: set[str] | None = None,
    ):
        """Initialize mock client.

        Args:
            response: Response returned for every request (``{}`` by default)
            error: Exception raised instead of returning a response
            fail_on_paths: Only raise ``error`` for requests to these paths
        """
        self._response = {} if response is None else response
        self._error = error
        self._fail_on_paths = fail_on_paths
        self.sent_requests: list[HttpRequestDescriptor] = []

    async def send(self, request: HttpRequestDescriptor) -> Any:
        """Record the request and return or raise the configured outcome."""
        self.sent_requests.append(request)
        if self._error is not None and (
            self._fail_on_paths is None or request.path in self._fail_on_paths
        ):
            raise self._error
        return copy.deepcopy(self._response)


def get_eddie_client(settings: Settings | None = None) -> EddieClient:
    """Factory function to build an EddieClient from application settings.

    Args:
        settings: Settings to read credentials from (cached settings by default)

    Returns:
        HttpClient implementation for the Eddie Surf API
    """
    settings = settings or get_settings()
    credentials = EddieCredentials(
        api_key=settings.eddie_api_key,
        base_url=settings.eddie_base_url,
    )
    return EddieClient(credentials, timeout=settings.eddie_api_timeout_seconds)
