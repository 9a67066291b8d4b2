"""Send requests to the Eddie Surf API."""

import time
from typing import Any

import httpx
import logfire

from src.constants import EDDIE_API_TIMEOUT_SECONDS, LOGGED_RESPONSE_BODY_CHARS
from src.logging_config import mask_pii
from src.models.credential_models import EDDIE_API_CREDENTIAL, EddieCredentials
from src.models.request_models import HttpRequestDescriptor


def _build_client(credentials: EddieCredentials, timeout: float) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=credentials.base_url,
        headers={
            "Accept": "application/json",
            **EDDIE_API_CREDENTIAL.authentication_headers(credentials),
        },
        timeout=timeout,
    )


def _decode_body(response: httpx.Response) -> Any:
    """JSON body of a response, falling back to text for non-JSON replies."""
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        return response.text


async def send_request(
    credentials: EddieCredentials,
    request: HttpRequestDescriptor,
    timeout: float = EDDIE_API_TIMEOUT_SECONDS,
) -> Any:
    """
    Send a request descriptor to the Eddie Surf API.

    Args:
        credentials: API key and base URL
        request: Method, relative path and optional JSON body
        timeout: Local HTTP timeout in seconds

    Returns:
        Decoded JSON response

    Raises:
        httpx.HTTPStatusError: On a non-2xx response
        httpx.RequestError: On network failures and timeouts
    """
    start_time = time.time()

    logfire.info(
        "Sending Eddie Surf request",
        method=request.method,
        path=request.path,
        base_url=credentials.base_url,
        api_key=mask_pii(credentials.api_key.get_secret_value()),
    )

    try:
        async with _build_client(credentials, timeout) as client:
            response = await client.request(
                request.method,
                request.path,
                json=request.body,
            )
            elapsed = time.time() - start_time

            if response.is_success:
                logfire.info(
                    "Eddie Surf request succeeded",
                    method=request.method,
                    path=request.path,
                    status_code=response.status_code,
                    response_time_ms=elapsed * 1000,
                )
            else:
                logfire.error(
                    "Eddie Surf request failed",
                    method=request.method,
                    path=request.path,
                    status_code=response.status_code,
                    response_body=response.text[:LOGGED_RESPONSE_BODY_CHARS],
                    response_time_ms=elapsed * 1000,
                )

            response.raise_for_status()
            return _decode_body(response)
    except httpx.RequestError as e:
        elapsed = time.time() - start_time
        logfire.error(
            "Eddie Surf request error",
            method=request.method,
            path=request.path,
            error=str(e),
            error_type=type(e).__name__,
            response_time_ms=elapsed * 1000,
        )
        raise


async def check_credentials(
    credentials: EddieCredentials,
    timeout: float = EDDIE_API_TIMEOUT_SECONDS,
) -> bool:
    """Check that the API accepts the credential (``GET /health``)."""
    request = EDDIE_API_CREDENTIAL.test_request()
    start_time = time.time()
    try:
        async with _build_client(credentials, timeout) as client:
            response = await client.request(request.method, request.path)
            elapsed = time.time() - start_time
            is_valid = response.is_success
            logfire.info(
                "Eddie Surf credential test",
                valid=is_valid,
                status_code=response.status_code,
                response_time_ms=elapsed * 1000,
                base_url=credentials.base_url,
            )
            return is_valid
    except httpx.RequestError as e:
        elapsed = time.time() - start_time
        logfire.warning(
            "Eddie Surf credential test failed",
            error=str(e),
            error_type=type(e).__name__,
            response_time_ms=elapsed * 1000,
            base_url=credentials.base_url,
        )
        return False
