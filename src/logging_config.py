"""Centralized logging configuration with Pydantic Logfire integration."""

import logging
from typing import Any

import logfire

from src.config import Settings, get_settings


def setup_logfire(settings: Settings | None = None) -> None:
    """
    Initialize and configure Pydantic Logfire for observability.

    Sets up:
    - HTTPX instrumentation (outbound Eddie Surf API calls)
    - Pydantic instrumentation (parameter model validation)
    - Environment-aware configuration
    - Console logging locally, bare messages elsewhere
    """
    settings = settings or get_settings()

    logfire_config: dict[str, Any] = {
        "environment": settings.env,
        # Without a token, keep everything local
        "send_to_logfire": "if-token-present",
    }

    if settings.logfire_token:
        logfire_config["token"] = settings.logfire_token

    logfire.configure(**logfire_config)

    try:
        logfire.instrument_httpx()
    except (AttributeError, ImportError, RuntimeError):
        # Instrumentation extra not installed
        pass
    logfire.instrument_pydantic()

    log_level = settings.log_level.upper()

    if settings.env == "local":
        logging.basicConfig(
            level=getattr(logging, log_level, logging.INFO),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
    else:
        logging.basicConfig(
            level=getattr(logging, log_level, logging.INFO),
            format="%(message)s",  # Logfire handles structured formatting
        )


def mask_pii(value: str | None, mask_char: str = "*") -> str:
    """
    Mask potentially sensitive data in logs.

    Args:
        value: Value to mask
        mask_char: Character to use for masking

    Returns:
        Masked string
    """
    if not value:
        return ""

    if len(value) <= 4:
        return mask_char * len(value)

    # Show first 2 and last 2 characters, mask the rest
    return f"{value[:2]}{mask_char * (len(value) - 4)}{value[-2:]}"


def redact_tokens(data: dict[str, Any]) -> dict[str, Any]:
    """
    Redact authentication tokens and API keys from log data.

    Header names are matched case-insensitively, so ``X-API-Key`` and
    ``api_key`` are both masked.

    Args:
        data: Dictionary that may contain sensitive tokens

    Returns:
        Dictionary with tokens redacted
    """
    redacted = data.copy()
    sensitive_keys = {
        "token",
        "access_token",
        "api_key",
        "apikey",
        "x-api-key",
        "secret",
        "password",
        "authorization",
        "auth",
    }

    for key, value in data.items():
        if key.lower() not in sensitive_keys:
            continue
        if isinstance(value, str):
            redacted[key] = mask_pii(value)
        elif isinstance(value, dict):
            redacted[key] = redact_tokens(value)

    return redacted
