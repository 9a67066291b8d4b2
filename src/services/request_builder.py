"""Build Eddie Surf API requests from node parameters.

Each builder validates user input and returns an ``HttpRequestDescriptor``
ready for an authenticated HTTP client. Nothing here performs I/O: a
constraint violation raises ``ValidationError`` before any request exists.
"""

import json
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from src.constants import (
    ALLOWED_URL_PREFIXES,
    CRAWL_BATCH_PATH,
    CRAWL_PATH,
    MAX_CRAWL_URLS,
    MAX_MAX_DEPTH,
    MAX_MAX_RESULTS,
    MAX_TIMEOUT_PER_PAGE_SECONDS,
    MIN_CRAWL_BATCH_URLS,
    MIN_MAX_DEPTH,
    MIN_MAX_PAGES,
    MIN_MAX_RESULTS,
    MIN_TIMEOUT_PER_PAGE_SECONDS,
    SMART_SEARCH_PATH,
)
from src.models.request_models import (
    AdvancedOptions,
    CrawlRequest,
    HttpRequestDescriptor,
    JobType,
    SearchRequest,
    StatusQuery,
)
from src.services.errors import ValidationError

AdvancedOptionsInput = AdvancedOptions | dict[str, Any] | None


def split_comma_list(
    value: str | Sequence[str] | None,
    name: str = "Value",
    item_index: int = 0,
) -> list[str]:
    """Split a comma-separated string into trimmed, non-empty entries.

    A list or tuple of strings is trimmed and filtered the same way, so
    callers may pass either form. Order is preserved.

    Raises:
        ValidationError: If the value or one of its entries is not a string
    """
    if value is None or value == "":
        return []
    if isinstance(value, str):
        parts = value.split(",")
    elif isinstance(value, (list, tuple)):
        parts = value
    else:
        raise ValidationError(
            f"{name} must be a comma-separated string or a list of strings",
            item_index,
        )
    for part in parts:
        if part is not None and not isinstance(part, str):
            raise ValidationError(f"{name} entries must be strings", item_index)
    return [part.strip() for part in parts if part and part.strip()]


def _optional_text(value: Any, name: str, item_index: int = 0) -> str:
    """Trimmed string value, ``""`` when absent; non-strings are rejected."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string", item_index)
    return value.strip()


def _format_pydantic_error(error: PydanticValidationError) -> str:
    details = []
    for err in error.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        details.append(f"{location}: {err.get('msg')}" if location else err.get("msg"))
    return "; ".join(details)


def parse_json_object(value: Any, name: str, item_index: int = 0) -> dict[str, Any]:
    """Accept a mapping or JSON text that decodes to an object."""
    if value is None or value == "":
        return {}
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError as e:
            raise ValidationError(
                f"{name} must be valid JSON: {e.msg}", item_index
            ) from e
    if not isinstance(value, dict):
        raise ValidationError(f"{name} must be a JSON object", item_index)
    return value


def parse_advanced_options(
    advanced_options: AdvancedOptionsInput, item_index: int = 0
) -> AdvancedOptions:
    """Coerce raw advanced options into the typed model."""
    if advanced_options is None:
        return AdvancedOptions()
    if isinstance(advanced_options, AdvancedOptions):
        return advanced_options
    try:
        return AdvancedOptions.model_validate(advanced_options)
    except PydanticValidationError as e:
        raise ValidationError(
            f"Invalid advanced options: {_format_pydantic_error(e)}", item_index
        ) from e


def _check_range(
    value: int,
    minimum: int,
    maximum: int | None,
    message: str,
    item_index: int,
) -> None:
    if value < minimum or (maximum is not None and value > maximum):
        raise ValidationError(message, item_index)


def map_advanced_options(
    options: AdvancedOptions,
    *,
    search: bool = False,
    item_index: int = 0,
) -> dict[str, Any]:
    """Validate advanced options and map them to API body fields.

    Only provided options appear in the result. Crawl requests receive the
    crawl subset, smart search requests the search subset.

    Args:
        options: Parsed advanced options
        search: Whether the target is a smart search request
        item_index: Index of the input item, attached to errors

    Returns:
        Snake-case body fields to merge into the request body

    Raises:
        ValidationError: If a numeric option is out of range
    """
    fields: dict[str, Any] = {}

    if search:
        if options.max_results is not None:
            _check_range(
                options.max_results,
                MIN_MAX_RESULTS,
                MAX_MAX_RESULTS,
                f"Max Results must be between {MIN_MAX_RESULTS} and {MAX_MAX_RESULTS}",
                item_index,
            )
            fields["max_results"] = options.max_results
        if options.website_only is not None:
            fields["website_only"] = options.website_only
        if options.skip_duplicate_domains is not None:
            fields["skip_duplicate_domains"] = options.skip_duplicate_domains
    else:
        if options.max_depth is not None:
            _check_range(
                options.max_depth,
                MIN_MAX_DEPTH,
                MAX_MAX_DEPTH,
                f"Max Depth must be between {MIN_MAX_DEPTH} and {MAX_MAX_DEPTH}",
                item_index,
            )
            fields["max_depth"] = options.max_depth
        if options.max_pages is not None:
            _check_range(
                options.max_pages,
                MIN_MAX_PAGES,
                None,
                f"Max Pages must be at least {MIN_MAX_PAGES}",
                item_index,
            )
            fields["max_pages"] = options.max_pages
        if options.timeout_per_page is not None:
            _check_range(
                options.timeout_per_page,
                MIN_TIMEOUT_PER_PAGE_SECONDS,
                MAX_TIMEOUT_PER_PAGE_SECONDS,
                "Timeout Per Page must be between "
                f"{MIN_TIMEOUT_PER_PAGE_SECONDS} and {MAX_TIMEOUT_PER_PAGE_SECONDS} seconds",
                item_index,
            )
            fields["timeout_per_page"] = options.timeout_per_page

    if options.callback_url:
        fields["callback_url"] = options.callback_url
    if not search:
        if options.callback_mode is not None:
            fields["callback_mode"] = options.callback_mode
        if options.include_technical is not None:
            fields["include_technical"] = options.include_technical

    rules = split_comma_list(options.rules)
    if rules:
        fields["rules"] = rules
    if options.mock is not None:
        fields["mock"] = options.mock

    return fields


def _validate_urls(
    urls: str | Sequence[str] | None,
    *,
    batch: bool,
    item_index: int,
) -> list[str]:
    url_list = split_comma_list(urls, "URLs", item_index)
    if not url_list:
        raise ValidationError("At least one URL is required", item_index)
    if batch and len(url_list) < MIN_CRAWL_BATCH_URLS:
        raise ValidationError(
            f"Crawl Batch requires minimum {MIN_CRAWL_BATCH_URLS} URLs. "
            "Use Crawl for fewer URLs.",
            item_index,
        )
    if not batch and len(url_list) > MAX_CRAWL_URLS:
        raise ValidationError(
            f"Crawl operation supports maximum {MAX_CRAWL_URLS} URLs. "
            "Use Crawl Batch for more.",
            item_index,
        )
    for url in url_list:
        if not url.startswith(ALLOWED_URL_PREFIXES):
            raise ValidationError(
                f"Invalid URL format: {url} (must start with http:// or https://)",
                item_index,
            )
    return url_list


def _build_crawl_request(
    path: str,
    urls: str | Sequence[str] | None,
    context: Any,
    schema: Any,
    advanced_options: AdvancedOptionsInput,
    *,
    batch: bool,
    item_index: int,
) -> HttpRequestDescriptor:
    request = CrawlRequest(
        urls=_validate_urls(urls, batch=batch, item_index=item_index),
        context=parse_json_object(context, "Context", item_index),
        json_schema=parse_json_object(schema, "JSON Schema", item_index),
        advanced_options=parse_advanced_options(advanced_options, item_index),
    )
    body: dict[str, Any] = {
        "urls": request.urls,
        "context": request.context,
        "json": request.json_schema,
    }
    body.update(
        map_advanced_options(
            request.advanced_options, search=False, item_index=item_index
        )
    )
    return HttpRequestDescriptor(method="POST", path=path, body=body)


def build_crawl(
    urls: str | Sequence[str] | None,
    context: Any = None,
    schema: Any = None,
    advanced_options: AdvancedOptionsInput = None,
    *,
    item_index: int = 0,
) -> HttpRequestDescriptor:
    """Build a ``POST /crawl`` request for 1-199 URLs.

    Args:
        urls: Comma-separated URLs (or a list of them)
        context: Object guiding AI processing, as a mapping or JSON text
        schema: JSON schema of the data to extract, as a mapping or JSON text
        advanced_options: Optional crawl options
        item_index: Index of the input item, attached to errors

    Raises:
        ValidationError: If any URL or option constraint is violated
    """
    return _build_crawl_request(
        CRAWL_PATH,
        urls,
        context,
        schema,
        advanced_options,
        batch=False,
        item_index=item_index,
    )


def build_crawl_batch(
    urls: str | Sequence[str] | None,
    context: Any = None,
    schema: Any = None,
    advanced_options: AdvancedOptionsInput = None,
    *,
    item_index: int = 0,
) -> HttpRequestDescriptor:
    """Build a ``POST /crawl-batch`` request for 200 or more URLs."""
    return _build_crawl_request(
        CRAWL_BATCH_PATH,
        urls,
        context,
        schema,
        advanced_options,
        batch=True,
        item_index=item_index,
    )


def build_smart_search(
    query: str | None,
    context: Any = None,
    advanced_options: AdvancedOptionsInput = None,
    *,
    item_index: int = 0,
) -> HttpRequestDescriptor:
    """Build a ``POST /smart-search`` request.

    Raises:
        ValidationError: If the query is blank or an option is out of range
    """
    query = _optional_text(query, "Search query", item_index)
    if not query:
        raise ValidationError("Search query is required", item_index)

    request = SearchRequest(
        query=query,
        context=parse_json_object(context, "Context", item_index),
        advanced_options=parse_advanced_options(advanced_options, item_index),
    )
    body: dict[str, Any] = {"query": request.query, "context": request.context}
    body.update(
        map_advanced_options(
            request.advanced_options, search=True, item_index=item_index
        )
    )
    return HttpRequestDescriptor(method="POST", path=SMART_SEARCH_PATH, body=body)


def build_status_query(
    job_type: str | JobType | None,
    job_id: str | None,
    site_id: str | None = None,
    *,
    item_index: int = 0,
) -> HttpRequestDescriptor:
    """Build a ``GET`` request for the status of a crawl or search job.

    Any job type other than ``smart-search`` is treated as a crawl job.
    The site ID only applies to crawl jobs.
    """
    job_id = _optional_text(job_id, "Job ID", item_index)
    if not job_id:
        raise ValidationError("Job ID is required", item_index)
    site_id = _optional_text(site_id, "Site ID", item_index)

    query = StatusQuery(
        job_type=(
            JobType.SMART_SEARCH
            if job_type == JobType.SMART_SEARCH.value
            else JobType.CRAWL
        ),
        job_id=job_id,
        site_id=site_id or None,
    )

    if query.job_type is JobType.SMART_SEARCH:
        path = f"{SMART_SEARCH_PATH}/{query.job_id}"
    else:
        path = f"{CRAWL_PATH}/{query.job_id}"
        if query.site_id:
            path += f"/{query.site_id}"

    return HttpRequestDescriptor(method="GET", path=path)
