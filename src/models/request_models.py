"""Request-scoped models for Eddie Surf node operations.

Every model here is built fresh per input item and never mutated afterwards.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Operation(str, Enum):
    """User-selectable node operations."""

    CRAWL = "crawl"
    CRAWL_BATCH = "crawlBatch"
    SMART_SEARCH = "smartSearch"
    GET_STATUS = "getStatus"


class JobType(str, Enum):
    """Kinds of server-side jobs whose status can be queried."""

    CRAWL = "crawl"
    SMART_SEARCH = "smart-search"


class AdvancedOptions(BaseModel):
    """Optional secondary parameters modifying crawl and search requests.

    ``None`` means "not provided". Any other value, including ``0`` and
    ``False``, is an explicit choice and is validated and transmitted.
    Accepts both the node's camelCase names and snake_case names.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    max_depth: int | None = Field(default=None, alias="maxDepth")
    max_pages: int | None = Field(default=None, alias="maxPages")
    max_results: int | None = Field(default=None, alias="maxResults")
    website_only: bool | None = Field(default=None, alias="websiteOnly")
    skip_duplicate_domains: bool | None = Field(
        default=None, alias="skipDuplicateDomains"
    )
    timeout_per_page: int | None = Field(default=None, alias="timeoutPerPage")
    callback_url: str | None = Field(default=None, alias="callbackUrl")
    callback_mode: Literal["once", "multi"] | None = Field(
        default=None, alias="callbackMode"
    )
    rules: str | list[str] | None = None
    include_technical: bool | None = Field(default=None, alias="includeTechnical")
    mock: bool | None = None

    @field_validator("callback_url", "callback_mode", mode="before")
    @classmethod
    def empty_string_is_absent(cls, v: Any) -> Any:
        return None if v == "" else v

    @field_validator(
        "max_depth", "max_pages", "max_results", "timeout_per_page", mode="before"
    )
    @classmethod
    def reject_bool_numbers(cls, v: Any) -> Any:
        if isinstance(v, bool):
            raise ValueError("must be a number, not a boolean")
        return v


class CrawlRequest(BaseModel):
    """Validated input of a crawl or crawl-batch call."""

    model_config = ConfigDict(frozen=True)

    urls: list[str] = Field(..., min_length=1)
    context: dict[str, Any] = Field(default_factory=dict)
    json_schema: dict[str, Any] = Field(default_factory=dict)
    advanced_options: AdvancedOptions = Field(default_factory=AdvancedOptions)


class SearchRequest(BaseModel):
    """Validated input of a smart search call."""

    model_config = ConfigDict(frozen=True)

    query: str = Field(..., min_length=1)
    context: dict[str, Any] = Field(default_factory=dict)
    advanced_options: AdvancedOptions = Field(default_factory=AdvancedOptions)


class StatusQuery(BaseModel):
    """Validated input of a job status lookup."""

    model_config = ConfigDict(frozen=True)

    job_type: JobType = JobType.CRAWL
    job_id: str = Field(..., min_length=1)
    site_id: str | None = None


class HttpRequestDescriptor(BaseModel):
    """Method, path and JSON body of a request ready to be sent.

    The path is relative to the credential's base URL.
    """

    model_config = ConfigDict(frozen=True)

    method: Literal["GET", "POST"]
    path: str
    body: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping of the descriptor, without an absent body."""
        data: dict[str, Any] = {"method": self.method, "path": self.path}
        if self.body is not None:
            data["body"] = self.body
        return data


@dataclass(frozen=True)
class ItemResult:
    """Outcome of one input item: the API response or a captured error."""

    json: dict[str, Any]
    paired_item: int
    error: str | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None
