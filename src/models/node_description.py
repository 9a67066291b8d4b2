"""Declarative parameter schema of the Eddie.surf node.

This is configuration data: it names every parameter the node accepts, its
type, its default and the operations it applies to. The executor resolves
missing item parameters against these defaults, the same way the host
platform does.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from src.models.request_models import JobType, Operation

PropertyType = Literal["options", "string", "json", "collection", "number", "boolean"]


class NodeChoice(BaseModel):
    """One selectable value of an ``options`` property."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: str
    description: str | None = None
    action: str | None = None


class NodeProperty(BaseModel):
    """A single node or credential parameter."""

    model_config = ConfigDict(frozen=True)

    display_name: str
    name: str
    type: PropertyType
    default: Any = None
    required: bool = False
    secret: bool = False
    description: str | None = None
    placeholder: str | None = None
    # Operations the property is shown for (None: always shown)
    show_for_operations: tuple[str, ...] | None = None
    choices: list[NodeChoice] = Field(default_factory=list)
    members: list["NodeProperty"] = Field(default_factory=list)

    def get_member(self, name: str) -> "NodeProperty":
        """Look up a member of a ``collection`` property by name."""
        for member in self.members:
            if member.name == name:
                return member
        raise KeyError(f"{self.name} has no member named {name!r}")


class NodeDescription(BaseModel):
    """Top-level description of a node type."""

    model_config = ConfigDict(frozen=True)

    display_name: str
    name: str
    group: list[str]
    version: int
    description: str
    credentials: list[str]
    properties: list[NodeProperty]

    def get_property(self, name: str) -> NodeProperty:
        """Look up a top-level property by name.

        Raises:
            KeyError: If no property has that name
        """
        for prop in self.properties:
            if prop.name == name:
                return prop
        raise KeyError(f"Unknown node parameter: {name}")

    def operations(self) -> list[str]:
        """Values of the ``operation`` property, in declaration order."""
        return [choice.value for choice in self.get_property("operation").choices]

    def resolve_parameter(self, name: str, item_params: dict[str, Any]) -> Any:
        """Return the item's value for ``name`` or the declared default."""
        prop = self.get_property(name)
        value = item_params.get(name)
        if value is None:
            return prop.default
        return value


_CRAWL_OPS = (Operation.CRAWL.value, Operation.CRAWL_BATCH.value)
_BODY_OPS = _CRAWL_OPS + (Operation.SMART_SEARCH.value,)
_SEARCH_OPS = (Operation.SMART_SEARCH.value,)
_STATUS_OPS = (Operation.GET_STATUS.value,)

ADVANCED_OPTION_MEMBERS = [
    NodeProperty(
        display_name="Max Depth",
        name="maxDepth",
        type="number",
        default=3,
        description="Maximum link depth to follow (1-10)",
    ),
    NodeProperty(
        display_name="Max Pages",
        name="maxPages",
        type="number",
        default=15,
        description="Maximum number of pages to crawl",
    ),
    NodeProperty(
        display_name="Max Results",
        name="maxResults",
        type="number",
        default=10,
        show_for_operations=_SEARCH_OPS,
        description="Maximum number of search results to return (1-5000)",
    ),
    NodeProperty(
        display_name="Website Only",
        name="websiteOnly",
        type="boolean",
        default=False,
        show_for_operations=_SEARCH_OPS,
        description="Whether to search only within the specified websites",
    ),
    NodeProperty(
        display_name="Skip Duplicate Domains",
        name="skipDuplicateDomains",
        type="boolean",
        default=False,
        show_for_operations=_SEARCH_OPS,
        description="Whether to skip results from duplicate domains",
    ),
    NodeProperty(
        display_name="Timeout Per Page",
        name="timeoutPerPage",
        type="number",
        default=30,
        description="Timeout per page in seconds (1-180)",
    ),
    NodeProperty(
        display_name="Callback URL",
        name="callbackUrl",
        type="string",
        default="",
        description="Optional webhook URL for job completion notifications",
    ),
    NodeProperty(
        display_name="Callback Mode",
        name="callbackMode",
        type="options",
        default="once",
        choices=[
            NodeChoice(name="Once", value="once"),
            NodeChoice(name="Multi", value="multi"),
        ],
        description="Callback mode for notifications",
    ),
    NodeProperty(
        display_name="Rules",
        name="rules",
        type="string",
        default="",
        placeholder="Extract pricing, Extract contact info",
        description="Comma-separated list of custom processing instructions",
    ),
    NodeProperty(
        display_name="Include Technical Data",
        name="includeTechnical",
        type="boolean",
        default=False,
        description=(
            "Whether to include technical data collection "
            "(costs 1 additional credit per page)"
        ),
    ),
    NodeProperty(
        display_name="Mock Mode",
        name="mock",
        type="boolean",
        default=False,
        description="Whether to enable test mode without using credits",
    ),
]

EDDIE_SURF_NODE = NodeDescription(
    display_name="Eddie.surf",
    name="eddieSurf",
    group=["transform"],
    version=1,
    description="Web crawling and smart search with Eddie.surf",
    credentials=["eddieApi"],
    properties=[
        NodeProperty(
            display_name="Operation",
            name="operation",
            type="options",
            default=Operation.CRAWL.value,
            choices=[
                NodeChoice(
                    name="Crawl",
                    value=Operation.CRAWL.value,
                    description="Crawl 1-199 URLs and extract data",
                    action="Crawl urls",
                ),
                NodeChoice(
                    name="Crawl Batch",
                    value=Operation.CRAWL_BATCH.value,
                    description="Batch crawl 200+ URLs with optimized processing",
                    action="Batch crawl urls",
                ),
                NodeChoice(
                    name="Smart Search",
                    value=Operation.SMART_SEARCH.value,
                    description="AI-powered search across websites",
                    action="Smart search websites",
                ),
                NodeChoice(
                    name="Get Status",
                    value=Operation.GET_STATUS.value,
                    description="Check the status of a crawl or search job",
                    action="Get job status",
                ),
            ],
        ),
        NodeProperty(
            display_name="URLs",
            name="urls",
            type="string",
            default="",
            required=True,
            show_for_operations=_CRAWL_OPS,
            placeholder="https://example.com, https://example2.com",
            description="Comma-separated list of URLs to crawl",
        ),
        NodeProperty(
            display_name="Context",
            name="context",
            type="json",
            default="{}",
            required=True,
            show_for_operations=_BODY_OPS,
            description="Context object to guide AI processing and data extraction",
        ),
        NodeProperty(
            display_name="JSON Schema",
            name="jsonSchema",
            type="json",
            default="{}",
            required=True,
            show_for_operations=_CRAWL_OPS,
            description="JSON schema defining the structure of data to extract",
        ),
        NodeProperty(
            display_name="Search Query",
            name="query",
            type="string",
            default="",
            required=True,
            show_for_operations=_SEARCH_OPS,
            description="The search query to find relevant content",
        ),
        NodeProperty(
            display_name="Advanced Options",
            name="advancedOptions",
            type="collection",
            default={},
            show_for_operations=_BODY_OPS,
            placeholder="Add Option",
            members=ADVANCED_OPTION_MEMBERS,
        ),
        NodeProperty(
            display_name="Job Type",
            name="jobType",
            type="options",
            default=JobType.CRAWL.value,
            required=True,
            show_for_operations=_STATUS_OPS,
            choices=[
                NodeChoice(
                    name="Crawl Job",
                    value=JobType.CRAWL.value,
                    description="Check status of a crawl or batch crawl job",
                ),
                NodeChoice(
                    name="Smart Search Job",
                    value=JobType.SMART_SEARCH.value,
                    description="Check status of a smart search job",
                ),
            ],
            description="Type of job to check status for",
        ),
        NodeProperty(
            display_name="Job ID",
            name="jobId",
            type="string",
            default="",
            required=True,
            show_for_operations=_STATUS_OPS,
            description="The job ID to check status for",
        ),
        NodeProperty(
            display_name="Site ID",
            name="siteId",
            type="string",
            default="",
            show_for_operations=_STATUS_OPS,
            description="Optional: Check status of individual site within the crawl job",
        ),
    ],
)
