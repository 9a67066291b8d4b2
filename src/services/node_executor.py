"""Run Eddie.surf node operations over a list of input items.

Each item is independent: its parameters are resolved against the node
description, turned into a request by the matching builder and sent through
an ``HttpClient``. With continue-on-fail enabled, a failing item records
``{"error": message}`` in its result slot and the loop moves on.
"""

from collections.abc import Callable
from typing import Any

import logfire

from src.models.node_description import EDDIE_SURF_NODE, NodeDescription
from src.models.request_models import HttpRequestDescriptor, ItemResult, Operation
from src.services.client_protocol import HttpClient, get_eddie_client
from src.services.errors import UnknownOperationError
from src.services.request_builder import (
    build_crawl,
    build_crawl_batch,
    build_smart_search,
    build_status_query,
)

RequestFactory = Callable[[Callable[[str], Any], int], HttpRequestDescriptor]


def _crawl(param: Callable[[str], Any], item_index: int) -> HttpRequestDescriptor:
    return build_crawl(
        param("urls"),
        param("context"),
        param("jsonSchema"),
        param("advancedOptions"),
        item_index=item_index,
    )


def _crawl_batch(param: Callable[[str], Any], item_index: int) -> HttpRequestDescriptor:
    return build_crawl_batch(
        param("urls"),
        param("context"),
        param("jsonSchema"),
        param("advancedOptions"),
        item_index=item_index,
    )


def _smart_search(param: Callable[[str], Any], item_index: int) -> HttpRequestDescriptor:
    return build_smart_search(
        param("query"),
        param("context"),
        param("advancedOptions"),
        item_index=item_index,
    )


def _get_status(param: Callable[[str], Any], item_index: int) -> HttpRequestDescriptor:
    return build_status_query(
        param("jobType"),
        param("jobId"),
        param("siteId"),
        item_index=item_index,
    )


REQUEST_FACTORIES: dict[str, RequestFactory] = {
    Operation.CRAWL.value: _crawl,
    Operation.CRAWL_BATCH.value: _crawl_batch,
    Operation.SMART_SEARCH.value: _smart_search,
    Operation.GET_STATUS.value: _get_status,
}


class EddieSurfNode:
    """Execute one node operation for every input item.

    The node uses dependency injection for the HTTP client, making it easy
    to test with ``MockHttpClient``.

    Example:
        >>> node = EddieSurfNode(client=EddieClient(credentials))
        >>> results = await node.execute([
        ...     {"operation": "crawl", "urls": "https://example.com"},
        ... ])
        >>> results[0].json
        {'job_id': '...'}
    """

    def __init__(
        self,
        client: HttpClient | None = None,
        continue_on_fail: bool = False,
        description: NodeDescription = EDDIE_SURF_NODE,
    ):
        """Initialize the node.

        Args:
            client: HTTP client used to send requests.
                    Uses get_eddie_client() if not provided.
            continue_on_fail: Capture per-item errors instead of aborting
            description: Parameter schema used to resolve defaults
        """
        self._client = client
        self.continue_on_fail = continue_on_fail
        self.description = description

    def _get_client(self) -> HttpClient:
        """Get or create the HTTP client instance."""
        if self._client is None:
            self._client = get_eddie_client()
        return self._client

    def build_request(
        self,
        operation: str,
        item_params: dict[str, Any],
        item_index: int = 0,
    ) -> HttpRequestDescriptor:
        """Build the request for one item without sending it.

        Raises:
            UnknownOperationError: If no builder handles ``operation``
            ValidationError: If the item's parameters violate a constraint
        """
        factory = REQUEST_FACTORIES.get(operation)
        if factory is None:
            raise UnknownOperationError(operation, item_index)

        def param(name: str) -> Any:
            return self.description.resolve_parameter(name, item_params)

        return factory(param, item_index)

    async def execute_item(
        self,
        operation: str,
        item_params: dict[str, Any],
        item_index: int,
    ) -> ItemResult:
        """Build and send the request for one item."""
        request = self.build_request(operation, item_params, item_index)
        response = await self._get_client().send(request)
        if not isinstance(response, dict):
            response = {"data": response}
        return ItemResult(json=response, paired_item=item_index)

    async def execute(self, items: list[dict[str, Any]]) -> list[ItemResult]:
        """Run the node operation over all items, in order.

        The operation is read from the first item, like the host platform
        does; later items only supply operation parameters.

        Args:
            items: Parameter mapping per input item

        Returns:
            One result per item, paired by index

        Raises:
            NodeOperationError: First item failure, when continue_on_fail is off
            httpx.HTTPError: First transport failure, when continue_on_fail is off
        """
        if not items:
            return []

        operation = str(self.description.resolve_parameter("operation", items[0]))
        results: list[ItemResult] = []

        for item_index, item_params in enumerate(items):
            try:
                results.append(
                    await self.execute_item(operation, item_params, item_index)
                )
            except Exception as e:
                logfire.error(
                    "Eddie Surf item failed",
                    operation=operation,
                    item_index=item_index,
                    error=str(e),
                    error_type=type(e).__name__,
                    continue_on_fail=self.continue_on_fail,
                )
                if not self.continue_on_fail:
                    raise
                results.append(
                    ItemResult(
                        json={"error": str(e)},
                        paired_item=item_index,
                        error=str(e),
                    )
                )

        logfire.info(
            "Eddie Surf node executed",
            operation=operation,
            item_count=len(items),
            error_count=sum(1 for result in results if result.is_error),
        )
        return results
