"""Exceptions raised while turning node parameters into Eddie Surf requests.

Transport failures are not wrapped: the httpx exception family
(``httpx.HTTPStatusError``, ``httpx.RequestError``) reaches the caller as-is.
"""


class NodeOperationError(Exception):
    """Base exception for a failed node item.

    Attributes:
        message: Human-readable description of the failure
        item_index: Index of the input item that failed
    """

    def __init__(self, message: str, item_index: int = 0):
        super().__init__(message)
        self.message = message
        self.item_index = item_index


class ValidationError(NodeOperationError):
    """Raised when user parameters violate a constraint. Never retried."""

    pass


class UnknownOperationError(NodeOperationError):
    """Raised when the selected operation has no request builder."""

    def __init__(self, operation: str, item_index: int = 0):
        super().__init__(f"Unknown operation: {operation}", item_index)
        self.operation = operation
