"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) the resource core requires
from infrastructure. Adapters implement these protocols.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from .result import AsyncResult


class AuthSession(Protocol):
    """Port interface for the authenticated session."""

    def auth_headers(self) -> dict[str, str]:
        """
        Headers that authenticate a request.

        Returns:
            Mapping of header name to value, attached to every request
        """
        ...


class Transport(Protocol):
    """
    Port interface for the HTTP transport.

    Every method returns immediately with an AsyncResult. The transport
    attaches authentication and the correlation id, and settles the
    result with (payload, status) on success or (error_payload, status)
    on failure. It never raises into the caller.
    """

    def get(
        self, path: str, query: Mapping[str, Any] | None, request_id: str
    ) -> "AsyncResult":
        """
        Read from path.

        Args:
            path: Resource path relative to the API base URL
            query: Query parameters
            request_id: Correlation id for this request
        """
        ...

    def post(self, path: str, body: Mapping[str, Any], request_id: str) -> "AsyncResult":
        """Create under path with a JSON body."""
        ...

    def patch(self, path: str, body: Mapping[str, Any], request_id: str) -> "AsyncResult":
        """Partially update the resource at path with a JSON body."""
        ...

    def delete(
        self, path: str, query: Mapping[str, Any] | None, request_id: str
    ) -> "AsyncResult":
        """Delete the resource at path."""
        ...
