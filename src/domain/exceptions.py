"""
Domain exceptions - Semantic error types for resource operations.

Failures reach callers as (payload, status) through the result channel.
These types classify that pair, and the validator raises
LocalValidationError internally before it is converted into a rejection.
"""

from typing import Any


class ResourceError(Exception):
    """Base class for resource operation errors."""

    def __init__(self, payload: Any, status: int) -> None:
        self.payload = payload
        self.status = status
        super().__init__(_first_message(payload) or f"request failed with status {status}")


class LocalValidationError(ResourceError):
    """Payload rejected before any network call (status 0)."""

    def __init__(self, message: str) -> None:
        super().__init__({"errors": [message]}, 0)
        self.message = message


class NotFound(ResourceError):
    """Server reports no resource for the given identifier."""

    pass


class Conflict(ResourceError):
    """Server rejected a mutation because the supplied revision is stale."""

    pass


class TransportError(ResourceError):
    """Network or auth failure before a server response was obtained."""

    pass


class ApiError(ResourceError):
    """Any other non-2xx server response."""

    pass


def _first_message(payload: Any) -> str | None:
    if isinstance(payload, dict):
        errors = payload.get("errors")
        if isinstance(errors, list) and errors:
            return str(errors[0])
    return None
