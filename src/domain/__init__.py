"""
Domain layer - Resource client core with zero HTTP library imports.

This package contains the generic authenticated resource client, its
async result channel, payload validation and the subtasks specialization.
It defines its own port interfaces for the transport and session, so
adapters can be swapped without touching the core.
"""

from .correlation import ensure_request_id, new_request_id
from .exceptions import (
    ApiError,
    Conflict,
    LocalValidationError,
    NotFound,
    ResourceError,
    TransportError,
)
from .ports import AuthSession, Transport
from .resource import ResourceClient, ResourceConfig
from .result import AsyncResult, OperationResult, Origin
from .subtasks import SubtasksService
from .validation import FieldKind, FieldRule, validate_payload

__all__ = [
    "ApiError",
    "AsyncResult",
    "AuthSession",
    "Conflict",
    "FieldKind",
    "FieldRule",
    "LocalValidationError",
    "NotFound",
    "OperationResult",
    "Origin",
    "ResourceClient",
    "ResourceConfig",
    "ResourceError",
    "SubtasksService",
    "Transport",
    "TransportError",
    "ensure_request_id",
    "new_request_id",
    "validate_payload",
]
