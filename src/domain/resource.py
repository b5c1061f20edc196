"""
Resource client - Generic CRUD over one resource base path.

A ResourceClient is a value: immutable configuration plus a transport.
Concrete resources (subtasks, ...) wrap one and delegate to it rather
than subclassing it.

Mutations are keyed by revision, the server's optimistic-concurrency
token. The client forwards it and surfaces whatever the server answers;
a stale revision comes back as a rejected result (Conflict class) and is
never retried here.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .correlation import ensure_request_id
from .exceptions import LocalValidationError
from .ports import Transport
from .result import AsyncResult, Origin

ResourceId = int | str


def _default_logger(resource_type: str) -> logging.Logger:
    return logging.getLogger(f"{__name__}.{resource_type}")


@dataclass(frozen=True)
class ResourceConfig:
    """
    Static configuration for one resource type.

    Attributes:
        base_path: Collection path, e.g. "/subtasks"
        resource_type: Type tag, e.g. "subtask"
        logger: Logger for this resource (defaults to a per-type child logger)
    """

    base_path: str
    resource_type: str
    logger: logging.Logger | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.logger is None:
            object.__setattr__(self, "logger", _default_logger(self.resource_type))

    def item_path(self, resource_id: ResourceId) -> str:
        return f"{self.base_path.rstrip('/')}/{resource_id}"


@dataclass(frozen=True)
class ResourceClient:
    """
    Uniform CRUD surface reusable by any resource type.

    Holds no credentials; the transport attaches authentication.
    Every method returns immediately with an AsyncResult.
    """

    config: ResourceConfig
    transport: Transport

    @property
    def logger(self) -> logging.Logger:
        return self.config.logger  # type: ignore[return-value]

    def list(
        self, query: Mapping[str, Any] | None = None, request_id: str | None = None
    ) -> AsyncResult:
        """
        Read the collection, filtered by query.

        Filter values are not validated. An empty collection is a success.

        Args:
            query: Query parameters sent as-is
            request_id: Optional caller-supplied correlation id
        """
        request_id = ensure_request_id(request_id)
        path = self.config.base_path
        self._trace("GET", path, request_id)
        return self.transport.get(path, dict(query or {}), request_id)

    def get_by_id(self, resource_id: ResourceId, request_id: str | None = None) -> AsyncResult:
        """
        Fetch one resource by identifier.

        A missing resource rejects with the server's status (NotFound class).
        """
        if resource_id is None:
            return self._reject_locally(f"id required to get a {self.config.resource_type}")
        request_id = ensure_request_id(request_id)
        path = self.config.item_path(resource_id)
        self._trace("GET", path, request_id)
        return self.transport.get(path, None, request_id)

    def create(self, payload: Mapping[str, Any], request_id: str | None = None) -> AsyncResult:
        """
        Create a resource from the raw payload.

        No validation happens here; specializations validate before calling.
        """
        request_id = ensure_request_id(request_id)
        path = self.config.base_path
        self._trace("POST", path, request_id)
        return self.transport.post(path, dict(payload or {}), request_id)

    def update(
        self,
        resource_id: ResourceId,
        revision: int,
        payload: Mapping[str, Any],
        request_id: str | None = None,
    ) -> AsyncResult:
        """
        Partially update a resource.

        Args:
            resource_id: Identifier of the resource
            revision: Current revision as last read from the server
            payload: Fields to change
            request_id: Optional caller-supplied correlation id

        Returns:
            AsyncResult; a stale revision rejects with the server's status
        """
        if resource_id is None or revision is None:
            return self._reject_locally(
                f"id and revision required to update a {self.config.resource_type}"
            )
        request_id = ensure_request_id(request_id)
        path = self.config.item_path(resource_id)
        body = {**(payload or {}), "revision": revision}
        self._trace("PATCH", path, request_id, revision=revision)
        return self.transport.patch(path, body, request_id)

    def delete_by_id(
        self, resource_id: ResourceId, revision: int, request_id: str | None = None
    ) -> AsyncResult:
        """
        Delete a resource; revision is sent as a query parameter.

        Resolves or rejects exactly like update().
        """
        if resource_id is None or revision is None:
            return self._reject_locally(
                f"id and revision required to delete a {self.config.resource_type}"
            )
        request_id = ensure_request_id(request_id)
        path = self.config.item_path(resource_id)
        self._trace("DELETE", path, request_id, revision=revision)
        return self.transport.delete(path, {"revision": revision}, request_id)

    def reject(self, error: LocalValidationError) -> AsyncResult:
        """Turn a local validation error into an already-rejected result."""
        self.logger.error("%s rejected locally: %s", self.config.resource_type, error.message)
        return AsyncResult.rejected(error.payload, 0, origin=Origin.LOCAL)

    def _reject_locally(self, message: str) -> AsyncResult:
        return self.reject(LocalValidationError(message))

    def _trace(self, method: str, path: str, request_id: str, **extra: Any) -> None:
        if extra:
            details = " ".join(f"{key}={value}" for key, value in extra.items())
            self.logger.debug("%s %s request_id=%s %s", method, path, request_id, details)
        else:
            self.logger.debug("%s %s request_id=%s", method, path, request_id)
