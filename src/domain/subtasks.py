"""
Subtasks service - Resource client bound to /subtasks.

Adds the subtask filters (by list, by parent task, completed flag) and
validates creation payloads before anything is sent.

Example:
    subtasks = SubtasksService.over(transport)

    subtasks.for_list(666).done(on_subtasks).fail(on_error)

    result = await subtasks.create({"task_id": 8675309, "title": "Call Jenny"})
    if result.ok:
        subtask = result.payload
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .exceptions import LocalValidationError
from .ports import Transport
from .resource import ResourceClient, ResourceConfig, ResourceId
from .result import AsyncResult
from .validation import FieldKind, FieldRule, validate_payload

SUBTASKS_PATH = "/subtasks"
SUBTASK_TYPE = "subtask"

# title is limited to 255 characters server-side; not duplicated here
SUBTASK_CREATE_RULES: tuple[FieldRule, ...] = (
    FieldRule("task_id", FieldKind.NUMBER),
    FieldRule("title", FieldKind.STRING),
)


@dataclass(frozen=True)
class SubtasksService:
    """Subtask operations, delegating to a generic ResourceClient."""

    resource: ResourceClient

    @classmethod
    def over(cls, transport: Transport, logger: logging.Logger | None = None) -> "SubtasksService":
        """Build the service on top of transport."""
        config = ResourceConfig(SUBTASKS_PATH, SUBTASK_TYPE, logger)
        return cls(ResourceClient(config, transport))

    def for_list(
        self, list_id: ResourceId, completed: bool = False, request_id: str | None = None
    ) -> AsyncResult:
        """
        Subtasks of every task in a list.

        Args:
            list_id: List to fetch subtasks for
            completed: Fetch completed subtasks when True
            request_id: Optional caller-supplied correlation id
        """
        return self.resource.list(
            {"list_id": list_id, "completed_tasks": bool(completed)}, request_id
        )

    def for_parent(
        self, parent_id: ResourceId, completed: bool = False, request_id: str | None = None
    ) -> AsyncResult:
        """Subtasks of one parent task."""
        return self.resource.list(
            {"task_id": parent_id, "completed_tasks": bool(completed)}, request_id
        )

    def get_by_id(self, subtask_id: ResourceId, request_id: str | None = None) -> AsyncResult:
        return self.resource.get_by_id(subtask_id, request_id)

    def create(self, payload: Mapping[str, Any] | None, request_id: str | None = None) -> AsyncResult:
        """
        Create a subtask.

        Args:
            payload: task_id (int) and title (str, max 255 characters),
                optionally completed (bool)
            request_id: Optional caller-supplied correlation id

        Returns:
            AsyncResult; invalid payloads reject with status 0 and are never sent
        """
        try:
            self.validate_create(payload)
        except LocalValidationError as e:
            return self.resource.reject(e)
        return self.resource.create(payload, request_id)  # type: ignore[arg-type]

    def update(
        self,
        subtask_id: ResourceId,
        revision: int,
        payload: Mapping[str, Any],
        request_id: str | None = None,
    ) -> AsyncResult:
        return self.resource.update(subtask_id, revision, payload, request_id)

    def delete_by_id(
        self, subtask_id: ResourceId, revision: int, request_id: str | None = None
    ) -> AsyncResult:
        return self.resource.delete_by_id(subtask_id, revision, request_id)

    def validate_create(self, payload: Mapping[str, Any] | None) -> None:
        """
        Check a creation payload.

        Raises:
            LocalValidationError: payload is empty, or task_id/title missing
        """
        validate_payload(payload, SUBTASK_CREATE_RULES, context="subtask creation")
