"""
Pre-flight payload validation.

Rules are checked in declaration order and the first unmet rule fails the
payload with a single message. Nothing here touches the network.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .exceptions import LocalValidationError


class FieldKind(Enum):
    """Primitive kind a payload field must have."""

    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"

    def accepts(self, value: Any) -> bool:
        # bool is an int subclass, so it must not count as a number
        if self is FieldKind.BOOLEAN:
            return isinstance(value, bool)
        if isinstance(value, bool):
            return False
        if self is FieldKind.NUMBER:
            return isinstance(value, int | float)
        return isinstance(value, str)


@dataclass(frozen=True)
class FieldRule:
    """One field constraint on a payload."""

    name: str
    kind: FieldKind
    required: bool = True
    max_length: int | None = None


def validate_payload(
    payload: Mapping[str, Any] | None,
    rules: Sequence[FieldRule],
    *,
    context: str,
) -> None:
    """
    Check payload against rules, failing on the first unmet one.

    Args:
        payload: Request body about to be sent
        rules: Field rules, in the order they are checked
        context: Operation name used in messages (e.g. "subtask creation")

    Raises:
        LocalValidationError: Payload is empty or a rule is not met
    """
    required = f" required for {context}"
    if not isinstance(payload, Mapping) or not payload:
        raise LocalValidationError("data" + required)

    for rule in rules:
        if rule.name not in payload or payload[rule.name] is None:
            if rule.required:
                raise LocalValidationError(f"data.{rule.name}" + required)
            continue

        value = payload[rule.name]
        if not rule.kind.accepts(value):
            raise LocalValidationError(f"data.{rule.name}" + required)
        if (
            rule.max_length is not None
            and isinstance(value, str)
            and len(value) > rule.max_length
        ):
            raise LocalValidationError(
                f"data.{rule.name} exceeds {rule.max_length} characters for {context}"
            )
