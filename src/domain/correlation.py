"""
Request correlation ids.

Every outbound request carries an id so server-side logs and idempotency
checks can tie retries of the same call together. Ids are never stored.
"""

import uuid


def new_request_id() -> str:
    """Generate a fresh opaque request id."""
    return uuid.uuid4().hex


def ensure_request_id(request_id: str | None = None) -> str:
    """
    Return the caller's request id, or a new one when none was supplied.

    Args:
        request_id: Caller-supplied id (empty strings count as absent)

    Returns:
        Request id to attach to the outgoing request
    """
    if isinstance(request_id, str) and request_id.strip():
        return request_id
    return new_request_id()
