"""
Async result channel - Eventual outcome of a resource operation.

Every operation returns an AsyncResult immediately. The channel wraps an
asyncio.Future that settles exactly once with an OperationResult:

- success: (payload, 2xx status)
- failure: (error payload with an "errors" list, status)

Status 0 marks a failure that happened before any server response
(local validation, or transport failure).

Callbacks registered with done()/fail()/always() receive (payload, status).
They run on the event loop after settlement, including when registered
after the outcome is already known. Awaiting the channel yields the
OperationResult and never raises for failed operations.
"""

import asyncio
import logging
from collections.abc import Callable, Coroutine, Generator
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .exceptions import (
    ApiError,
    Conflict,
    LocalValidationError,
    NotFound,
    ResourceError,
    TransportError,
)

logger = logging.getLogger(__name__)

Callback = Callable[[Any, int], Any]

NOT_FOUND_STATUSES = frozenset({404, 410})
CONFLICT_STATUSES = frozenset({409, 412})

# Only pins scheduled request tasks until done (the loop keeps weak references);
# no request state lives here
_pending: set["asyncio.Task[OperationResult]"] = set()


class Origin(str, Enum):
    """Where an outcome was produced."""

    SERVER = "server"
    TRANSPORT = "transport"
    LOCAL = "local"


@dataclass(frozen=True)
class OperationResult:
    """Settled outcome of one operation."""

    payload: Any
    status: int
    ok: bool
    origin: Origin = Origin.SERVER

    @property
    def error(self) -> ResourceError | None:
        """
        Classify a failure into the error taxonomy.

        Returns:
            None for successes, otherwise the matching ResourceError
        """
        if self.ok:
            return None
        if self.origin is Origin.LOCAL:
            errors = self.payload.get("errors") if isinstance(self.payload, dict) else None
            return LocalValidationError(str(errors[0]) if errors else "validation failed")
        if self.origin is Origin.TRANSPORT:
            return TransportError(self.payload, self.status)
        if self.status in NOT_FOUND_STATUSES:
            return NotFound(self.payload, self.status)
        if self.status in CONFLICT_STATUSES:
            return Conflict(self.payload, self.status)
        return ApiError(self.payload, self.status)

    def raise_for_error(self) -> "OperationResult":
        """Raise the classified error for failures, return self otherwise."""
        error = self.error
        if error is not None:
            raise error
        return self


class AsyncResult:
    """
    Deferred outcome of a resource operation.

    Must be created and observed from inside a running event loop.
    """

    def __init__(self, future: "asyncio.Future[OperationResult]") -> None:
        self._future = future

    @classmethod
    def settled(cls, outcome: OperationResult) -> "AsyncResult":
        """Build a channel that already holds outcome."""
        future: asyncio.Future[OperationResult] = asyncio.get_running_loop().create_future()
        future.set_result(outcome)
        return cls(future)

    @classmethod
    def resolved(cls, payload: Any, status: int = 200) -> "AsyncResult":
        """Build an already-successful channel."""
        return cls.settled(OperationResult(payload, status, ok=True))

    @classmethod
    def rejected(
        cls, payload: Any, status: int = 0, *, origin: Origin = Origin.SERVER
    ) -> "AsyncResult":
        """Build an already-failed channel."""
        return cls.settled(OperationResult(payload, status, ok=False, origin=origin))

    @classmethod
    def from_coroutine(
        cls, coro: Coroutine[Any, Any, OperationResult]
    ) -> "AsyncResult":
        """
        Schedule coro on the running loop and return its channel.

        An exception escaping coro is logged and settles the channel as a
        transport failure with status 0.
        """
        task = asyncio.get_running_loop().create_task(_settle(coro))
        _pending.add(task)
        task.add_done_callback(_pending.discard)
        return cls(task)

    def is_settled(self) -> bool:
        return self._future.done()

    def done(self, callback: Callback) -> "AsyncResult":
        """Register callback for success."""
        return self._register(callback, True)

    def fail(self, callback: Callback) -> "AsyncResult":
        """Register callback for failure."""
        return self._register(callback, False)

    def always(self, callback: Callback) -> "AsyncResult":
        """Register callback for either outcome."""
        return self._register(callback, None)

    def _register(self, callback: Callback, wants: bool | None) -> "AsyncResult":
        def dispatch(future: "asyncio.Future[OperationResult]") -> None:
            if future.cancelled():
                return
            outcome = future.result()
            if wants is None or outcome.ok is wants:
                callback(outcome.payload, outcome.status)

        self._future.add_done_callback(dispatch)
        return self

    def __await__(self) -> Generator[Any, None, OperationResult]:
        # shield: cancelling a waiter must not cancel the request itself
        return asyncio.shield(self._future).__await__()


async def _settle(coro: Coroutine[Any, Any, OperationResult]) -> OperationResult:
    try:
        return await coro
    except Exception as exc:
        logger.exception("Request failed before a response was produced")
        return OperationResult(
            {"errors": [str(exc) or exc.__class__.__name__]},
            0,
            ok=False,
            origin=Origin.TRANSPORT,
        )
