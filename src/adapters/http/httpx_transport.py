"""
httpx transport adapter - Implements Transport protocol.

This module provides the HTTP implementation of the core's transport
port on top of httpx.AsyncClient.

Outcome mapping:
----------------
1. **2xx**: resolved with the decoded JSON body (None for empty bodies).

2. **non-2xx**: rejected with the server's status. A JSON object body is
   passed through verbatim; anything else is wrapped as {"errors": [...]}.

3. **httpx.HTTPError** (connect, timeout, protocol): rejected with
   status 0 and transport origin. No response was obtained.

Each request is sent exactly once. Retries, if wanted, belong to the
httpx transport configured on the client.
"""

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from src.domain.ports import AuthSession
from src.domain.result import AsyncResult, OperationResult, Origin

logger = logging.getLogger(__name__)


class HttpxTransport:
    """
    Implements Transport protocol via httpx.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Authentication headers come from the injected session on every call.
    """

    def __init__(
        self,
        base_url: str,
        session: AuthSession,
        *,
        client: httpx.AsyncClient | None = None,
        timeout_seconds: float = 20.0,
        request_id_header: str = "X-Request-ID",
    ) -> None:
        """
        Initialize transport.

        Args:
            base_url: API root, e.g. "https://a.wunderlist.com/api/v1"
            session: Source of authentication headers
            client: Preconfigured httpx.AsyncClient (owned by the caller)
            timeout_seconds: Request timeout when the transport builds its own client
            request_id_header: Header carrying the correlation id
        """
        self._base_url = base_url.rstrip("/")
        self._session = session
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds),
            headers={"Accept": "application/json"},
        )
        self._request_id_header = request_id_header

    def get(
        self, path: str, query: Mapping[str, Any] | None, request_id: str
    ) -> AsyncResult:
        return AsyncResult.from_coroutine(self._send("GET", path, request_id, params=query))

    def post(self, path: str, body: Mapping[str, Any], request_id: str) -> AsyncResult:
        return AsyncResult.from_coroutine(self._send("POST", path, request_id, body=body))

    def patch(self, path: str, body: Mapping[str, Any], request_id: str) -> AsyncResult:
        return AsyncResult.from_coroutine(self._send("PATCH", path, request_id, body=body))

    def delete(
        self, path: str, query: Mapping[str, Any] | None, request_id: str
    ) -> AsyncResult:
        return AsyncResult.from_coroutine(self._send("DELETE", path, request_id, params=query))

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _send(
        self,
        method: str,
        path: str,
        request_id: str,
        *,
        params: Mapping[str, Any] | None = None,
        body: Mapping[str, Any] | None = None,
    ) -> OperationResult:
        headers = {**self._session.auth_headers(), self._request_id_header: request_id}

        try:
            response = await self._client.request(
                method,
                f"{self._base_url}{path}",
                params=dict(params) if params else None,
                json=dict(body) if body is not None else None,
                headers=headers,
            )
        except httpx.HTTPError as exc:
            logger.warning(
                "%s %s failed before a response request_id=%s: %s",
                method,
                path,
                request_id,
                exc.__class__.__name__,
            )
            return OperationResult(
                {"errors": [str(exc) or exc.__class__.__name__]},
                0,
                ok=False,
                origin=Origin.TRANSPORT,
            )

        payload = _decode(response)
        if response.is_success:
            logger.debug("%s %s -> %d request_id=%s", method, path, response.status_code, request_id)
            return OperationResult(payload, response.status_code, ok=True)

        logger.info("%s %s -> %d request_id=%s", method, path, response.status_code, request_id)
        return OperationResult(_error_payload(payload, response), response.status_code, ok=False)


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _error_payload(payload: Any, response: httpx.Response) -> Any:
    if isinstance(payload, dict):
        return payload
    message = payload if isinstance(payload, str) and payload.strip() else None
    return {"errors": [message or response.reason_phrase or f"HTTP {response.status_code}"]}
