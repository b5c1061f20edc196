"""
Client factory - Composition root.

This module wires settings, the auth session and the transport into
resource services. Applications call these instead of constructing
adapters by hand.

Example:
    configure_logging()
    async with build_transport() as transport:
        subtasks = build_subtasks_service(transport)
        result = await subtasks.for_list(666)
"""

import logging

import httpx

from src.adapters.auth.static_token import StaticTokenSession
from src.adapters.http.httpx_transport import HttpxTransport
from src.config.settings import Settings, get_settings
from src.domain.ports import Transport
from src.domain.subtasks import SubtasksService


def configure_logging(level: str | int | None = None) -> None:
    """
    Configure root logging for applications using the client.

    Args:
        level: Log level; defaults to the LOG_LEVEL setting
    """
    logging.basicConfig(
        level=level if level is not None else get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_session(settings: Settings | None = None) -> StaticTokenSession:
    """Create the auth session from settings."""
    settings = settings or get_settings()
    return StaticTokenSession(settings.client_id, settings.access_token)


def build_transport(
    settings: Settings | None = None,
    *,
    client: httpx.AsyncClient | None = None,
) -> HttpxTransport:
    """
    Create the HTTP transport with an injected session.

    Args:
        settings: Client settings (cached settings when omitted)
        client: Optional preconfigured httpx.AsyncClient, e.g. for tests
    """
    settings = settings or get_settings()
    return HttpxTransport(
        settings.api_url,
        build_session(settings),
        client=client,
        timeout_seconds=settings.http_timeout_seconds,
        request_id_header=settings.request_id_header,
    )


def build_subtasks_service(
    transport: Transport, *, logger: logging.Logger | None = None
) -> SubtasksService:
    """Create the subtasks service over transport."""
    return SubtasksService.over(transport, logger)
