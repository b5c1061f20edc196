"""
Client package.

Composition root for applications: builds sessions, transports and
resource services from settings.
"""

from src.client.factory import (
    build_session,
    build_subtasks_service,
    build_transport,
    configure_logging,
)

__all__ = [
    "build_session",
    "build_subtasks_service",
    "build_transport",
    "configure_logging",
]
