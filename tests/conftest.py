"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A spy transport recording every call
"""

from unittest.mock import Mock

import pytest

from src.domain.result import AsyncResult


@pytest.fixture
def transport() -> Mock:
    """
    Spy transport answering every call with an empty 200 result.

    Tests replace side_effect on a method to script other outcomes.
    """
    spy = Mock(spec=["get", "post", "patch", "delete"])
    for method in ("get", "post", "patch", "delete"):
        getattr(spy, method).side_effect = lambda *args: AsyncResult.resolved({}, 200)
    return spy
