"""Pytest configuration and shared fixtures for gdoptional tests."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
from fakes import ManualClock
from gdoptional import _config
from gdoptional._logging import add_log_hook, clear_log_hooks, configure_logging

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def clock() -> ManualClock:
    """A fresh manual clock for TimedVar tests."""
    return ManualClock()


@pytest.fixture
def log_events() -> Generator[list[dict[str, Any]]]:
    """Configure logging and collect every emitted event dict, in order."""
    events: list[dict[str, Any]] = []
    clear_log_hooks()
    configure_logging(level='DEBUG', json_output=True)
    add_log_hook(events.append)
    yield events
    clear_log_hooks()


@pytest.fixture
def reset_config() -> Generator[None]:
    """Undo any init() performed by a test."""
    yield
    _config._config = None


@pytest.fixture
def sample_ok():
    """Sample Ok value for testing."""
    from gdoptional import Ok

    return Ok(42)


@pytest.fixture
def sample_err():
    """Sample Err value for testing."""
    from gdoptional import Err

    return Err('test error')


@pytest.fixture
def sample_some():
    """Sample Some value for testing."""
    from gdoptional import Some

    return Some('hello')
