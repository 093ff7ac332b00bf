"""Pytest configuration for mocked tests."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import pytest

from mocked.infra.io.log_output.console import set_verbose
from mocked.infra.io.log_output.debug_log import cleanup_debug_logging

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def pytest_configure(config: pytest.Config) -> None:
    """Configure test environment before collection.

    Points the user config directory at /tmp so a developer's own
    ~/.config/mocked/.env never changes test outcomes.
    """
    os.environ["MOCKED_CONFIG_DIR"] = "/tmp/mocked-test-config"
    for variable in (
        "MOCKED_DIRECTIVE",
        "MOCKED_REFERENCE_MARKER",
        "MOCKED_CONCURRENCY_MARKER",
        "MOCKED_DISABLE_DEBUG_LOG",
    ):
        os.environ.pop(variable, None)


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Default unmarked tests to unit category."""
    for item in items:
        if any(marker in item.keywords for marker in ("unit", "integration")):
            continue
        item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def _reset_console_state() -> Any:  # noqa: ANN401
    yield
    set_verbose(False)
    cleanup_debug_logging()
    logging.getLogger("mocked").setLevel(logging.NOTSET)


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR
