"""Shared pytest configuration, fixtures and marker assignment."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import pytest

from omniconvert.converters.base import UTC

SUITE_MARKERS = (
    ("e2e_tests", pytest.mark.e2e),
    ("integration_tests", pytest.mark.integration),
    ("unit_tests", pytest.mark.unit),
)


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on the test file's directory."""
    del config
    for item in items:
        parts = set(Path(str(item.fspath)).parts)
        for directory, marker in SUITE_MARKERS:
            if directory in parts:
                item.add_marker(marker)
                break


@pytest.fixture
def frozen_clock() -> Callable[[], datetime]:
    """Clock pinned to 2024-01-02T03:04:05Z for deterministic filenames."""
    moment = datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)
    return lambda: moment
