"""
Shared pytest fixtures and configuration for nrs tests.

This module provides:
- Settings/environment isolation (no test touches ~/.nrs)
- A scriptable fake Locator Parser (see tests/_support/links.py)
- The three-entry scenario map used across map and container tests

Usage:
    Fixtures are auto-discovered by pytest. Use them as function arguments.
"""

from pathlib import Path
from typing import Generator

import pytest

from nrs.core.enums import ContentType, DataType
from nrs.core.settings import clear_settings_cache
from nrs.naming.locator import DecodedLocator
from nrs.naming.map import NrsMap
from tests._support.links import FakeLocatorParser


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)

        if "cli" in test_path.parts or "register" in test_path.name:
            item.add_marker(pytest.mark.integration)

        markers = {mark.name for mark in item.iter_markers()}
        if "integration" not in markers:
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Environment Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """
    Point NRS_DATA_DIR at a temp dir and reset the settings cache.

    Also clears every other NRS_* variable so the developer's environment
    cannot leak into assertions.
    """
    import os

    for key in list(os.environ):
        if key.startswith("NRS_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("NRS_DATA_DIR", str(tmp_path / "nrs"))
    monkeypatch.chdir(tmp_path)
    clear_settings_cache()
    yield tmp_path / "nrs"
    clear_settings_cache()


# =============================================================================
# Collaborator Fakes
# =============================================================================


@pytest.fixture
def fake_parser() -> FakeLocatorParser:
    return FakeLocatorParser({
        "L-files": DecodedLocator(ContentType.FILES_CONTAINER, DataType.BYTES),
        "L-files@v1": DecodedLocator(ContentType.FILES_CONTAINER, DataType.BYTES, "01"),
        "L-register": DecodedLocator(ContentType.RAW, DataType.REGISTER),
        "L-register@v1": DecodedLocator(ContentType.RAW, DataType.REGISTER, "01"),
        "L-nrs": DecodedLocator(ContentType.NRS_MAP_CONTAINER, DataType.REGISTER),
    })


# =============================================================================
# Sample Maps
# =============================================================================


@pytest.fixture
def scenario_map(fake_parser: FakeLocatorParser) -> NrsMap:
    """Map {"": L0, "sub": L1, "sub.sub": L2} for top name 'example'."""
    return NrsMap.from_snapshot({"": "L0", "sub": "L1", "sub.sub": "L2"}, fake_parser)
