from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.app_builder import AppBuilder


@pytest.fixture
def app_builder(tmp_path: Path) -> AppBuilder:
    """Provide a reusable application builder rooted at the pytest tmp_path."""
    return AppBuilder(tmp_path)
