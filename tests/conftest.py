# tests/conftest.py

"""Shared pytest fixtures for the catalog_sync tests."""

from collections.abc import Generator
from pathlib import Path

import pytest

from src.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_paths(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Point local storage and logs at a per-test temp directory."""
    monkeypatch.setattr(
        Settings, "MIRROR_DB_PATH", tmp_path / "local_storage.db"
    )
    monkeypatch.setattr(Settings, "LOGS_DIR", tmp_path / "logs")
    yield
