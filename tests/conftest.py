"""Shared test fixtures for the mediabridge test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from mediabridge.domain.entities.extension import Episode, ExtensionSource

_REPO_ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture()
def bundled_extension_dir() -> Path:
    """The extensions/ directory shipped with the repository."""
    return _REPO_ROOT / "extensions"


@pytest.fixture()
def extension_source() -> ExtensionSource:
    """Minimal installed extension."""
    return ExtensionSource(id="sample", name="Sample", source_code="")


@pytest.fixture()
def episode() -> Episode:
    return Episode(url="https://example.com/item/1/ep/1", name="Episode 1")
