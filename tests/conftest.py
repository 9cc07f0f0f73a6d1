"""Pytest fixtures for burp tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from helpers import FakeSession


@pytest.fixture
def fake_session() -> FakeSession:
    """A session whose logins and uploads all succeed."""
    return FakeSession()


@pytest.fixture
def source_package(tmp_path: Path) -> Path:
    """Create a source package archive for testing."""
    pkg_path = tmp_path / "foo-1.0-1.src.tar.gz"
    pkg_path.write_bytes(b"\x1f\x8b test source package")
    return pkg_path


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Location of a config file that does not exist yet."""
    path = tmp_path / "config" / "burp" / "burp.conf"
    path.parent.mkdir(parents=True)
    return path
