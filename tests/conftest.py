"""Shared pytest fixtures for Quaint tests."""

from __future__ import annotations

import shutil
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from quaint.api.main import create_app
from quaint.core.colors import RGBColor
from quaint.core.config import QuaintConfig


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def make_config(temp_dir: Path):
    """Factory for test configurations.

    Defaults to Pillow's bundled font and a background path that does not
    exist, so tests do not depend on system assets.  Keyword arguments
    override individual fields.
    """

    def _make(**overrides) -> QuaintConfig:
        values = {
            "font_path": None,
            "background_image": temp_dir / "missing-bg.jpg",
            "_env_file": None,
        }
        values.update(overrides)
        return QuaintConfig(**values)

    return _make


@pytest.fixture
def test_config(make_config) -> QuaintConfig:
    """Default test configuration."""
    return make_config()


@pytest.fixture
def test_client(test_config: QuaintConfig) -> Generator[TestClient, None, None]:
    """TestClient around an app built from :func:`test_config`."""
    with TestClient(create_app(test_config)) as client:
        yield client


@pytest.fixture
def client_for(make_config):
    """Build a TestClient for a customised configuration.

    Clients are closed at teardown.
    """
    clients: list[TestClient] = []

    def _client(**overrides) -> TestClient:
        client = TestClient(create_app(make_config(**overrides)))
        client.__enter__()
        clients.append(client)
        return client

    yield _client

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def red() -> RGBColor:
    return RGBColor(255, 0, 0)


@pytest.fixture
def blue() -> RGBColor:
    return RGBColor(0, 0, 255)


@pytest.fixture
def green_background(temp_dir: Path) -> Path:
    """A small solid green PNG used as the background asset."""
    path = temp_dir / "bg.png"
    Image.new("RGB", (40, 20), color=(0, 255, 0)).save(path, format="PNG")
    return path


@pytest.fixture
def corrupt_background(temp_dir: Path) -> Path:
    """A file that exists but is not a decodable image."""
    path = temp_dir / "bg.jpg"
    path.write_bytes(b"this is not an image")
    return path
