"""Shared pytest fixtures for Identicon Service tests."""

import io
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from identicon_service.api import main as api_main
from identicon_service.core.config import IdenticonConfig
from identicon_service.core.options import RequestOptions


@pytest.fixture
def test_config(monkeypatch) -> IdenticonConfig:
    """Create a configuration that ignores the environment and .env file.

    Returns:
        IdenticonConfig instance with default values
    """
    for name in IdenticonConfig.model_fields:
        monkeypatch.delenv(f"IDENTICON_{name.upper()}", raising=False)
    return IdenticonConfig(_env_file=None)


@pytest.fixture
def test_client(monkeypatch, test_config: IdenticonConfig) -> Generator[TestClient, None, None]:
    """FastAPI test client bound to the default test configuration.

    Yields:
        TestClient for the application

    Cleanup:
        The module-level config is restored by monkeypatch
    """
    monkeypatch.setattr(api_main, "config", test_config)
    with TestClient(api_main.app) as client:
        yield client


@pytest.fixture
def default_options() -> RequestOptions:
    """Options equivalent to the query string ``hash=test``."""
    return RequestOptions(seed="test")


@pytest.fixture
def open_image() -> Callable[[bytes], Image.Image]:
    """Return a helper that decodes response bytes with Pillow."""

    def _open(data: bytes) -> Image.Image:
        image = Image.open(io.BytesIO(data))
        image.load()
        return image

    return _open
