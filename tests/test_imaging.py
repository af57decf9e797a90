"""Tests for image subsystem initialization."""

import pytest
from PIL import Image

from app.core import imaging


@pytest.fixture
def fresh_imaging():
    """Reset the initialization flag around a test."""
    imaging.shutdown_imaging()
    original_limit = Image.MAX_IMAGE_PIXELS
    yield
    imaging.shutdown_imaging()
    Image.MAX_IMAGE_PIXELS = original_limit


def test_initialize_once(fresh_imaging):
    """Test repeated initialization keeps the first configuration."""
    assert not imaging.is_imaging_ready()

    imaging.initialize_imaging(1_000_000)
    imaging.initialize_imaging(5)

    assert imaging.is_imaging_ready()
    assert Image.MAX_IMAGE_PIXELS == 1_000_000


def test_ensure_ready_before_startup(fresh_imaging):
    """Test the request path refuses to run before startup."""
    with pytest.raises(RuntimeError):
        imaging.ensure_imaging_ready()

    imaging.initialize_imaging(1_000_000)
    imaging.ensure_imaging_ready()


def test_initialize_fails_fast_without_decoders(fresh_imaging, monkeypatch):
    """Test startup fails when Pillow has no decoders."""
    monkeypatch.setattr(Image, "init", lambda: None)
    monkeypatch.setattr(Image, "OPEN", {})

    with pytest.raises(RuntimeError):
        imaging.initialize_imaging(1_000_000)
    assert not imaging.is_imaging_ready()


def test_client_startup_initializes_imaging(client):
    """Test the application startup hook initializes imaging."""
    assert imaging.is_imaging_ready()
