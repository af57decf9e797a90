"""Pytest configuration and fixtures."""

import io
from typing import Callable, Dict, List, Tuple

import httpx
import pytest
from fastapi.testclient import TestClient
from PIL import Image

from app.api.dependencies import get_remote_fetcher
from app.main import app
from app.services.fetcher_service import RemoteFetcher

UPSTREAM = "http://upstream.test"


def make_image_bytes(
    size: Tuple[int, int] = (600, 400),
    fmt: str = "PNG",
    color: Tuple[int, int, int] = (0, 0, 255),
) -> bytes:
    """Encode a solid-color image."""
    image = Image.new("RGB", size, color)
    out = io.BytesIO()
    image.save(out, format=fmt)
    return out.getvalue()


def make_quadrant_png(size: Tuple[int, int] = (600, 400)) -> bytes:
    """Encode a PNG whose top-left 300x300 block is red and the rest blue."""
    image = Image.new("RGB", size, (0, 0, 255))
    image.paste((255, 0, 0), (0, 0, 300, 300))
    out = io.BytesIO()
    image.save(out, format="PNG")
    return out.getvalue()


class Upstream:
    """Fake remote server backed by httpx.MockTransport."""

    def __init__(self):
        self.routes: Dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: List[httpx.Request] = []

    def add(self, path: str, content: bytes = b"", content_type: str = "image/png", status_code: int = 200) -> str:
        headers = {"Content-Type": content_type} if content_type else {}
        self.routes[path] = lambda request: httpx.Response(status_code, content=content, headers=headers)
        return f"{UPSTREAM}{path}"

    def add_error(self, path: str, error: type = httpx.ConnectError) -> str:
        def raise_error(request: httpx.Request) -> httpx.Response:
            raise error("connection refused", request=request)

        self.routes[path] = raise_error
        return f"{UPSTREAM}{path}"

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, content=b"not found", headers={"Content-Type": "text/plain"})
        return route(request)

    def fetcher(self) -> RemoteFetcher:
        return RemoteFetcher(timeout=5.0, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def upstream():
    """Fake upstream image host."""
    return Upstream()


@pytest.fixture
def client(upstream):
    """Create test client with the remote fetcher pointed at the fake upstream."""
    app.dependency_overrides[get_remote_fetcher] = upstream.fetcher
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_image():
    """Factory for encoded solid-color images."""
    return make_image_bytes


@pytest.fixture
def quadrant_png():
    return make_quadrant_png()
