"""
Test configuration for the price recorder tests.
"""

import sys
from pathlib import Path

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

# Add project root to path before importing our modules
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Import our modules after path setup
from price_recorder.shared.models import PriceSource  # noqa: E402
from price_recorder.storage.record_writer import RecordWriter  # noqa: E402


class FakeUpstream:
    """Local HTTP server serving canned bodies per path."""

    def __init__(self) -> None:
        self.responses: dict[str, tuple[int, str | bytes, str, str | None]] = {}
        self.requests: list[web.Request] = []
        self.server: TestServer | None = None

    def respond(
        self,
        path: str,
        body: str | bytes,
        status: int = 200,
        content_type: str = "application/json",
        charset: str | None = None,
    ) -> None:
        self.responses[path] = (status, body, content_type, charset)

    def source_for(self, source: PriceSource, path: str) -> PriceSource:
        """Point a catalog source at this server."""
        assert self.server is not None
        return source.model_copy(update={"url": str(self.server.make_url(path))})

    async def handle(self, request: web.Request) -> web.Response:
        self.requests.append(request)
        if request.path not in self.responses:
            return web.Response(status=404, text="not found")
        status, body, content_type, charset = self.responses[request.path]
        if isinstance(body, bytes):
            return web.Response(
                status=status, body=body, content_type=content_type, charset=charset
            )
        return web.Response(
            status=status, text=body, content_type=content_type, charset=charset
        )


@pytest_asyncio.fixture
async def upstream():
    """Start a fake upstream price API for a single test."""
    fake = FakeUpstream()
    app = web.Application()
    app.router.add_get("/{tail:.*}", fake.handle)
    server = TestServer(app)
    await server.start_server()
    fake.server = server
    try:
        yield fake
    finally:
        await server.close()


@pytest.fixture
def writer(tmp_path):
    """Record writer storing files in a temporary directory."""
    return RecordWriter(tmp_path)
