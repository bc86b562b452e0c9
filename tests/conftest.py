"""Pytest configuration for the landscape pipeline tests."""
import sys
from pathlib import Path

import httpx
import pytest

# Add backend directory to Python path so tests can import landscape.*
backend_path = Path(__file__).parent.parent / "backend"
if str(backend_path) not in sys.path:
    sys.path.insert(0, str(backend_path))

from landscape.config import Config  # noqa: E402
from landscape.models.requests import FeatureSelection  # noqa: E402
from landscape.models.responses import TopViewArtifact  # noqa: E402
from landscape.services.pipeline import PipelineCoordinator  # noqa: E402


class FakeDesignService:
    """Records every request; answers with a queued url or raises a queued error."""

    def __init__(self, url="https://img.example/design.png"):
        self.url = url
        self.requests = []
        self.gate = None
        self.error = None

    async def generate(self, request):
        self.requests.append(request)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.url


class FakeBreakdownService:
    def __init__(self, text="## Cost\n$4,200"):
        self.text = text
        self.requests = []
        self.gate = None
        self.error = None

    async def analyze(self, request):
        self.requests.append(request)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.text


class FakeTopViewService:
    def __init__(self, url="https://img.example/plan.png"):
        self.url = url
        self.requests = []
        self.gate = None

    async def plan(self, request):
        self.requests.append(request)
        if self.gate is not None:
            await self.gate.wait()
        return TopViewArtifact(url=self.url)


@pytest.fixture
def config():
    return Config.from_env(TOPVIEW_MODE="simulated", TOPVIEW_DELAY_SECONDS=0.0, DEBUG=False)


@pytest.fixture
def services():
    return FakeDesignService(), FakeBreakdownService(), FakeTopViewService()


@pytest.fixture
def coordinator(services, config):
    design, breakdown, top_view = services
    return PipelineCoordinator(design, breakdown, top_view, config)


@pytest.fixture
def native_only():
    return FeatureSelection(native_planting=True, rain_garden=False, hardscape=False, edible_guild=False)


@pytest.fixture
def mock_client():
    """Factory for an AsyncClient whose handler returns (status, json_or_text)."""

    def _build(handler):
        def _handle(request: httpx.Request) -> httpx.Response:
            status, body = handler(request)
            if isinstance(body, (dict, list)):
                return httpx.Response(status, json=body)
            return httpx.Response(status, text=body)

        return httpx.AsyncClient(transport=httpx.MockTransport(_handle))

    return _build
