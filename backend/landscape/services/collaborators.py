# landscape/services/collaborators.py
import asyncio
import logging
from typing import Any, Dict

import httpx

from landscape.config import Config
from landscape.errors import CollaboratorError, EmptyResultError
from landscape.models.requests import BreakdownRequest, DesignRequest, TopViewRequest
from landscape.models.responses import TopViewArtifact

logger = logging.getLogger(__name__)

HEADERS = {"Content-Type": "application/json"}


def error_detail(resp: httpx.Response) -> str:
    """Structured `error` field when the body is JSON, else the raw text."""
    try:
        payload = resp.json()
    except ValueError:
        return resp.text or "(no details)"
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict):
            error = error.get("message")
        if error:
            return str(error)
    return f"HTTP {resp.status_code}"


async def post_json(client: httpx.AsyncClient, url: str, payload: Dict[str, Any], label: str) -> httpx.Response:
    logger.debug("POST %s (%s)", url, label)
    try:
        return await client.post(url, headers=HEADERS, json=payload)
    except httpx.HTTPError as e:
        logger.warning("%s transport failure: %r", label, e)
        raise CollaboratorError(f"{label} request failed: {str(e) or type(e).__name__}") from e


def json_body(resp: httpx.Response, label: str) -> Dict[str, Any]:
    try:
        data = resp.json()
    except ValueError as e:
        raise CollaboratorError(f"{label} returned a malformed response", resp.status_code) from e
    if not isinstance(data, dict):
        raise CollaboratorError(f"{label} returned a malformed response", resp.status_code)
    return data


def text_field(value: Any, label: str, empty_message: str, status_code: int) -> str:
    """A required text field: non-string is malformed, blank is empty."""
    if value is not None and not isinstance(value, str):
        raise CollaboratorError(f"{label} returned a malformed response", status_code)
    if not value or not value.strip():
        raise EmptyResultError(empty_message, status_code)
    return value


class DesignService:
    """Photorealistic design generation; returns the first result's url."""

    def __init__(self, client: httpx.AsyncClient, url: str):
        self.client = client
        self.url = url

    async def generate(self, request: DesignRequest) -> str:
        resp = await post_json(self.client, self.url, request.model_dump(), "Image generation")
        if not resp.is_success:
            raise CollaboratorError(
                f"Image generation failed: {resp.status_code} - {error_detail(resp)}", resp.status_code
            )

        data = json_body(resp, "Image generation")
        results = data.get("data")
        first = results[0] if isinstance(results, list) and results else None
        image_url = first.get("url") if isinstance(first, dict) else None
        return text_field(image_url, "Image generation", "No image URL returned", resp.status_code)


class BreakdownService:
    """Cost / plant / strategy narrative derived from a design image."""

    def __init__(self, client: httpx.AsyncClient, url: str):
        self.client = client
        self.url = url

    async def analyze(self, request: BreakdownRequest) -> str:
        resp = await post_json(self.client, self.url, request.model_dump(), "Breakdown")
        if not resp.is_success:
            raise CollaboratorError(f"Breakdown request failed: {error_detail(resp)}", resp.status_code)

        breakdown = json_body(resp, "Breakdown").get("breakdown")
        return text_field(breakdown, "Breakdown", "Breakdown was generated but returned empty content.", resp.status_code)


class RemoteTopViewService:
    def __init__(self, client: httpx.AsyncClient, url: str):
        self.client = client
        self.url = url

    async def plan(self, request: TopViewRequest) -> TopViewArtifact:
        resp = await post_json(self.client, self.url, request.model_dump(), "Top-view")
        if not resp.is_success:
            raise CollaboratorError(f"Top-view request failed: {error_detail(resp)}", resp.status_code)

        plan_url = json_body(resp, "Top-view").get("url")
        return TopViewArtifact(url=text_field(plan_url, "Top-view", "No plan image URL returned", resp.status_code))


class SimulatedTopViewService:
    """Stands in for the plan service: waits, then hands back a placeholder."""

    def __init__(self, placeholder_url: str, delay: float = 2.5):
        self.placeholder_url = placeholder_url
        self.delay = delay

    async def plan(self, request: TopViewRequest) -> TopViewArtifact:
        logger.debug("Simulating top-view plan for %s", request.imageUrl)
        await asyncio.sleep(self.delay)
        return TopViewArtifact(url=self.placeholder_url)


def build_top_view_service(config: Config, client: httpx.AsyncClient):
    if config.TOPVIEW_MODE == "remote":
        return RemoteTopViewService(client, config.endpoint(config.TOPVIEW_PATH))
    if config.TOPVIEW_MODE == "simulated":
        return SimulatedTopViewService(config.TOPVIEW_PLACEHOLDER_URL, config.TOPVIEW_DELAY_SECONDS)
    raise ValueError(f"Unknown TOPVIEW_MODE: {config.TOPVIEW_MODE!r}")
