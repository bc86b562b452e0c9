import json

import httpx
import pytest
from fastapi.testclient import TestClient

from landscape.main import create_app


def collaborator_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/api/generate":
        body = json.loads(request.content)
        if "rain garden" in body["prompt"]:
            return httpx.Response(404, text="Model not found")
        return httpx.Response(200, json={"data": [{"url": "https://img.example/design.png"}]})
    if request.url.path == "/api/breakdown":
        return httpx.Response(200, json={"breakdown": "## Estimated cost\n$3,000 – $5,000"})
    return httpx.Response(404, text="no such endpoint")


@pytest.fixture
def api(config):
    upstream = httpx.AsyncClient(transport=httpx.MockTransport(collaborator_handler))
    config.API_BASE_URL = "http://upstream"
    app = create_app(config, client=upstream)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def session_id(api):
    resp = api.post("/sessions")
    assert resp.status_code == 201
    return resp.json()["sessionId"]


def test_health(api):
    assert api.get("/health").json() == {"status": "ok"}


def test_new_session_is_idle(api, session_id):
    body = api.get(f"/sessions/{session_id}").json()
    assert body["hasReference"] is False
    assert {stage["status"] for stage in body["stages"].values()} == {"idle"}
    assert body["rebateUrl"].startswith("https://")


def test_unknown_session_is_404(api):
    assert api.get("/sessions/nope").status_code == 404
    assert api.post("/sessions/nope/breakdown").status_code == 404


def test_full_pipeline_over_http(api, session_id):
    resp = api.post(f"/sessions/{session_id}/design", json={"nativePlanting": True})
    assert resp.status_code == 200
    design = resp.json()["stages"]["design"]
    assert design["status"] == "succeeded"
    assert design["result"]["url"] == "https://img.example/design.png"
    assert "Colorado native perennials" in design["result"]["promptUsed"]

    breakdown = api.post(f"/sessions/{session_id}/breakdown").json()["stages"]["breakdown"]
    assert breakdown["status"] == "succeeded"
    assert breakdown["result"].startswith("## Estimated cost")

    top_view = api.post(f"/sessions/{session_id}/topview").json()["stages"]["topView"]
    assert top_view == {"status": "succeeded", "result": {"url": "/top-view-placeholder.png"}, "message": None}


def test_breakdown_before_design_is_409(api, session_id):
    resp = api.post(f"/sessions/{session_id}/breakdown")
    assert resp.status_code == 409
    assert "generate a design first" in resp.json()["detail"]


def test_collaborator_failure_is_a_failed_stage_not_an_http_error(api, session_id):
    resp = api.post(f"/sessions/{session_id}/design", json={"nativePlanting": False, "rainGarden": True})
    assert resp.status_code == 200
    design = resp.json()["stages"]["design"]
    assert design["status"] == "failed"
    assert "temporarily unavailable" in design["message"]


def test_reference_upload_validation(api, session_id):
    resp = api.put(
        f"/sessions/{session_id}/reference",
        files={"file": ("notes.txt", b"hello", "text/plain")},
    )
    assert resp.status_code == 415

    too_big = b"x" * (5 * 1024 * 1024 + 1)
    resp = api.put(
        f"/sessions/{session_id}/reference",
        files={"file": ("yard.jpg", too_big, "image/jpeg")},
    )
    assert resp.status_code == 413


def test_reference_upload_and_clear(api, session_id):
    resp = api.put(
        f"/sessions/{session_id}/reference",
        files={"file": ("yard.png", b"\x89PNG-data", "image/png")},
    )
    assert resp.status_code == 200
    assert resp.json()["hasReference"] is True

    resp = api.delete(f"/sessions/{session_id}/reference")
    assert resp.json()["hasReference"] is False


def test_delete_session(api, session_id):
    assert api.delete(f"/sessions/{session_id}").status_code == 204
    assert api.get(f"/sessions/{session_id}").status_code == 404
