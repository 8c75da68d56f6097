import pyperclip
import pytest
from fastapi.testclient import TestClient


def test_api_search_activate_trace_metrics() -> None:
    from clauncher.api.main import app

    client = TestClient(app)

    health_resp = client.get("/health")
    assert health_resp.status_code == 200
    assert health_resp.json()["sources"] == ["directory", "executables", "curated_apps"]

    search_resp = client.post("/search", json={"query": "g: fastapi testing"})
    assert search_resp.status_code == 200
    payload = search_resp.json()
    assert payload["items"] == [
        {
            "label": "Google: fastapi testing",
            "action_ref": "https://www.google.com/search?q=fastapi%20testing",
            "is_actionable": True,
            "score": 10000,
        }
    ]

    empty_resp = client.post("/search", json={"query": ""})
    assert empty_resp.status_code == 200
    assert empty_resp.json()["items"]

    trace_resp = client.get(f"/traces/{payload['trace_id']}")
    assert trace_resp.status_code == 200
    assert trace_resp.json()["route"] == "web_shortcut"

    assert client.get("/traces/not-a-trace").status_code == 404
    assert client.get("/traces", params={"limit": 1}).json()["items"]

    activate_resp = client.post("/activate", json={"action_ref": "result:4"})
    assert activate_resp.status_code == 200
    assert activate_resp.json() == {"status": "ok", "action": "ResultAction"}

    metrics_resp = client.get("/metrics")
    assert metrics_resp.status_code == 200
    assert metrics_resp.json()["total_searches"] >= 2


def test_api_activation_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    from clauncher.api import main

    client = TestClient(main.app)

    assert client.post("/activate", json={"action_ref": "   "}).status_code == 422
    assert client.post("/activate", json={"action_ref": "terminal:"}).status_code == 422

    def _fail(_: str) -> None:
        raise pyperclip.PyperclipException("no copy/paste mechanism")

    monkeypatch.setattr(main._engine.activator, "_write_clipboard", _fail)
    failed = client.post("/activate", json={"action_ref": "clip:hello"})

    assert failed.status_code == 500
    assert "clip:hello" in failed.json()["detail"]
