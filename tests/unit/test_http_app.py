from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from tidy.config.settings import TidySettings
from tidy.domain.errors import RenderError, RenderTimeoutError
from tidy.http_app import app
from tidy.http_server import build_server_config
from tidy.lifespan import app_state, build_app_state
from tidy.processing.style_resolver import InlineStyleResolver

ARTICLE_PAGE = "<html><body><nav>Menu</nav><article><p>Hello reader</p></article></body></html>"


class FakeProbe:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls = 0

    async def snapshot(self, root):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return InlineStyleResolver()


@pytest.fixture
def client():
    app_state.update(build_app_state(TidySettings()))
    try:
        yield TestClient(app)
    finally:
        app_state.clear()


def test_healthz(client) -> None:
    resp = client.get("/healthz")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_tidy_returns_main_content(client) -> None:
    resp = client.post("/api/v1/tidy", json={"html": ARTICLE_PAGE})

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert "Hello reader" in body["content"]
    assert "Menu" not in body["content"]


def test_tidy_reports_missing_content(client) -> None:
    resp = client.post("/api/v1/tidy", json={"html": "<html><body hidden><p>x</p></body></html>"})

    assert resp.status_code == 200
    assert resp.json() == {"success": False, "content": None, "errorCode": "NO_MAIN_CONTENT"}


def test_tidy_rejects_blank_html(client) -> None:
    resp = client.post("/api/v1/tidy", json={"html": "   "})

    assert resp.status_code == 400
    assert resp.json()["detail"] == "html_required"


def test_tidy_uses_style_probe_when_asked(client) -> None:
    probe = FakeProbe()
    app_state["style_probe"] = probe

    resp = client.post("/api/v1/tidy", json={"html": ARTICLE_PAGE, "renderStyles": True})

    assert resp.status_code == 200
    assert resp.json()["success"] is True
    assert probe.calls == 1


def test_tidy_maps_render_timeout(client) -> None:
    app_state["style_probe"] = FakeProbe(RenderTimeoutError("too slow"))

    resp = client.post("/api/v1/tidy", json={"html": ARTICLE_PAGE, "renderStyles": True})

    assert resp.status_code == 504
    assert resp.json()["detail"] == "RENDER_TIMEOUT"


def test_tidy_without_pipeline_is_unavailable() -> None:
    app_state.clear()

    resp = TestClient(app).post("/api/v1/tidy", json={"html": ARTICLE_PAGE})

    assert resp.status_code == 503


def test_tidy_maps_render_error(client) -> None:
    app_state["style_probe"] = FakeProbe(RenderError("browser crashed", detail="Target closed"))

    resp = client.post("/api/v1/tidy", json={"html": ARTICLE_PAGE, "renderStyles": True})

    assert resp.status_code == 502
    assert resp.json()["detail"] == "RENDER_ERROR"


def test_tidy_without_style_probe_is_unavailable(client) -> None:
    app_state.pop("style_probe")

    resp = client.post("/api/v1/tidy", json={"html": ARTICLE_PAGE, "renderStyles": True})

    assert resp.status_code == 503
    assert resp.json()["detail"] == "style_probe_unavailable"


def test_tidy_strips_scripts_and_styles_from_content(client) -> None:
    html = (
        "<html><body><article><p>Story</p><script>window.track('x')</script>"
        "<style>p{color:red}</style><template><p>t</p></template></article></body></html>"
    )

    resp = client.post("/api/v1/tidy", json={"html": html})

    content = resp.json()["content"]
    assert "Story" in content
    assert "<script" not in content
    assert "<style" not in content
    assert "<template" not in content


def test_server_config_follows_log_level() -> None:
    config = build_server_config(TidySettings(log_level="DEBUG", http_port=9001))

    assert config.log_level == "debug"
    assert config.port == 9001
    assert config.access_log is False
