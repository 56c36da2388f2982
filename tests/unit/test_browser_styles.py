from __future__ import annotations

import asyncio

import pytest
from bs4 import BeautifulSoup
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from tidy.domain.errors import RenderError, RenderTimeoutError
from tidy.processing.browser_styles import PlaywrightStyleProbe
from tidy.processing.style_resolver import STYLE_MARKER_ATTR

PAGE = "<html><body><div class='rail'>rail</div><p>text</p></body></html>"


def _probe() -> PlaywrightStyleProbe:
    return PlaywrightStyleProbe(timeout_ms=1000, user_agent="test-agent", viewport_width=600)


@pytest.mark.parametrize(
    "raised, expected",
    [
        (PlaywrightTimeoutError("Timeout 1000ms exceeded"), RenderTimeoutError),
        (asyncio.TimeoutError(), RenderTimeoutError),
        (PlaywrightError("Target page, context or browser has been closed"), RenderError),
    ],
)
def test_snapshot_maps_browser_failures_and_unmarks_tree(monkeypatch, raised, expected) -> None:
    probe = _probe()

    async def failing(markup: str):
        assert STYLE_MARKER_ATTR in markup
        raise raised

    monkeypatch.setattr(probe, "_computed_styles", failing)
    soup = BeautifulSoup(PAGE, "lxml")
    before = str(soup)

    with pytest.raises(expected):
        asyncio.run(probe.snapshot(soup))

    assert soup.find(attrs={STYLE_MARKER_ATTR: True}) is None
    assert str(soup) == before


def test_snapshot_returns_resolver_bound_to_tree(monkeypatch) -> None:
    probe = _probe()
    seen: list[str] = []

    async def computed(markup: str):
        seen.append(markup)
        # html, body, div, p
        return {
            "0": {"display": "block", "visibility": "visible", "opacity": "1"},
            "1": {"display": "block", "visibility": "visible", "opacity": "1"},
            "2": {"display": "none", "visibility": "visible", "opacity": "1"},
            "3": {"display": "block", "visibility": "visible", "opacity": "1"},
        }

    monkeypatch.setattr(probe, "_computed_styles", computed)
    soup = BeautifulSoup(PAGE, "lxml")

    resolver = asyncio.run(probe.snapshot(soup))

    assert f'{STYLE_MARKER_ATTR}="2"' in seen[0]
    assert soup.find(attrs={STYLE_MARKER_ATTR: True}) is None
    assert resolver.resolve(soup.find("div")).is_hidden
    assert not resolver.resolve(soup.find("p")).is_hidden
