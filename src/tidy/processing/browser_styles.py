"""Computed styles from headless Chromium.

Each element of the tree gets a temporary marker attribute, the marked markup is
loaded into a page at the mobile viewport width, and ``getComputedStyle`` is read
for every marked element. The markers are removed from the tree again before the
resolver is returned, so the pipeline sees the tree exactly as it was.
"""

from __future__ import annotations

import asyncio

from bs4 import Tag
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from ..domain.errors import RenderError, RenderTimeoutError
from ..domain.models import ResolvedStyle
from ..observability.logger import get_logger
from ..utils.dom import snapshot_elements
from .style_resolver import STYLE_MARKER_ATTR, SnapshotStyleResolver

logger = get_logger(__name__)

_COMPUTED_STYLES_JS = """
(marker) => {
  const out = {};
  document.querySelectorAll('[' + marker + ']').forEach((el) => {
    const cs = window.getComputedStyle(el);
    out[el.getAttribute(marker)] = {
      display: cs.display,
      visibility: cs.visibility,
      opacity: cs.opacity,
    };
  });
  return out;
}
"""


def mark_elements(root: Tag, marker_attr: str = STYLE_MARKER_ATTR) -> list[Tag]:
    elements = snapshot_elements(root)
    for idx, el in enumerate(elements):
        el[marker_attr] = str(idx)
    return elements


def unmark_elements(elements: list[Tag], marker_attr: str = STYLE_MARKER_ATTR) -> None:
    for el in elements:
        if marker_attr in el.attrs:
            del el[marker_attr]


def build_resolver(elements: list[Tag], raw: dict[str, dict[str, str]]) -> SnapshotStyleResolver:
    styles = {
        key: ResolvedStyle(
            display=str(values.get("display", "block")),
            visibility=str(values.get("visibility", "visible")),
            opacity=str(values.get("opacity", "1")),
        )
        for key, values in raw.items()
    }
    resolver = SnapshotStyleResolver(styles)
    for idx, el in enumerate(elements):
        resolver.bind(el, str(idx))
    return resolver


class PlaywrightStyleProbe:
    """Rendering layer: computed styles only (no layout data, no screenshots)."""

    def __init__(self, *, timeout_ms: int, user_agent: str, viewport_width: int):
        self._timeout_ms = timeout_ms
        self._user_agent = user_agent
        self._viewport_width = viewport_width

    async def snapshot(self, root: Tag) -> SnapshotStyleResolver:
        elements = mark_elements(root)
        markup = str(root)
        try:
            raw = await self._computed_styles(markup)
        except (asyncio.TimeoutError, PlaywrightTimeoutError) as e:
            raise RenderTimeoutError("Timeout while computing styles", detail=str(e)) from e
        except PlaywrightError as e:
            raise RenderError("Browser failed to compute styles", detail=str(e)) from e
        finally:
            unmark_elements(elements)

        logger.debug("computed_styles_collected", elements=len(elements), styles=len(raw))
        return build_resolver(elements, raw)

    async def _computed_styles(self, markup: str) -> dict[str, dict[str, str]]:
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=True)
            try:
                # Page scripts stay off: styles must describe the tree we were given
                context = await browser.new_context(
                    user_agent=self._user_agent,
                    viewport={"width": self._viewport_width, "height": 900},
                    java_script_enabled=False,
                )
                page = await context.new_page()
                await page.set_content(markup, wait_until="domcontentloaded", timeout=self._timeout_ms)
                return await page.evaluate(_COMPUTED_STYLES_JS, STYLE_MARKER_ATTR)
            finally:
                await browser.close()
