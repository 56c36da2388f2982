"""Mobile-layout preprocessing.

Sites often hide sidebars, ads and navigation below a breakpoint. Before the
hidden-element filter runs we pretend to be a narrow viewport:

- a viewport ``<meta>`` and a width-pinning ``<style>`` are injected, and
- declarations from ``@media (max-width: N)`` blocks that apply at the mobile
  width are copied into the inline ``style`` of the elements they select.

Both steps are best-effort: a failure is logged and the document is left as is.
"""

from __future__ import annotations

import re
from typing import Iterator

from bs4 import BeautifulSoup, Tag
from bs4.element import Stylesheet

from ..observability.logger import get_logger

logger = get_logger(__name__)

VIEWPORT_STYLE_ID = "tidy-mobile-viewport"

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.S)
_RULE_RE = re.compile(r"([^{}]+)\{([^{}]*)\}")
_NUMBER_RE = re.compile(r"\d+")


def simulate_mobile_viewport(tree: BeautifulSoup, *, width: int, viewport_content: str) -> None:
    try:
        html = tree.find("html")
        if html is None:
            logger.debug("viewport_skipped", reason="no_html_element")
            return

        head = tree.find("head")
        if head is None:
            head = tree.new_tag("head")
            html.insert(0, head)

        viewport = tree.select_one('meta[name="viewport"]')
        if viewport is None:
            viewport = tree.new_tag("meta", attrs={"name": "viewport", "content": viewport_content})
            head.append(viewport)
        else:
            viewport["content"] = viewport_content

        style = tree.find(id=VIEWPORT_STYLE_ID)
        if style is None:
            style = tree.new_tag("style", attrs={"id": VIEWPORT_STYLE_ID})
            head.append(style)
        style.string = Stylesheet(
            f":root {{ --tidy-viewport-width: {width}px; }}\n"
            f"html {{ width: {width}px !important; }}\n"
        )
    except Exception as e:
        logger.warning("viewport_setup_failed", error=str(e))


def iter_media_blocks(css: str) -> Iterator[tuple[str, str]]:
    """Yield ``(condition, body)`` for each top-level ``@media`` block."""
    pos = 0
    while True:
        start = css.find("@media", pos)
        if start < 0:
            return
        open_brace = css.find("{", start)
        if open_brace < 0:
            return
        depth = 0
        end = open_brace
        while end < len(css):
            if css[end] == "{":
                depth += 1
            elif css[end] == "}":
                depth -= 1
                if depth == 0:
                    break
            end += 1
        condition = css[start + len("@media") : open_brace].strip()
        yield condition, css[open_brace + 1 : end]
        pos = end + 1


def applies_at_width(condition: str, width: int) -> bool:
    if "max-width" not in condition:
        return False
    match = _NUMBER_RE.search(condition)
    max_width = int(match.group(0)) if match else 0
    return width <= max_width


def _append_inline_style(element: Tag, declarations: str) -> None:
    existing = str(element.get("style") or "").strip()
    if existing and not existing.endswith(";"):
        existing += ";"
    element["style"] = f"{existing} {declarations}".strip() if existing else declarations


def evaluate_media_queries(tree: BeautifulSoup, *, width: int) -> int:
    """Materialize applicable max-width rules as inline styles. Returns distinct elements touched."""
    touched: set[int] = set()
    try:
        for style_tag in list(tree.find_all("style")):
            if style_tag.get("id") == VIEWPORT_STYLE_ID:
                continue
            css = _COMMENT_RE.sub("", style_tag.get_text())
            for condition, body in iter_media_blocks(css):
                if not applies_at_width(condition, width):
                    continue
                for selector_text, declarations in _RULE_RE.findall(body):
                    selector_text = selector_text.strip()
                    declarations = declarations.strip()
                    if not selector_text or not declarations:
                        continue
                    try:
                        elements = tree.select(selector_text)
                    except Exception as e:
                        logger.debug("media_rule_selector_failed", selector=selector_text, error=str(e))
                        continue
                    for element in elements:
                        _append_inline_style(element, declarations)
                        touched.add(id(element))
    except Exception as e:
        logger.warning("media_query_evaluation_failed", error=str(e))

    logger.debug("media_queries_evaluated", width=width, elements_touched=len(touched))
    return len(touched)
