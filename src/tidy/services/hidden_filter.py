"""Hidden-element removal (markup hints first, then resolved styles)."""

from __future__ import annotations

from typing import Iterable

from bs4 import Tag

from ..config.patterns import HIDDEN_SELECTORS
from ..observability.logger import get_logger
from ..processing.style_resolver import StyleResolver
from ..utils.dom import is_attached, snapshot_elements

logger = get_logger(__name__)


class HiddenElementFilter:
    """Removes elements that would not be rendered.

    Both passes take a snapshot of their candidates before removing anything
    and skip nodes that are no longer attached to ``tree``, so an element
    removed together with its ancestor is counted once.
    """

    def __init__(self, hidden_selectors: Iterable[str] = HIDDEN_SELECTORS):
        self._selectors = tuple(hidden_selectors)

    def filter_hidden(self, tree: Tag, style_resolver: StyleResolver) -> int:
        selector_count = self._remove_by_selector(tree)
        style_count = self._remove_by_style(tree, style_resolver)
        count = selector_count + style_count
        logger.debug(
            "hidden_elements_removed",
            count=count,
            by_selector=selector_count,
            by_style=style_count,
        )
        return count

    def _matching_elements(self, tree: Tag) -> list[Tag]:
        matched: set[int] = set()
        for selector in self._selectors:
            try:
                for el in tree.select(selector):
                    matched.add(id(el))
            except Exception as e:
                logger.warning("selector_failed", selector=selector, stage="hidden", error=str(e))
        # Document order, so ancestors come before their descendants
        return [el for el in snapshot_elements(tree) if id(el) in matched]

    def _remove_by_selector(self, tree: Tag) -> int:
        count = 0
        for el in self._matching_elements(tree):
            if not is_attached(el, tree):
                continue
            el.extract()
            count += 1
        return count

    def _remove_by_style(self, tree: Tag, style_resolver: StyleResolver) -> int:
        count = 0
        for el in snapshot_elements(tree):
            if not is_attached(el, tree):
                continue
            try:
                style = style_resolver.resolve(el)
            except Exception as e:
                logger.debug("style_resolution_failed", tag=el.name, error=str(e))
                continue
            if style.is_hidden:
                el.extract()
                count += 1
        return count
