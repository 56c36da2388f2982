"""Boilerplate removal (navigation, ads, social widgets, footers, ...)."""

from __future__ import annotations

from typing import Iterable

from bs4 import Tag

from ..config.patterns import BASIC_CLUTTER_SELECTORS, CLUTTER_PATTERNS
from ..domain.models import ClutterStats
from ..observability.logger import get_logger
from ..utils.dom import attr_string, class_string, is_attached, snapshot_elements

logger = get_logger(__name__)


class ClutterRemover:
    """Two passes over the tree.

    Pass A resolves each basic selector against the current tree, so later
    selectors see earlier removals. Pass B checks class, id and ``data-testid``
    against substring patterns, walking a pre-pass snapshot in reverse.
    """

    def __init__(
        self,
        basic_selectors: Iterable[str] = BASIC_CLUTTER_SELECTORS,
        patterns: Iterable[str] = CLUTTER_PATTERNS,
    ):
        self._basic_selectors = tuple(basic_selectors)
        self._patterns = tuple(p.lower() for p in patterns)

    def remove_clutter(self, tree: Tag) -> ClutterStats:
        basic_count = self._remove_basic(tree)
        logger.debug("clutter_basic_removed", count=basic_count)

        pattern_count = self._remove_by_pattern(tree)
        logger.debug("clutter_pattern_removed", count=pattern_count)

        stats = ClutterStats(basic_count=basic_count, pattern_count=pattern_count)
        logger.debug("clutter_removed", total=stats.total)
        return stats

    @staticmethod
    def _resolve(tree: Tag, selector: str) -> list[Tag]:
        if selector.startswith("."):
            return list(tree.find_all(class_=selector[1:]))
        if selector.startswith("#"):
            found = tree.find(id=selector[1:])
            return [found] if found is not None else []
        return tree.select(selector)

    def _remove_basic(self, tree: Tag) -> int:
        count = 0
        for selector in self._basic_selectors:
            try:
                elements = self._resolve(tree, selector)
            except Exception as e:
                logger.warning("selector_failed", selector=selector, stage="clutter", error=str(e))
                continue
            for el in elements:
                if is_attached(el, tree):
                    el.extract()
                    count += 1
        return count

    def matches_pattern(self, el: Tag) -> bool:
        haystacks = (
            class_string(el).lower(),
            attr_string(el, "id").lower(),
            attr_string(el, "data-testid").lower(),
        )
        return any(pattern in text for pattern in self._patterns for text in haystacks if text)

    def _remove_by_pattern(self, tree: Tag) -> int:
        count = 0
        elements = snapshot_elements(tree)
        # Reverse: descendants are handled before their ancestors
        for el in reversed(elements):
            if not is_attached(el, tree):
                continue
            if self.matches_pattern(el):
                el.extract()
                count += 1
        return count
