"""Main-content location: explicit markers first, scoring as fallback."""

from __future__ import annotations

from typing import Iterable

from bs4 import Tag

from ..config.patterns import CONTENT_SELECTORS
from ..observability.logger import get_logger
from .content_scorer import ContentScorer

logger = get_logger(__name__)


class MainContentLocator:
    def __init__(
        self,
        scorer: ContentScorer | None = None,
        content_selectors: Iterable[str] = CONTENT_SELECTORS,
    ):
        self._scorer = scorer or ContentScorer()
        self._content_selectors = tuple(content_selectors)

    def locate(self, tree: Tag) -> Tag | None:
        marked = self._find_marked(tree)
        if marked is not None:
            return marked

        candidates = self._scorer.score_candidates(tree)
        if candidates:
            logger.debug(
                "main_content_found",
                via="scoring",
                candidates=len(candidates),
                score=candidates[0].score,
            )
            return candidates[0].element

        return None

    def _find_marked(self, tree: Tag) -> Tag | None:
        for selector in self._content_selectors:
            try:
                found = tree.select_one(selector)
            except Exception as e:
                logger.warning("selector_failed", selector=selector, stage="locate", error=str(e))
                continue
            if found is not None:
                logger.debug("main_content_found", via="selector", selector=selector)
                return found
        return None
