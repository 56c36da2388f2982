"""Heuristic relevance scoring for main-content candidates."""

from __future__ import annotations

import re
from typing import Iterable

from bs4 import Tag

from ..config.patterns import BLOCK_ELEMENTS, NEGATIVE_PATTERN, POSITIVE_PATTERN
from ..domain.models import ContentScore
from ..utils.dom import attr_string, class_string

CLASS_BONUS = 25
LINK_DENSITY_THRESHOLD = 0.5
LINK_DENSITY_PENALTY = 10
MAX_WORD_BONUS = 3
IMAGE_WEIGHT = 3
MAX_IMAGE_BONUS = 9


class ContentScorer:
    """Scores block elements; never mutates the tree.

    The positive and negative class/id bonuses are evaluated independently, so
    ``class="article-sidebar"`` collects both and nets to zero.
    """

    def __init__(
        self,
        positive_pattern: str = POSITIVE_PATTERN,
        negative_pattern: str = NEGATIVE_PATTERN,
        block_elements: Iterable[str] = BLOCK_ELEMENTS,
    ):
        self._positive = re.compile(positive_pattern, re.I)
        self._negative = re.compile(negative_pattern, re.I)
        self._block_elements = [t.lower() for t in block_elements]

    def score(self, element: Tag) -> int:
        score = 0

        class_name = class_string(element).lower()
        element_id = attr_string(element, "id").lower()

        if self._positive.search(class_name) or self._positive.search(element_id):
            score += CLASS_BONUS
        if self._negative.search(class_name) or self._negative.search(element_id):
            score -= CLASS_BONUS

        text = element.get_text()
        words = len(text.split())
        score += min(words // 100, MAX_WORD_BONUS)

        link_text = sum(len(a.get_text()) for a in element.find_all("a"))
        link_density = link_text / len(text) if text else 0
        if link_density > LINK_DENSITY_THRESHOLD:
            score -= LINK_DENSITY_PENALTY

        score += len(element.find_all("p"))
        score += min(len(element.find_all("img")) * IMAGE_WEIGHT, MAX_IMAGE_BONUS)

        return score

    def score_candidates(self, tree: Tag) -> list[ContentScore]:
        """Positive-scoring block elements, best first (ties keep document order)."""
        candidates = []
        for element in tree.find_all(self._block_elements):
            score = self.score(element)
            if score > 0:
                candidates.append(ContentScore(element=element, score=score))
        # sorted() is stable
        return sorted(candidates, key=lambda c: c.score, reverse=True)
