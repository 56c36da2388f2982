"""Attribute whitelisting for the located content subtree."""

from __future__ import annotations

from typing import Iterable

from bs4 import Tag

from ..config.patterns import ALLOWED_ATTRIBUTES
from ..observability.logger import get_logger

logger = get_logger(__name__)


class AttributeSanitizer:
    """Keeps whitelisted and ``data-*`` attributes, drops everything else.

    Only ``Tag.attrs`` is touched: tag names, children and element identity
    stay as they were.
    """

    def __init__(self, allowed_attributes: Iterable[str] = ALLOWED_ATTRIBUTES):
        self._allowed = frozenset(a.lower() for a in allowed_attributes)

    def is_allowed(self, name: str) -> bool:
        lowered = name.lower()
        return lowered in self._allowed or lowered.startswith("data-")

    def sanitize(self, root: Tag) -> int:
        stripped = 0
        for el in [root, *root.find_all(True)]:
            for name in list(el.attrs):
                if not self.is_allowed(name):
                    del el.attrs[name]
                    stripped += 1

        logger.debug("attributes_stripped", count=stripped)
        return stripped
