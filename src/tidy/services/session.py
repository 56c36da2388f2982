"""Reader-view session: apply, toggle and restore on a live document."""

from __future__ import annotations

from bs4 import BeautifulSoup

from ..observability.logger import get_logger
from ..processing.style_resolver import StyleResolver
from .tidy_pipeline import TidyPipeline

logger = get_logger(__name__)

READER_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="UTF-8">
<meta name="viewport" content="{viewport}">
<style>
body {{
  max-width: 800px;
  margin: 0 auto;
  padding: 20px;
  font-family: system-ui, -apple-system, sans-serif;
  line-height: 1.6;
}}
img {{
  max-width: 100%;
  height: auto;
}}
</style>
</head>
<body>{content}</body>
</html>"""


def replace_document(tree: BeautifulSoup, markup: str) -> None:
    """Swap the whole content of ``tree`` for ``markup``, keeping the tree object."""
    fresh = BeautifulSoup(markup, "lxml")
    tree.clear()
    for node in list(fresh.contents):
        tree.append(node.extract())


class TidySession:
    """Owns the original markup while the reader view is active.

    One session per document; the caller creates it and calls ``teardown``
    when the document goes away.
    """

    def __init__(self, pipeline: TidyPipeline):
        self._pipeline = pipeline
        self._original_markup: str | None = None
        self._active = False

    @property
    def is_active(self) -> bool:
        return self._active

    def apply(self, tree: BeautifulSoup, style_resolver: StyleResolver) -> bool:
        if self._active:
            return True

        original = str(tree)
        result = self._pipeline.extract(tree, style_resolver)
        if result is None:
            # extract() works in place; hand the caller back an untouched page
            replace_document(tree, original)
            logger.info("session_apply_failed")
            return False

        replace_document(
            tree,
            READER_TEMPLATE.format(viewport=self._pipeline.viewport_content, content=result.content),
        )
        self._original_markup = original
        self._active = True
        logger.info("session_applied")
        return True

    def restore(self, tree: BeautifulSoup) -> bool:
        if not self._active or self._original_markup is None:
            return False
        replace_document(tree, self._original_markup)
        self._original_markup = None
        self._active = False
        logger.info("session_restored")
        return True

    def toggle(self, tree: BeautifulSoup, style_resolver: StyleResolver) -> bool:
        """Flip the reader view; returns whether it is active afterwards."""
        if self._active:
            self.restore(tree)
            return False
        return self.apply(tree, style_resolver)

    def teardown(self) -> None:
        self._original_markup = None
        self._active = False
