"""Extraction orchestration: hidden → clutter → locate → sanitize → serialize."""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

from ..config.patterns import DEFAULT_PATTERNS, PatternTables
from ..config.settings import TidySettings
from ..domain.models import TidyResult
from ..observability.logger import get_logger
from ..processing.mobile import evaluate_media_queries, simulate_mobile_viewport
from ..processing.style_resolver import StyleResolver
from ..utils.dom import element_count
from .attribute_sanitizer import AttributeSanitizer
from .clutter_remover import ClutterRemover
from .content_locator import MainContentLocator
from .content_scorer import ContentScorer
from .hidden_filter import HiddenElementFilter

logger = get_logger(__name__)

DEFAULT_MOBILE_WIDTH = 600
DEFAULT_VIEWPORT = "width=device-width, initial-scale=1, maximum-scale=1"


class TidyPipeline:
    """Service layer for reader-view extraction.

    Responsibilities:
    - Run the removal passes over the caller's tree, in place
    - Locate and sanitize the main-content subtree
    - Turn any unexpected failure into ``None`` (never a partial result)

    The pipeline holds configuration only; each ``extract`` call is independent.
    """

    def __init__(
        self,
        patterns: PatternTables = DEFAULT_PATTERNS,
        *,
        simulate_mobile: bool = False,
        mobile_width: int = DEFAULT_MOBILE_WIDTH,
        viewport_content: str = DEFAULT_VIEWPORT,
    ):
        self._hidden = HiddenElementFilter(patterns.hidden_selectors)
        self._clutter = ClutterRemover(patterns.basic_clutter_selectors, patterns.clutter_patterns)
        self._locator = MainContentLocator(
            ContentScorer(patterns.positive_pattern, patterns.negative_pattern, patterns.block_elements),
            patterns.content_selectors,
        )
        self._sanitizer = AttributeSanitizer(patterns.allowed_attributes)
        self._simulate_mobile = simulate_mobile
        self._mobile_width = mobile_width
        self._viewport_content = viewport_content

    @classmethod
    def from_settings(cls, settings: TidySettings) -> "TidyPipeline":
        return cls(
            PatternTables.from_settings(settings),
            simulate_mobile=settings.simulate_mobile,
            mobile_width=settings.mobile_width,
            viewport_content=settings.mobile_viewport,
        )

    @property
    def mobile_width(self) -> int:
        return self._mobile_width

    @property
    def viewport_content(self) -> str:
        return self._viewport_content

    def extract(self, tree: Tag, style_resolver: StyleResolver) -> TidyResult | None:
        try:
            start_count = element_count(tree)
            logger.debug("tidy_started", element_count=start_count)

            if self._simulate_mobile and isinstance(tree, BeautifulSoup):
                simulate_mobile_viewport(
                    tree,
                    width=self._mobile_width,
                    viewport_content=self._viewport_content,
                )
                evaluate_media_queries(tree, width=self._mobile_width)

            self._hidden.filter_hidden(tree, style_resolver)
            self._clutter.remove_clutter(tree)

            main_content = self._locator.locate(tree)
            if main_content is None:
                logger.info("no_main_content")
                return None

            self._sanitizer.sanitize(main_content)

            final_count = element_count(main_content)
            logger.debug(
                "tidy_finished",
                final_element_count=final_count,
                elements_removed=start_count - final_count,
            )
            return TidyResult(content=str(main_content))
        except Exception:
            logger.exception("tidy_failed")
            return None
