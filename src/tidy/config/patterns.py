"""Classification and removal tables used by the extraction pipeline.

The tables are plain data: each one can be swapped without touching the
pipeline code (pass a custom ``PatternTables`` or override the matching
setting in the environment).
"""

from __future__ import annotations

from dataclasses import dataclass, field

POSITIVE_PATTERN = r"article|content|main|post|body|text|blog|story"
NEGATIVE_PATTERN = r"comment|meta|footer|footnote|foot|nav|sidebar|banner|ad|popup|menu"

BLOCK_ELEMENTS = ("div", "section", "article", "main")

HIDDEN_SELECTORS = (
    '[aria-hidden="true"]',
    "[hidden]",
    '[style*="display: none"]',
    '[style*="display:none"]',
    '[style*="visibility: hidden"]',
    '[style*="visibility:hidden"]',
    ".hidden",
    ".invisible",
)

BASIC_CLUTTER_SELECTORS = (
    "#toc",
    ".toc",
    "#comments",
    ".Ad",
    ".ad",
    "aside",
    "button",
    "fieldset",
    "footer",
    "form",
    "header",
    "input",
    "iframe",
    "label",
    "link",
    "nav",
    "noscript",
    "option",
    "select",
    "sidebar",
    "textarea",
    "[class^='ad-']",
    '[class$="-ad"]',
    "[id^='ad-']",
    '[id$="-ad"]',
    '[role="banner"]',
    '[role="complementary"]',
    '[role="navigation"]',
    '[role="toolbar"]',
)

# Matched as lowercase substrings of class, id and data-testid
CLUTTER_PATTERNS = (
    "avatar",
    "-ad-",
    "_ad_",
    "author",
    "banner",
    "breadcrumb",
    "byline",
    "comments",
    "complementary",
    "feedback",
    "fixed",
    "footer",
    "global",
    "header",
    "hide-",
    "metadata",
    "navbar",
    "navigation",
    "popular",
    "profile",
    "promo",
    "read-next",
    "reading-list",
    "recommend",
    "register",
    "related",
    "share",
    "sidebar",
    "social",
    "sticky",
    "subscribe",
    "toolbar",
    "top",
)

ALLOWED_ATTRIBUTES = (
    "href",
    "src",
    "srcset",
    "data-src",
    "data-srcset",
    "alt",
    "title",
    "id",
    "class",
    "width",
    "height",
    "colspan",
    "rowspan",
    "headers",
    "aria-label",
    "role",
    "lang",
)

# Tags the user-agent stylesheet renders as display: none
HIDDEN_BY_DEFAULT_TAGS = (
    "base",
    "head",
    "link",
    "meta",
    "script",
    "style",
    "template",
    "title",
)

# Priority order: the first selector with a match wins
CONTENT_SELECTORS = (
    "body",
    'main[role="main"]',
    '[role="article"]',
    "article",
    '[itemprop="articleBody"]',
    ".post-content",
    ".article-content",
    "#article-content",
    ".content-article",
)


@dataclass(frozen=True)
class PatternTables:
    positive_pattern: str = POSITIVE_PATTERN
    negative_pattern: str = NEGATIVE_PATTERN
    block_elements: tuple[str, ...] = BLOCK_ELEMENTS
    hidden_selectors: tuple[str, ...] = HIDDEN_SELECTORS
    basic_clutter_selectors: tuple[str, ...] = BASIC_CLUTTER_SELECTORS
    clutter_patterns: tuple[str, ...] = CLUTTER_PATTERNS
    allowed_attributes: frozenset[str] = field(default_factory=lambda: frozenset(ALLOWED_ATTRIBUTES))
    content_selectors: tuple[str, ...] = CONTENT_SELECTORS

    @classmethod
    def from_settings(cls, settings) -> "PatternTables":
        """Build tables from ``TidySettings`` (environment overrides included)."""
        return cls(
            positive_pattern=settings.positive_pattern,
            negative_pattern=settings.negative_pattern,
            block_elements=tuple(t.lower() for t in settings.block_elements),
            hidden_selectors=tuple(settings.hidden_selectors),
            basic_clutter_selectors=tuple(settings.basic_clutter_selectors),
            clutter_patterns=tuple(p.lower() for p in settings.clutter_patterns),
            allowed_attributes=frozenset(a.lower() for a in settings.allowed_attributes),
            content_selectors=tuple(settings.content_selectors),
        )


DEFAULT_PATTERNS = PatternTables()
