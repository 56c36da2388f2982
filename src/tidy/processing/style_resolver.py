"""Style resolution for the hidden-element filter.

The filter never computes styles itself; it asks a ``StyleResolver``. Two
resolvers ship here:

- ``InlineStyleResolver`` reads the element's own ``style`` attribute. Combined
  with media-query materialization (see ``processing.mobile``) this covers the
  common "hidden on mobile" rules without a browser.
- ``SnapshotStyleResolver`` answers from styles computed elsewhere (e.g. by the
  Playwright probe), keyed by an element marker attribute.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Protocol

from bs4 import Tag

from ..config.patterns import HIDDEN_BY_DEFAULT_TAGS
from ..domain.errors import StyleResolutionError
from ..domain.models import ResolvedStyle

STYLE_MARKER_ATTR = "data-tidy-idx"


class StyleResolver(Protocol):
    def resolve(self, element: Tag) -> ResolvedStyle: ...


def parse_declarations(style: str) -> dict[str, str]:
    """Parse ``a: b; c: d`` into a dict. Later declarations win, ``!important`` is dropped."""
    out: dict[str, str] = {}
    for part in (style or "").split(";"):
        if ":" not in part:
            continue
        name, value = part.split(":", 1)
        name = name.strip().lower()
        value = value.replace("!important", "").strip().lower()
        if name and value:
            out[name] = value
    return out


def normalize_opacity(value: str) -> str:
    try:
        number = float(value.rstrip("%"))
    except ValueError:
        return value
    if number <= 0:
        return "0"
    return value


class InlineStyleResolver:
    """Inline ``style`` over the user-agent defaults.

    Tags the browser never renders (``script``, ``style``, ``head`` ...) and a
    ``dialog`` without ``open`` resolve to ``display: none`` unless their
    inline style sets ``display``.
    """

    def __init__(
        self,
        defaults: ResolvedStyle | None = None,
        hidden_tags: Iterable[str] = HIDDEN_BY_DEFAULT_TAGS,
    ):
        self._defaults = defaults or ResolvedStyle()
        self._hidden_tags = frozenset(t.lower() for t in hidden_tags)

    def _default_display(self, element: Tag) -> str:
        name = (element.name or "").lower()
        if name in self._hidden_tags:
            return "none"
        if name == "dialog" and not element.has_attr("open"):
            return "none"
        return self._defaults.display

    def resolve(self, element: Tag) -> ResolvedStyle:
        decls = parse_declarations(str(element.get("style") or ""))
        return ResolvedStyle(
            display=decls.get("display", self._default_display(element)),
            visibility=decls.get("visibility", self._defaults.visibility),
            opacity=normalize_opacity(decls.get("opacity", self._defaults.opacity)),
        )


class SnapshotStyleResolver:
    def __init__(self, styles: Mapping[str, ResolvedStyle], *, marker_attr: str = STYLE_MARKER_ATTR):
        self._styles = dict(styles)
        self._marker_attr = marker_attr
        self._keys: dict[int, str] = {}

    def bind(self, element: Tag, key: str) -> None:
        """Associate ``element`` with a snapshot key once its marker attribute is gone."""
        self._keys[id(element)] = key

    def resolve(self, element: Tag) -> ResolvedStyle:
        key = self._keys.get(id(element)) or element.get(self._marker_attr)
        if key is None or key not in self._styles:
            raise StyleResolutionError("no computed style for element", detail=element.name)
        return self._styles[key]

    def __len__(self) -> int:
        return len(self._styles)
