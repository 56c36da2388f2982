"""Framework-agnostic domain models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from bs4 import Tag


class ErrorCode(str, Enum):
    RENDER_TIMEOUT = "RENDER_TIMEOUT"
    RENDER_ERROR = "RENDER_ERROR"
    NO_MAIN_CONTENT = "NO_MAIN_CONTENT"


@dataclass(frozen=True)
class ResolvedStyle:
    """Post-cascade values the hidden-element filter cares about."""

    display: str = "block"
    visibility: str = "visible"
    opacity: str = "1"

    @property
    def is_hidden(self) -> bool:
        return self.display == "none" or self.visibility == "hidden" or self.opacity == "0"


@dataclass(frozen=True)
class ContentScore:
    element: Tag
    score: int


@dataclass(frozen=True)
class ClutterStats:
    basic_count: int
    pattern_count: int

    @property
    def total(self) -> int:
        return self.basic_count + self.pattern_count


@dataclass(frozen=True)
class TidyResult:
    content: str
