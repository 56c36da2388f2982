"""Domain-specific errors.

These errors are mapped to HTTP status codes in the FastAPI layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class TidyDomainError(Exception):
    """Base class for all domain errors."""


@dataclass(frozen=True)
class DomainErrorInfo:
    code: str
    message: str
    detail: Optional[str] = None


class StyleResolutionError(TidyDomainError):
    """Raised by a style resolver that cannot answer for an element."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.info = DomainErrorInfo(code="STYLE_RESOLUTION_ERROR", message=message, detail=detail)


class RenderTimeoutError(TidyDomainError):
    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.info = DomainErrorInfo(code="RENDER_TIMEOUT", message=message, detail=detail)


class RenderError(TidyDomainError):
    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.info = DomainErrorInfo(code="RENDER_ERROR", message=message, detail=detail)
