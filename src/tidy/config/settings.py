"""Configuration management using Pydantic Settings."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from .patterns import (
    ALLOWED_ATTRIBUTES,
    BASIC_CLUTTER_SELECTORS,
    BLOCK_ELEMENTS,
    CLUTTER_PATTERNS,
    CONTENT_SELECTORS,
    HIDDEN_SELECTORS,
    NEGATIVE_PATTERN,
    POSITIVE_PATTERN,
)


class TidySettings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Service
    service_name: str = "tidy-reader-service"

    # FastAPI
    http_enable: bool = True
    http_host: str = "127.0.0.1"
    http_port: int = 8000

    # Mobile preprocessing (viewport meta + max-width media queries)
    simulate_mobile: bool = True
    mobile_width: int = 600
    mobile_viewport: str = "width=device-width, initial-scale=1, maximum-scale=1"

    # Browser style probe (computed styles via headless Chromium)
    render_timeout_ms: int = 30000
    render_user_agent: str = "TidyReader/0.1.0"

    # Pattern tables
    positive_pattern: str = POSITIVE_PATTERN
    negative_pattern: str = NEGATIVE_PATTERN
    block_elements: list[str] = list(BLOCK_ELEMENTS)
    hidden_selectors: list[str] = list(HIDDEN_SELECTORS)
    basic_clutter_selectors: list[str] = list(BASIC_CLUTTER_SELECTORS)
    clutter_patterns: list[str] = list(CLUTTER_PATTERNS)
    allowed_attributes: list[str] = list(ALLOWED_ATTRIBUTES)
    content_selectors: list[str] = list(CONTENT_SELECTORS)

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def validate(self) -> None:
        if self.http_port <= 0:
            raise ValueError("http_port must be > 0")
        if self.mobile_width <= 0:
            raise ValueError("mobile_width must be > 0")
        if self.render_timeout_ms <= 0:
            raise ValueError("render_timeout_ms must be > 0")
        if not self.block_elements:
            raise ValueError("block_elements must not be empty")


_settings: TidySettings | None = None


def get_settings() -> TidySettings:
    global _settings
    if _settings is None:
        _settings = TidySettings()
        _settings.validate()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None
