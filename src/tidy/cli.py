"""Command-line extraction: ``tidy-extract page.html > article.html``."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from bs4 import BeautifulSoup

from .config.settings import get_settings
from .domain.errors import TidyDomainError
from .lifespan import build_app_state
from .observability.logger import configure_logging
from .processing.style_resolver import InlineStyleResolver


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tidy-extract", description="Print the main content of an HTML file.")
    parser.add_argument("path", help="HTML file to read, or '-' for stdin")
    parser.add_argument(
        "--render-styles",
        action="store_true",
        help="compute styles in headless Chromium instead of reading inline styles",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(sys.stderr)

    if args.path == "-":
        html = sys.stdin.read()
    else:
        html = Path(args.path).read_text(encoding="utf-8", errors="replace")

    state = build_app_state(get_settings())
    soup = BeautifulSoup(html, "lxml")

    if args.render_styles:
        try:
            resolver = asyncio.run(state["style_probe"].snapshot(soup))
        except TidyDomainError as e:
            print(f"Style rendering failed: {e}", file=sys.stderr)
            return 2
    else:
        resolver = InlineStyleResolver()

    result = state["pipeline"].extract(soup, resolver)
    if result is None:
        print("No main content found", file=sys.stderr)
        return 1

    print(result.content)
    return 0


if __name__ == "__main__":
    sys.exit(main())
