"""Command-line interface: print the digest of an HTML file as JSON."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .engine.config import load_config
from .engine.errors import DigestError
from .log_config import configure_logging
from .services import analyze_html

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="digester",
        description="Summarize an HTML page and list the action items it contains.",
    )
    parser.add_argument("source", help="HTML file to analyze, or '-' to read standard input")
    parser.add_argument("--url", default=None, help="Original page URL, used to resolve relative links")
    parser.add_argument("--config", default=None, help="YAML file overriding engine defaults")
    parser.add_argument("--log-level", default=None, help="Logging level (default: $DIGESTER_LOG_LEVEL or INFO)")
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation (default: 2)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        html = _read_source(args.source)
    except OSError as exc:
        print(f"Error: cannot read {args.source}: {exc}", file=sys.stderr)
        return 1

    logger.debug("Analyzing %s", args.source)
    config = load_config(args.config) if args.config else None
    try:
        payload = analyze_html(html, args.url, config)
    except DigestError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(payload, indent=args.indent, ensure_ascii=False))
    return 0


def _read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8", errors="replace")
