"""Command-line interface for site-analyzer."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace

from site_analyzer.analyzer import TOTAL_STEPS, analyze_sync
from site_analyzer.config import Settings
from site_analyzer.errors import AnalysisError

LINE = "=" * 60


def _out(msg: str = "") -> None:
    """Print a status message to stderr so it doesn't mix with JSON output."""
    print(msg, file=sys.stderr, flush=True)


def _progress(step: int, total: int, message: str) -> None:
    _out(f"  [{step}/{total}] {message}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="site-analyzer",
        description="Analyze a website's stack, design and structure, and generate a starter recreation.",
    )
    parser.add_argument("url", help="Website URL to analyze (https:// is added when missing)")
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Output file path (default: stdout)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--no-render",
        action="store_true",
        help="Skip the headless-browser screenshot tier",
    )
    parser.add_argument(
        "--no-screenshot-data",
        action="store_true",
        help="Omit the screenshot data URI from the JSON output",
    )
    parser.add_argument(
        "--relay-delay",
        type=float,
        default=None,
        help="Seconds to wait between relay attempts (default: 1.0)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    settings = Settings.from_env()

    # Apply CLI overrides
    overrides = {}
    if args.no_render:
        overrides["render_enabled"] = False
    if args.relay_delay is not None:
        overrides["relay_delay"] = args.relay_delay
    if overrides:
        settings = replace(settings, **overrides)

    _out(LINE)
    _out(f"  Analyzing {args.url} ({TOTAL_STEPS} steps)")
    _out(LINE)

    try:
        result = analyze_sync(args.url, on_progress=_progress, settings=settings)
    except AnalysisError as exc:
        _out(f"  [!] {exc.user_message}")
        for reason in exc.reasons:
            _out(f"      - {reason}")
        _out("  Suggestions:")
        for suggestion in exc.suggestions:
            _out(f"      * {suggestion}")
        return 1

    exclude = {"screenshot": {"data_uri"}} if args.no_screenshot_data else None
    output = json.dumps(result.model_dump(mode="json", exclude=exclude), indent=2, ensure_ascii=False)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output)
        _out(f"Output written to {args.output}")
    else:
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
