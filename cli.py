#!/usr/bin/env python3
"""
CLI tool for turning a website into an Alai presentation.

Exit codes: 0 when the presentation was published (even if some slides
failed), 1 when the pipeline failed, 2 when credentials are missing.
"""

import argparse
import asyncio
import json
import sys

from pagedeck.configs.config import config
from pagedeck.configs.logging_config import setup_logging
from pagedeck.console import get_console, get_err_console, report_table
from pagedeck.core.errors import PageDeckError
from pagedeck.pipeline.coordinator import create_presentation_from_website

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Create a shareable Alai presentation from a web page",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cli.py github.com                      # Build a deck and print its share link
  cli.py example.com --slide-range 3-6   # Ask for a different outline size
  cli.py example.com --json              # Print the per-slide report as JSON
        """,
    )
    parser.add_argument("url", help="Page to build the presentation from")
    parser.add_argument("--title", help="Presentation title")
    parser.add_argument(
        "--slide-range", help=f"Outline size hint (default: {config.slide_range})"
    )
    parser.add_argument("--log-level", help=f"Log level (default: {config.log_level})")
    parser.add_argument("--log-file", help="Also write logs to this file in LOG_DIR")
    parser.add_argument(
        "--json", action="store_true", help="Print the report as JSON on stdout"
    )
    return parser


async def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI tool."""
    args = build_parser().parse_args(argv)
    setup_logging(log_level=args.log_level, log_file=args.log_file)
    err_console = get_err_console()

    missing = config.missing_credentials()
    if missing:
        err_console.print(
            f"[bold red]Missing environment variables:[/] {', '.join(missing)}"
        )
        return EXIT_CONFIG

    try:
        report = await create_presentation_from_website(
            args.url, title=args.title, slide_range=args.slide_range
        )
    except PageDeckError as e:
        err_console.print("[bold red]Failed to create presentation[/]")
        err_console.print(f"  {e}")
        return EXIT_FAILED

    console = get_console()
    if args.json:
        console.print_json(json.dumps(report.to_dict()))
        return EXIT_OK

    if report.outcomes:
        console.print(report_table(report))
    console.print(
        f"{len(report.succeeded)}/{len(report.outcomes)} slides rendered. "
        f"Share URL: {report.share_url}",
        soft_wrap=True,
    )
    return EXIT_OK


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
