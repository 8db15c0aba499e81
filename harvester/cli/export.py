"""CLI for harvesting a del.icio.us collection and exporting it.

Usage::

    # Harvest a user's bookmarks and print them as JSON
    python -m harvester.cli export --username alice

    # Archive every page while harvesting, and check every URL
    python -m harvester.cli export --username alice --write-to ./pages --verify-urls

    # Re-run offline against the archive, exporting a browser bookmark file
    python -m harvester.cli export --read-from ./pages --format html --output bookmarks.html

Configuration layers: config/config.yaml < HARVESTER_* env vars / .env <
command-line flags.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from harvester.config.loader import DEFAULT_CONFIG_PATH, build_settings, load_config
from harvester.config.settings import Settings
from harvester.utils.errors import HarvesterError
from harvester.utils.logging import configure_logging, get_logger


# ---------------------------------------------------------------------------
# Subcommand handlers
# ---------------------------------------------------------------------------


def _settings_from_args(args: argparse.Namespace) -> Settings:
    config = load_config(args.config)
    return build_settings(
        config,
        username=args.username,
        base_endpoint=args.base_endpoint,
        read_html_from_directory=args.read_from,
        write_html_to_directory=args.write_to,
        verify_urls=True if args.verify_urls else None,
        max_pages=args.max_pages,
        verbose=True if args.verbose else None,
    )


async def _handle_export(args: argparse.Namespace) -> int:
    """Harvest the collection and write it in the requested format."""
    from harvester.main import harvest
    from harvester.providers.progress.tqdm_progress import TqdmProgressSink
    from harvester.services.output_formatter import OutputFormatter

    try:
        settings = _settings_from_args(args)
    except HarvesterError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    configure_logging(settings.effective_log_level, json_output=args.json_logs)
    logger = get_logger(__name__)

    progress = TqdmProgressSink(disable=args.no_progress)
    try:
        result = await harvest(settings, progress=progress)
    except HarvesterError as exc:
        progress.finish()
        logger.error("harvest_failed", error=str(exc))
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    formatter = OutputFormatter()
    rendered = formatter.render(result, args.format)
    if args.output:
        Path(args.output).write_text(rendered, encoding="utf-8")
    else:
        sys.stdout.write(rendered)

    summary = formatter.summarize(result)
    print(
        f"Harvested {summary['items']:,} bookmarks from {summary['pages']:,} page(s) "
        f"(announced: {summary['total_elements']:,})",
        file=sys.stderr,
    )
    for outcome, count in summary["url_outcomes"].items():
        print(f"  url {outcome}: {count:,}", file=sys.stderr)
    if args.output:
        print(f"Wrote {args.format} export to {args.output}", file=sys.stderr)
    return 0


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the harvester CLI."""
    parser = argparse.ArgumentParser(
        prog="python -m harvester.cli",
        description="Harvest a paginated del.icio.us bookmark collection.",
    )
    subparsers = parser.add_subparsers(dest="command", help="Harvester commands")

    # -- export --
    export_parser = subparsers.add_parser("export", help="Harvest and export a collection")
    export_parser.add_argument("--username", help="Account whose bookmarks are harvested")
    export_parser.add_argument(
        "--base-endpoint",
        help="Bookmark service base URL (default: https://del.icio.us)",
    )
    export_parser.add_argument(
        "--read-from",
        metavar="DIR",
        help="Replay pages from DIR instead of fetching them",
    )
    export_parser.add_argument(
        "--write-to",
        metavar="DIR",
        help="Archive every fetched page into DIR (created if missing)",
    )
    export_parser.add_argument(
        "--verify-urls",
        action="store_true",
        help="Check every bookmarked URL for reachability",
    )
    export_parser.add_argument(
        "--max-pages",
        type=int,
        default=None,
        help="Abort if the page chain is longer than this",
    )
    export_parser.add_argument(
        "--format",
        choices=("json", "html"),
        default="json",
        help="Output format (default: json)",
    )
    export_parser.add_argument("--output", "-o", help="Write the export here instead of stdout")
    export_parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help=f"YAML config file (default: {DEFAULT_CONFIG_PATH})",
    )
    export_parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Do not draw progress bars",
    )
    export_parser.add_argument("--verbose", "-v", action="store_true", help="Diagnostic logging")
    export_parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON")

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the harvester."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "export":
        exit_code = asyncio.run(_handle_export(args))
    else:
        parser.print_help()
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
