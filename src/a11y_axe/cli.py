"""CLI entry point: ``a11y-axe scan`` and ``a11y-axe mcp``."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

from a11y_axe import __version__
from a11y_axe.config import Settings
from a11y_axe.constants import Level, Ruleset
from a11y_axe.logging_config import setup_logging
from a11y_axe.resilience.errors import ScanError


def main() -> None:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args()

    if args.version:
        print(f"a11y-axe {__version__}")
        return

    settings = Settings()
    setup_logging(settings.log_level)

    if args.command == "scan":
        _run_scan(args, settings)
    elif args.command == "mcp":
        _run_mcp(args, settings)
    else:
        parser.print_help()


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="a11y-axe",
        description=(
            "axe-core accessibility scans in headless Chromium, "
            "as a CLI or an MCP server."
        ),
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )

    sub = parser.add_subparsers(dest="command")

    scan = sub.add_parser(
        "scan",
        help="Scan one or more URLs",
    )
    scan.add_argument(
        "urls",
        nargs="+",
        help="URL(s) to scan; more than one runs a batch",
    )
    scan.add_argument(
        "--ruleset",
        "-r",
        choices=[r.value for r in Ruleset],
        default=None,
        help="WCAG version (default: wcag22)",
    )
    scan.add_argument(
        "--level",
        "-l",
        choices=[lv.value for lv in Level],
        default=None,
        help="Conformance level (default: AA)",
    )
    scan.add_argument(
        "--tag",
        "-t",
        action="append",
        dest="tags",
        default=None,
        help="Extra axe tag to run (repeatable)",
    )
    scan.add_argument(
        "--summary",
        "-s",
        action="store_true",
        help="Print the ranked digest instead of raw JSON",
    )

    mcp_parser = sub.add_parser(
        "mcp",
        help="Start MCP server",
    )
    mcp_parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default="stdio",
        help="Transport protocol (default: stdio)",
    )
    mcp_parser.add_argument(
        "--host",
        default="127.0.0.1",
        help=(
            "Bind address for SSE transport "
            "(default: 127.0.0.1)"
        ),
    )
    mcp_parser.add_argument(
        "--port",
        type=int,
        default=8001,
        help="Port for SSE transport (default: 8001)",
    )

    return parser


def _run_scan(args: argparse.Namespace, settings: Settings) -> None:
    """Execute the scan command."""
    from a11y_axe.scanning.requests import parse_request
    from a11y_axe.scanning.scanner import Scanner
    from a11y_axe.summary.summarizer import (
        parse_scan_result,
        render_digest,
        summarize,
    )

    data: dict[str, object] = (
        {"kind": "url", "url": args.urls[0]}
        if len(args.urls) == 1
        else {"kind": "batch", "urls": args.urls}
    )
    if args.ruleset:
        data["ruleset"] = args.ruleset
    if args.level:
        data["level"] = args.level
    if args.tags:
        data["extraTags"] = args.tags

    try:
        request = parse_request(data)
        result = asyncio.run(Scanner(settings).scan(request))
    except ScanError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    if not args.summary:
        print(json.dumps(result, indent=2))
        return

    prefer = args.ruleset or Ruleset.WCAG22
    entries = (
        [{"url": args.urls[0], "results": result}]
        if isinstance(result, dict)
        else result
    )
    for entry in entries:
        print(f"# {entry['url']}\n")
        if "error" in entry:
            print(f"Error: {entry['error']}\n")
            continue
        digest = summarize(parse_scan_result(entry["results"]))
        print(render_digest(digest, prefer) + "\n")


def _run_mcp(args: argparse.Namespace, settings: Settings) -> None:
    """Start the MCP server."""
    from a11y_axe.logger import ScanLogger
    from a11y_axe.mcp import configure, mcp

    configure(
        settings,
        scan_logger=ScanLogger(settings.log_dir, settings.log_level),
    )
    if args.transport == "stdio":
        mcp.run(transport="stdio")
    else:
        mcp.run(transport="sse", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
