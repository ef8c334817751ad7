"""MCP tool definitions: five scan strategies plus summarize_results."""

# pyright: reportUnusedFunction=false
# All functions are registered via @mcp.tool decorator
# ruff: noqa: N803
# Tool arguments keep their camelCase wire names

from __future__ import annotations

import json
import logging
import time
import uuid
from typing import Any, Literal

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from a11y_axe.constants import ID_HEX_LENGTH
from a11y_axe.resilience.errors import ScanError
from a11y_axe.scanning.requests import parse_request
from a11y_axe.summary.summarizer import (
    parse_scan_result,
    render_digest,
    summarize,
)

logger = logging.getLogger(__name__)

RulesetArg = Literal["wcag22", "wcag21"] | None
LevelArg = Literal["A", "AA", "AAA"] | None


def register_tools(mcp: FastMCP) -> None:
    """Register all 6 MCP tools."""

    @mcp.tool()
    async def scan_url(
        url: str,
        ruleset: RulesetArg = None,
        level: LevelArg = None,
        extraTags: list[str] | None = None,
    ) -> str:
        """Run axe-core on a URL.

        Returns the raw axe result as JSON.
        """
        return await _run_scan(
            "scan_url",
            {"kind": "url", "url": url},
            ruleset,
            level,
            extraTags,
        )

    @mcp.tool()
    async def scan_html(
        html: str,
        ruleset: RulesetArg = None,
        level: LevelArg = None,
        extraTags: list[str] | None = None,
    ) -> str:
        """Run axe-core on raw HTML."""
        return await _run_scan(
            "scan_html",
            {"kind": "html", "html": html},
            ruleset,
            level,
            extraTags,
        )

    @mcp.tool()
    async def scan_file(
        path: str,
        ruleset: RulesetArg = None,
        level: LevelArg = None,
        extraTags: list[str] | None = None,
    ) -> str:
        """Run axe-core on a local HTML file."""
        return await _run_scan(
            "scan_file",
            {"kind": "file", "path": path},
            ruleset,
            level,
            extraTags,
        )

    @mcp.tool()
    async def scan_batch(
        urls: list[str],
        ruleset: RulesetArg = None,
        level: LevelArg = None,
        extraTags: list[str] | None = None,
    ) -> str:
        """Run axe-core on multiple URLs, one after another.

        Returns one {url, results} or {url, error} entry per URL,
        in request order.
        """
        return await _run_scan(
            "scan_batch",
            {"kind": "batch", "urls": urls},
            ruleset,
            level,
            extraTags,
        )

    @mcp.tool()
    async def scan_with_login(
        url: str,
        loginUrl: str,
        username: str,
        password: str,
        usernameSelector: str,
        passwordSelector: str,
        submitSelector: str,
        ruleset: RulesetArg = None,
        level: LevelArg = None,
        extraTags: list[str] | None = None,
    ) -> str:
        """Log in through a form, then run axe-core on a URL.

        Login is assumed to have worked once the submit click
        navigates; the authenticated state is not verified.
        """
        return await _run_scan(
            "scan_with_login",
            {
                "kind": "authenticated",
                "url": url,
                "loginUrl": loginUrl,
                "username": username,
                "password": password,
                "usernameSelector": usernameSelector,
                "passwordSelector": passwordSelector,
                "submitSelector": submitSelector,
            },
            ruleset,
            level,
            extraTags,
        )

    @mcp.tool()
    async def summarize_results(results: str) -> str:
        """Summarize a scan_url/scan_html/scan_file result.

        Lists critical and serious violations with their WCAG
        success criteria; the total counts every violation.
        """
        try:
            parsed = parse_scan_result(results)
        except ScanError as exc:
            raise ToolError(str(exc)) from exc
        return render_digest(summarize(parsed))


async def _run_scan(
    tool: str,
    data: dict[str, Any],
    ruleset: str | None,
    level: str | None,
    extra_tags: list[str] | None,
) -> str:
    """Validate, run and serialize one scan request."""
    from a11y_axe.mcp.server import get_scan_logger, get_scanner

    # Omitted options fall back to the request model defaults
    options = {
        "ruleset": ruleset,
        "level": level,
        "extraTags": extra_tags,
    }
    data.update({k: v for k, v in options.items() if v is not None})

    scanner = get_scanner()
    scan_logger = get_scan_logger()
    request_id = uuid.uuid4().hex[:ID_HEX_LENGTH]
    start = time.monotonic()
    try:
        request = parse_request(data)
        result = await scanner.scan(request, request_id)
    except ScanError as exc:
        logger.warning(
            "event=scan_failed tool=%s request_id=%s error=%s",
            tool,
            request_id,
            exc,
        )
        if scan_logger is not None:
            scan_logger.log_error(request_id, tool, str(exc))
        raise ToolError(str(exc)) from exc

    duration_ms = (time.monotonic() - start) * 1000
    if scan_logger is not None:
        scan_logger.log_scan(
            request_id,
            tool,
            request.target,
            _violation_count(result),
            duration_ms,
        )
    return json.dumps(result)


def _violation_count(
    result: dict[str, Any] | list[dict[str, Any]],
) -> int:
    if isinstance(result, dict):
        return len(result.get("violations", []))
    return sum(
        len(entry["results"].get("violations", []))
        for entry in result
        if "results" in entry
    )
