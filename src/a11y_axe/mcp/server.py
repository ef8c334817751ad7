"""MCP server: FastMCP instance with configure/run helpers."""

from __future__ import annotations

from fastmcp import FastMCP

from a11y_axe import __version__
from a11y_axe.browser.session import Launcher
from a11y_axe.config import Settings
from a11y_axe.logger import ScanLogger
from a11y_axe.mcp.prompts import register_prompts
from a11y_axe.mcp.resources import register_resources
from a11y_axe.mcp.tools import register_tools
from a11y_axe.scanning.scanner import Scanner

mcp = FastMCP(
    name="a11y-axe",
    version=__version__,
    instructions=(
        "Runs axe-core accessibility scans in headless Chromium "
        "and summarizes the results against WCAG 2.2 / 2.1"
    ),
)

_scanner: Scanner | None = None
_scan_logger: ScanLogger | None = None

register_tools(mcp)
register_resources(mcp)
register_prompts(mcp)


def configure(
    settings: Settings,
    launcher: Launcher | None = None,
    scan_logger: ScanLogger | None = None,
) -> None:
    """Build the scanner used by MCP tools.

    Must be called before serving requests.
    """
    global _scanner, _scan_logger  # noqa: PLW0603
    _scan_logger = scan_logger
    _scanner = Scanner(
        settings, launcher=launcher, scan_logger=scan_logger
    )


def get_scanner() -> Scanner:
    """Get the configured scanner."""
    if _scanner is None:
        msg = (
            "MCP server not configured. "
            "Call configure(settings) first."
        )
        raise RuntimeError(msg)
    return _scanner


def get_scan_logger() -> ScanLogger | None:
    """Get the structured scan logger (if set)."""
    return _scan_logger
