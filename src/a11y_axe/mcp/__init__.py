"""MCP server exposing the scan tools."""

from a11y_axe.mcp.server import configure, get_scanner, mcp

__all__ = ["configure", "get_scanner", "mcp"]
