"""a11y-axe: axe-core accessibility scans over MCP."""

__version__ = "0.1.0"
