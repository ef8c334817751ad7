"""MCP prompt definitions: common accessibility audit workflows."""

# pyright: reportUnusedFunction=false
# All functions are registered via @mcp.prompt decorator

from __future__ import annotations

from fastmcp import FastMCP


def register_prompts(mcp: FastMCP) -> None:
    """Register both MCP prompts."""

    @mcp.prompt()
    async def audit_page(url: str, level: str = "AA") -> str:
        """Scan a page and report its worst accessibility problems."""
        return (
            f"# Accessibility audit for {url}\n\n"
            f"1. Call `scan_url` with url={url} and level={level}.\n"
            "2. Pass the JSON it returns to `summarize_results`.\n"
            "3. Report the total violation count and, for each top "
            "issue, the affected WCAG success criteria and how many "
            "elements are involved."
        )

    @mcp.prompt()
    async def compare_pages(urls: str) -> str:
        """Batch-scan a comma-separated list of pages and compare them."""
        targets = [u.strip() for u in urls.split(",") if u.strip()]
        listing = "\n".join(f"- {u}" for u in targets)
        return (
            "# Accessibility comparison\n\n"
            f"Pages:\n{listing}\n\n"
            "1. Call `scan_batch` with these urls.\n"
            "2. For every entry that has `results`, call "
            "`summarize_results` on it; list entries with `error` "
            "separately.\n"
            "3. Rank the pages by number of critical and serious issues."
        )
