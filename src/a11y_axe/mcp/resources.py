"""MCP resource definitions: WCAG success-criterion reference links."""

# pyright: reportUnusedFunction=false
# All functions are registered via @mcp.resource decorator

from __future__ import annotations

import json
import re

from fastmcp import FastMCP
from fastmcp.exceptions import ResourceError

from a11y_axe.axe.standards import reference_links
from a11y_axe.constants import DEFAULT_RULESET, Ruleset

_SC_ID = re.compile(r"^\d\.\d\.\d$")


def register_resources(mcp: FastMCP) -> None:
    """Register both MCP resources."""

    @mcp.resource("wcag://sc/{sc_id}")
    async def success_criterion(sc_id: str) -> str:
        """Spec, quick-reference and understanding links (WCAG 2.2)."""
        return _links_json(sc_id, DEFAULT_RULESET)

    @mcp.resource("wcag://sc/{sc_id}/{version}")
    async def success_criterion_version(
        sc_id: str, version: str
    ) -> str:
        """Reference links for a success criterion in wcag22 or wcag21."""
        if version not in set(Ruleset):
            raise ResourceError(
                f"Unknown WCAG version '{version}'. "
                f"Valid: {', '.join(Ruleset)}"
            )
        return _links_json(sc_id, version)


def _links_json(sc_id: str, prefer: str) -> str:
    if not _SC_ID.match(sc_id):
        raise ResourceError(
            f"'{sc_id}' is not a success criterion id like 1.4.3"
        )
    return json.dumps(reference_links(sc_id, prefer).to_dict(), indent=2)
