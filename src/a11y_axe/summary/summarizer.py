"""Reduce an axe result to a ranked, human-readable digest.

Only critical and serious violations are listed, in the order the engine
reported them; nothing is re-sorted by impact. Every violation still
counts toward the total. The digest is rebuilt on each call from
whatever payload is supplied, including results produced elsewhere.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from a11y_axe.axe.standards import ids_from_tags, reference_links
from a11y_axe.constants import (
    DEFAULT_RULESET,
    NO_TOP_ISSUES_MESSAGE,
    TOP_IMPACTS,
)
from a11y_axe.resilience.errors import ResultParseError
from a11y_axe.summary.schemas import ScanResult


@dataclass(frozen=True)
class TopIssue:
    title: str
    impact: str
    description: str
    wcag: list[str]
    help_url: str
    node_count: int


@dataclass(frozen=True)
class SummaryDigest:
    total_violations: int
    top_issues: list[TopIssue]

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_violations": self.total_violations,
            "top_issues": [
                {
                    "title": i.title,
                    "impact": i.impact,
                    "description": i.description,
                    "wcag": i.wcag,
                    "help_url": i.help_url,
                    "node_count": i.node_count,
                }
                for i in self.top_issues
            ],
        }


def parse_scan_result(payload: str | Mapping[str, Any]) -> ScanResult:
    """Read a serialized (or already decoded) axe result.

    Raises ``ResultParseError`` when the payload is not JSON or lacks the
    shape of a single scan result.
    """
    data: Any = payload
    if isinstance(payload, str):
        try:
            data = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise ResultParseError(
                f"not valid JSON ({exc.msg} at char {exc.pos})",
                step="parse results",
            ) from exc
    if isinstance(data, list):
        raise ResultParseError(
            "expected a single scan result object, got a list; "
            "summarize each batch entry's results separately",
            step="parse results",
        )
    try:
        return ScanResult.model_validate(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        loc = ".".join(str(p) for p in first["loc"]) or "results"
        raise ResultParseError(
            f"{loc}: {first['msg']}", step="parse results"
        ) from exc


def summarize(result: ScanResult) -> SummaryDigest:
    """Count all violations and keep the critical/serious ones in order."""
    top = [
        TopIssue(
            title=v.help_text or v.rule_id,
            impact=str(v.impact),
            description=v.description,
            wcag=ids_from_tags(v.tags),
            help_url=v.help_url,
            node_count=len(v.nodes),
        )
        for v in result.violations
        if v.impact in TOP_IMPACTS
    ]
    return SummaryDigest(
        total_violations=len(result.violations), top_issues=top
    )


def render_digest(
    digest: SummaryDigest, prefer: str = DEFAULT_RULESET
) -> str:
    """Render ``digest`` as Markdown with WCAG quick-reference links."""
    lines = [
        "## Accessibility summary",
        "",
        f"Total violations: {digest.total_violations}",
        "",
    ]
    if not digest.top_issues:
        lines.append(NO_TOP_ISSUES_MESSAGE)
        return "\n".join(lines)

    lines.append("### Top issues (critical / serious)")
    lines.append("")
    for i, issue in enumerate(digest.top_issues, 1):
        lines.append(f"{i}. **{issue.title}** ({issue.impact})")
        if issue.description:
            lines.append(f"   {issue.description}")
        if issue.wcag:
            links = ", ".join(
                f"[{sc}]({reference_links(sc, prefer).quickref_url})"
                for sc in issue.wcag
            )
            lines.append(f"   WCAG: {links}")
        if issue.help_url:
            lines.append(f"   Help: {issue.help_url}")
        lines.append(f"   Affected nodes: {issue.node_count}")
    return "\n".join(lines)
