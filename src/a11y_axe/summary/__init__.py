"""Severity-ranked digests of axe results."""

from a11y_axe.summary.schemas import ScanResult, ViolationRecord
from a11y_axe.summary.summarizer import (
    SummaryDigest,
    TopIssue,
    parse_scan_result,
    render_digest,
    summarize,
)

__all__ = [
    "ScanResult",
    "SummaryDigest",
    "TopIssue",
    "ViolationRecord",
    "parse_scan_result",
    "render_digest",
    "summarize",
]
