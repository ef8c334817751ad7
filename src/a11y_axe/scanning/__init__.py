"""Scan requests and the strategies that execute them."""

from a11y_axe.scanning.requests import (
    AuthenticatedScan,
    BatchScan,
    FileScan,
    HtmlScan,
    ScanRequest,
    UrlScan,
    parse_request,
)
from a11y_axe.scanning.scanner import Scanner

__all__ = [
    "AuthenticatedScan",
    "BatchScan",
    "FileScan",
    "HtmlScan",
    "ScanRequest",
    "Scanner",
    "UrlScan",
    "parse_request",
]
