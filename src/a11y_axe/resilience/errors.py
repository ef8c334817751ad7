"""Scan error taxonomy and error classification.

The taxonomy gives every failure a step and a target so single-target
scans can surface a readable message and batch scans can embed it per
entry.

Classification enables:
- Retry of transient failures while fetching the axe-core source
- Structured logging (which errors are transient vs permanent)
"""

from __future__ import annotations

import asyncio
from enum import Enum


class ScanError(Exception):
    """Base class for failures inside a scan.

    ``step`` names the strategy step that failed (``navigate``,
    ``evaluate``...) and ``target`` the URL, path or label scanned.
    """

    def __init__(
        self, message: str, *, step: str = "", target: str = ""
    ) -> None:
        super().__init__(message)
        self.step = step
        self.target = target

    def __str__(self) -> str:
        msg = super().__str__()
        if self.step and self.target:
            return f"{self.step} failed for {self.target}: {msg}"
        if self.step:
            return f"{self.step} failed: {msg}"
        return msg


class RequestValidationError(ScanError, ValueError):
    """Malformed scan request, rejected before any browser is launched."""


class LaunchError(ScanError):
    """Browser process could not be started."""


class NavigationError(ScanError):
    """Target unreachable or navigation rejected by the browser."""


class ScanTimeoutError(ScanError, TimeoutError):
    """A step exceeded its configured bound."""


class FileReadError(ScanError, OSError):
    """Local HTML file missing or unreadable."""


class ResultParseError(ScanError, ValueError):
    """Payload handed to the summarizer is not a scan result."""


class ScriptLoadError(ScanError):
    """The axe-core source could not be read or downloaded."""


class ErrorClass(Enum):
    TRANSIENT = "transient"  # 429, network errors; retryable
    SERVER = "server"  # 500, 502, 503; retryable
    TIMEOUT = "timeout"  # deadline exceeded; retryable with backoff
    CLIENT = "client"  # 400, 401, 403, 404; do NOT retry
    UNKNOWN = "unknown"  # unclassified; do NOT retry


def _status_code(error: Exception) -> int | None:
    status_code = getattr(error, "status_code", None)
    if isinstance(status_code, int):
        return status_code
    # httpx.HTTPStatusError carries the code on its response
    response = getattr(error, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return status_code
    return None


def classify_error(error: Exception) -> ErrorClass:
    """Classify an error to determine handling strategy.

    Checks structured attributes first (status_code), falls back
    to string matching for untyped exceptions.
    """
    # 1. Structured status code (httpx responses)
    status_code = _status_code(error)
    if status_code is not None:
        if status_code == 429:
            return ErrorClass.TRANSIENT
        if 400 <= status_code < 500:
            return ErrorClass.CLIENT
        if 500 <= status_code < 600:
            return ErrorClass.SERVER

    # 2. Timeout types
    if isinstance(error, (TimeoutError, asyncio.TimeoutError)):
        return ErrorClass.TIMEOUT

    # 3. Fall back to string matching for untyped exceptions
    msg = str(error).lower()

    if "timeout" in msg or "timed out" in msg:
        return ErrorClass.TIMEOUT
    if "429" in msg or "rate limit" in msg:
        return ErrorClass.TRANSIENT
    if any(code in msg for code in ("500", "502", "503", "504")):
        return ErrorClass.SERVER
    if "econnrefused" in msg or "connection" in msg:
        return ErrorClass.TRANSIENT
    if any(code in msg for code in ("400", "401", "403", "404")):
        return ErrorClass.CLIENT

    return ErrorClass.UNKNOWN


_RETRYABLE = frozenset({
    ErrorClass.TRANSIENT,
    ErrorClass.SERVER,
    ErrorClass.TIMEOUT,
})


def is_retryable(error: BaseException) -> bool:
    """Return True if the error category supports retry."""
    if not isinstance(error, Exception):
        return False
    return classify_error(error) in _RETRYABLE
