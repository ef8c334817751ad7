"""Tests for the scan error taxonomy and error classification."""

from __future__ import annotations

import httpx
import pytest

from a11y_axe.resilience.errors import (
    ErrorClass,
    FileReadError,
    LaunchError,
    NavigationError,
    RequestValidationError,
    ResultParseError,
    ScanError,
    ScanTimeoutError,
    classify_error,
    is_retryable,
)


class _StatusCodeError(Exception):
    """Exception with a status_code attribute."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


def _http_status_error(code: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://cdn.test/axe.min.js")
    response = httpx.Response(code, request=request)
    return httpx.HTTPStatusError(
        f"status {code}", request=request, response=response
    )


# ── taxonomy ─────────────────────────────────────────────────


def test_message_names_step_and_target() -> None:
    err = NavigationError(
        "net::ERR_NAME_NOT_RESOLVED",
        step="navigate",
        target="https://nope.test/",
    )
    assert str(err) == (
        "navigate failed for https://nope.test/: "
        "net::ERR_NAME_NOT_RESOLVED"
    )


def test_message_without_target() -> None:
    err = LaunchError("no chromium", step="launch")
    assert str(err) == "launch failed: no chromium"


def test_plain_message() -> None:
    assert str(ScanError("boom")) == "boom"


def test_timeout_is_builtin_timeout() -> None:
    err = ScanTimeoutError("exceeded 60s", step="navigate", target="u")
    assert isinstance(err, TimeoutError)
    assert isinstance(err, ScanError)
    assert str(err) == "navigate failed for u: exceeded 60s"


@pytest.mark.parametrize(
    "cls", [RequestValidationError, ResultParseError]
)
def test_input_errors_are_value_errors(cls: type[ScanError]) -> None:
    assert issubclass(cls, ValueError)


def test_file_read_error_is_os_error() -> None:
    err = FileReadError("No such file", step="read file", target="/x")
    assert isinstance(err, OSError)
    assert err.step == "read file"
    assert err.target == "/x"


# ── classify_error ───────────────────────────────────────────


def test_classify_status_code_429_as_transient() -> None:
    assert classify_error(_StatusCodeError("slow", 429)) == (
        ErrorClass.TRANSIENT
    )


def test_classify_status_code_404_as_client() -> None:
    assert classify_error(_StatusCodeError("gone", 404)) == (
        ErrorClass.CLIENT
    )


def test_classify_httpx_response_status() -> None:
    """Status code is read from httpx's response attribute."""
    assert classify_error(_http_status_error(503)) == ErrorClass.SERVER
    assert classify_error(_http_status_error(403)) == ErrorClass.CLIENT


def test_classify_timeout_error_type() -> None:
    assert classify_error(TimeoutError()) == ErrorClass.TIMEOUT


def test_classify_httpx_connect_error() -> None:
    err = httpx.ConnectError("connection refused")
    assert classify_error(err) == ErrorClass.TRANSIENT


def test_classify_unknown() -> None:
    err = Exception("something completely unexpected")
    assert classify_error(err) == ErrorClass.UNKNOWN


# ── is_retryable ─────────────────────────────────────────────


def test_server_and_timeout_retryable() -> None:
    assert is_retryable(_http_status_error(502)) is True
    assert is_retryable(TimeoutError()) is True


def test_client_not_retryable() -> None:
    assert is_retryable(_http_status_error(404)) is False


def test_base_exception_not_retryable() -> None:
    assert is_retryable(KeyboardInterrupt()) is False
