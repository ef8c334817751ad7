"""Scan request schemas, one model per strategy, tagged by ``kind``.

Everything here is checked before a browser is launched: URLs must be
absolute http(s) URLs, ruleset and level must be known values, a batch
needs at least one URL. ``parse_request`` turns pydantic's
ValidationError into ``RequestValidationError``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    SecretStr,
    TypeAdapter,
    ValidationError,
)

from a11y_axe.axe.tags import resolve_tags
from a11y_axe.constants import DEFAULT_LEVEL, DEFAULT_RULESET, Level, Ruleset
from a11y_axe.resilience.errors import RequestValidationError

_http_url: TypeAdapter[HttpUrl] = TypeAdapter(HttpUrl)


def _check_url(value: str) -> str:
    # Validate only; keep the caller's spelling so batch output echoes it.
    try:
        _http_url.validate_python(value)
    except ValidationError as exc:
        raise ValueError(f"'{value}' is not a valid http(s) URL") from exc
    return value


WebUrl = Annotated[str, AfterValidator(_check_url)]
Selector = Annotated[str, Field(min_length=1)]


class _ScanOptions(BaseModel):
    """Conformance filter shared by every strategy."""

    model_config = ConfigDict(
        populate_by_name=True, extra="forbid", frozen=True
    )

    ruleset: Ruleset = DEFAULT_RULESET
    level: Level = DEFAULT_LEVEL
    extra_tags: list[str] = Field(default_factory=list, alias="extraTags")

    @property
    def tags(self) -> list[str]:
        return resolve_tags(self.ruleset, self.level, self.extra_tags)


class UrlScan(_ScanOptions):
    kind: Literal["url"] = "url"
    url: WebUrl

    @property
    def target(self) -> str:
        return self.url


class HtmlScan(_ScanOptions):
    kind: Literal["html"] = "html"
    html: str

    @property
    def target(self) -> str:
        return "inline html"


class FileScan(_ScanOptions):
    kind: Literal["file"] = "file"
    path: Path

    @property
    def target(self) -> str:
        return str(self.path)


class BatchScan(_ScanOptions):
    kind: Literal["batch"] = "batch"
    urls: list[WebUrl] = Field(min_length=1)

    @property
    def target(self) -> str:
        return f"{len(self.urls)} urls"


class AuthenticatedScan(_ScanOptions):
    """Log in through a form, then scan ``url`` in the same page.

    Login success is inferred from the navigation that follows the
    submit click; a rejected login that still navigates looks the same.
    """

    kind: Literal["authenticated"] = "authenticated"
    url: WebUrl
    login_url: WebUrl = Field(alias="loginUrl")
    username: str
    password: SecretStr
    username_selector: Selector = Field(alias="usernameSelector")
    password_selector: Selector = Field(alias="passwordSelector")
    submit_selector: Selector = Field(alias="submitSelector")

    @property
    def target(self) -> str:
        return self.url


ScanRequest = Annotated[
    UrlScan | HtmlScan | FileScan | BatchScan | AuthenticatedScan,
    Field(discriminator="kind"),
]

_scan_request: TypeAdapter[ScanRequest] = TypeAdapter(ScanRequest)


def parse_request(data: dict[str, Any]) -> ScanRequest:
    """Validate a raw request dict into its strategy model."""
    try:
        return _scan_request.validate_python(data)
    except ValidationError as exc:
        raise RequestValidationError(
            _describe(exc), step="validate request"
        ) from exc


def _describe(exc: ValidationError) -> str:
    parts: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "request"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)
