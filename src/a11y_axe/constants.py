"""Shared constants: single source of truth for cross-module values.

All magic strings and numbers that appear in 2+ files belong here.
StrEnum members are str-compatible, so JSON payloads and axe options
work unchanged.
"""

from __future__ import annotations

from enum import StrEnum

# ── String Enums ─────────────────────────────────────────


class Ruleset(StrEnum):
    """WCAG versions the rule engine can be filtered to."""

    WCAG22 = "wcag22"
    WCAG21 = "wcag21"


class Level(StrEnum):
    """WCAG conformance levels."""

    A = "A"
    AA = "AA"
    AAA = "AAA"


class Impact(StrEnum):
    """axe-core violation severities, least to most severe."""

    MINOR = "minor"
    MODERATE = "moderate"
    SERIOUS = "serious"
    CRITICAL = "critical"


class ScanKind(StrEnum):
    """Discriminator for the five scan strategies."""

    URL = "url"
    HTML = "html"
    FILE = "file"
    BATCH = "batch"
    AUTHENTICATED = "authenticated"


class StepStatus(StrEnum):
    """Outcome of a single strategy step, as written to the scan log."""

    DONE = "done"
    FAILED = "failed"


DEFAULT_RULESET = Ruleset.WCAG22
DEFAULT_LEVEL = Level.AA

# Violations that make it into the ranked summary
TOP_IMPACTS = frozenset({Impact.CRITICAL, Impact.SERIOUS})

NO_TOP_ISSUES_MESSAGE = "No critical or serious issues found."

# ── Browser ──────────────────────────────────────────────

NAVIGATION_TIMEOUT_SECONDS = 60
EVALUATION_TIMEOUT_SECONDS = 120
WAIT_UNTIL_NETWORK_IDLE = "networkidle"
WAIT_UNTIL_DOM_READY = "domcontentloaded"

# ── axe-core source ──────────────────────────────────────

AXE_CDN_URL = (
    "https://cdnjs.cloudflare.com/ajax/libs/axe-core/4.10.2/axe.min.js"
)
AXE_DOWNLOAD_TIMEOUT_SECONDS = 30

# ── Retry Strategy ───────────────────────────────────────

RETRY_MAX_ATTEMPTS = 3
RETRY_INITIAL_WAIT = 1
RETRY_MAX_WAIT = 10

# ── WCAG reference links ─────────────────────────────────

W3C_BASE_URL = "https://www.w3.org"
WCAG_SPEC_NAMES: dict[str, str] = {
    Ruleset.WCAG22: "WCAG22",
    Ruleset.WCAG21: "WCAG21",
}

# ── Misc ─────────────────────────────────────────────────

ERROR_TRUNCATION_CHARS = 200

# ── ID Generation ───────────────────────────────────────

ID_HEX_LENGTH = 12
