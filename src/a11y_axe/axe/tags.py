"""Map a friendly ruleset/level pair to axe-core runOnly tags."""

from __future__ import annotations

from collections.abc import Sequence

from a11y_axe.constants import DEFAULT_LEVEL, DEFAULT_RULESET


def resolve_tags(
    ruleset: str | None = None,
    level: str | None = None,
    extra: Sequence[str] | None = None,
) -> list[str]:
    """Return ``[base_tag, *extra]`` for axe's tag filter.

    The base tag is the lowercase concatenation of ruleset and level
    (``wcag22`` + ``AA`` → ``wcag22aa``). Extra tags are passed through
    as given: no validation, no dedup. Enum values are checked at the
    request boundary, not here.
    """
    r = ruleset or DEFAULT_RULESET
    lvl = level or DEFAULT_LEVEL
    base = f"{r}{lvl}".lower()
    return [base, *(extra or [])]
