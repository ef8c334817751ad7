"""WCAG success-criterion ids and reference links from axe rule tags.

axe tags each rule with the criteria it checks, e.g. ``wcag143`` for
1.4.3 Contrast (Minimum). The mapping is purely positional: digit one is
the principle, two the guideline, three the criterion. Tags with any
other shape are dropped rather than guessed at.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from a11y_axe.constants import (
    DEFAULT_RULESET,
    W3C_BASE_URL,
    WCAG_SPEC_NAMES,
)

_SC_TAG = re.compile(r"wcag(\d)(\d)(\d)", re.IGNORECASE | re.ASCII)


@dataclass(frozen=True)
class StandardsReference:
    """Canonical W3C links for one success criterion."""

    id: str
    spec_url: str
    quickref_url: str
    # Landing page only; callers append the criterion slug themselves.
    understanding_url: str

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "spec": self.spec_url,
            "quickref": self.quickref_url,
            "understanding": self.understanding_url,
        }


def ids_from_tags(tags: Iterable[str]) -> list[str]:
    """Extract dotted WCAG ids from axe tags, in tag order.

    >>> ids_from_tags(["wcag143", "wcag211", "best-practice"])
    ['1.4.3', '2.1.1']
    """
    ids: list[str] = []
    for tag in tags:
        m = _SC_TAG.fullmatch(tag)
        if m:
            ids.append(".".join(m.groups()))
    return ids


def reference_links(
    sc_id: str, prefer: str = DEFAULT_RULESET
) -> StandardsReference:
    """Build spec, quick-reference and understanding links for ``sc_id``.

    ``prefer`` selects WCAG 2.2 (default) or 2.1; anything that is not
    ``wcag21`` resolves to 2.2.
    """
    spec = WCAG_SPEC_NAMES.get(prefer, WCAG_SPEC_NAMES[DEFAULT_RULESET])
    return StandardsReference(
        id=sc_id,
        spec_url=f"{W3C_BASE_URL}/TR/{spec}/",
        quickref_url=(
            f"{W3C_BASE_URL}/WAI/{spec}/quickref/"
            f"#{sc_id.replace('.', '')}"
        ),
        understanding_url=f"{W3C_BASE_URL}/WAI/{spec}/Understanding/",
    )
