"""axe-core integration: tag resolution, WCAG mapping, script source, runner."""

from a11y_axe.axe.runner import run_axe
from a11y_axe.axe.source import get_axe_source
from a11y_axe.axe.standards import (
    StandardsReference,
    ids_from_tags,
    reference_links,
)
from a11y_axe.axe.tags import resolve_tags

__all__ = [
    "StandardsReference",
    "get_axe_source",
    "ids_from_tags",
    "reference_links",
    "resolve_tags",
    "run_axe",
]
