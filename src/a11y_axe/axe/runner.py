"""Inject axe-core into a live page and run it against the document."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from a11y_axe.browser.protocols import Page

# Runs in the page. An empty tag list means the engine's full default
# rule set; otherwise only rules carrying one of the tags run.
AXE_RUN_SCRIPT = """
async (tags) => {
  const options = tags.length ? { runOnly: { type: "tag", values: tags } } : {};
  return await axe.run(document, options);
}
"""


async def run_axe(
    page: Page, source: str, tags: Sequence[str]
) -> dict[str, Any]:
    """Add the axe script to ``page`` and return the raw axe results."""
    await page.add_script_tag(content=source)
    return await page.evaluate(AXE_RUN_SCRIPT, list(tags))
