"""Tests for injecting and running axe in a page."""

from __future__ import annotations

from a11y_axe.axe.runner import AXE_RUN_SCRIPT, run_axe
from a11y_axe.browser.fakes import FakeBrowser, FakePage
from tests.conftest import AXE_STUB, axe_result, violation


async def test_injects_then_evaluates_with_tags() -> None:
    result = axe_result(violation("image-alt", "critical"))
    page = FakePage(FakeBrowser(), result=result)

    out = await run_axe(page, AXE_STUB, ["wcag22aa"])

    assert out == result
    assert page.calls == [
        ("add_script_tag", AXE_STUB),
        ("evaluate", ["wcag22aa"]),
    ]


async def test_empty_tags_passed_as_empty_list() -> None:
    page = FakePage(FakeBrowser())
    await run_axe(page, AXE_STUB, [])
    assert page.calls[-1] == ("evaluate", [])


def test_script_runs_only_when_tags_present() -> None:
    assert 'runOnly: { type: "tag", values: tags }' in AXE_RUN_SCRIPT
    assert "tags.length" in AXE_RUN_SCRIPT
    assert "axe.run(document" in AXE_RUN_SCRIPT
