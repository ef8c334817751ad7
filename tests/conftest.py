"""Shared test fixtures: fake browser, local axe stub, settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from a11y_axe.axe.source import reset_axe_source
from a11y_axe.browser.fakes import FakeLauncher
from a11y_axe.config import Settings

AXE_STUB = "window.axe = { run: async () => ({ violations: [] }) };"


def violation(
    rule_id: str,
    impact: str | None,
    tags: list[str] | None = None,
    nodes: int = 1,
) -> dict[str, Any]:
    """Build an axe-shaped violation record."""
    return {
        "id": rule_id,
        "impact": impact,
        "description": f"{rule_id} description",
        "help": f"{rule_id} help",
        "helpUrl": f"https://dequeuniversity.com/rules/axe/4.10/{rule_id}",
        "tags": tags or [],
        "nodes": [{"target": [f"#n{i}"]} for i in range(nodes)],
    }


def axe_result(*violations: dict[str, Any]) -> dict[str, Any]:
    return {
        "violations": list(violations),
        "passes": [],
        "incomplete": [],
        "inapplicable": [],
        "testEngine": {"name": "axe-core", "version": "4.10.2"},
    }


@pytest.fixture(autouse=True)
def _reset_axe_source() -> None:
    """Each test loads the axe source afresh."""
    reset_axe_source()


@pytest.fixture
def axe_stub_path(tmp_path: Path) -> Path:
    path = tmp_path / "axe.min.js"
    path.write_text(AXE_STUB, encoding="utf-8")
    return path


@pytest.fixture
def settings(axe_stub_path: Path, tmp_path: Path) -> Settings:
    """Settings pointing at the local axe stub, short timeouts."""
    return Settings(
        axe_script_path=axe_stub_path,
        navigation_timeout_seconds=1,
        evaluation_timeout_seconds=1,
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def launcher() -> FakeLauncher:
    return FakeLauncher()
