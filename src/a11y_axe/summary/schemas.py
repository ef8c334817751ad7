"""Pydantic models for reading an axe result back in."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from a11y_axe.constants import Impact


class ViolationRecord(BaseModel):
    """One axe violation. Only ``impact`` and ``tags`` are interpreted."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    rule_id: str = Field(default="", alias="id")
    description: str = ""
    help_text: str = Field(default="", alias="help")
    help_url: str = Field(default="", alias="helpUrl")
    impact: Impact | None = None
    tags: list[str] = Field(default_factory=list)
    nodes: list[Any] = Field(default_factory=list)


class ScanResult(BaseModel):
    """Raw ``axe.run`` output; unknown keys are kept as-is."""

    model_config = ConfigDict(extra="allow")

    violations: list[ViolationRecord]
    passes: list[Any] = Field(default_factory=list)
    incomplete: list[Any] = Field(default_factory=list)
    inapplicable: list[Any] = Field(default_factory=list)
