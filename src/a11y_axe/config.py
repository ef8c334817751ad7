"""Environment-based configuration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode

from a11y_axe.constants import (
    AXE_CDN_URL,
    AXE_DOWNLOAD_TIMEOUT_SECONDS,
    EVALUATION_TIMEOUT_SECONDS,
    NAVIGATION_TIMEOUT_SECONDS,
)

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Reads from .env file and A11Y_* environment variables."""

    # Browser
    headless: bool = True
    browser_args: Annotated[list[str], NoDecode] = ["--no-sandbox"]
    navigation_timeout_seconds: float = NAVIGATION_TIMEOUT_SECONDS
    evaluation_timeout_seconds: float = EVALUATION_TIMEOUT_SECONDS

    # axe-core source (local path wins over download)
    axe_script_path: Path | None = None
    axe_script_url: str = AXE_CDN_URL
    axe_download_timeout_seconds: float = AXE_DOWNLOAD_TIMEOUT_SECONDS

    # Logging
    log_level: str = "INFO"
    log_dir: Path = Path("logs")

    @field_validator("browser_args", mode="before")
    @classmethod
    def _parse_args(cls, v: Any) -> Any:
        """Accept comma-separated string or JSON array."""
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator(
        "navigation_timeout_seconds",
        "evaluation_timeout_seconds",
        "axe_download_timeout_seconds",
    )
    @classmethod
    def _positive_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts must be greater than zero")
        return v

    @field_validator("axe_script_path")
    @classmethod
    def _warn_missing_script(cls, v: Path | None) -> Path | None:
        if v is not None and not v.is_file():
            logger.warning(
                "A11Y_AXE_SCRIPT_PATH does not exist: %s", v
            )
        return v

    @property
    def navigation_timeout_ms(self) -> float:
        """Navigation bound in the unit Playwright expects."""
        return self.navigation_timeout_seconds * 1000

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "A11Y_",
        "extra": "ignore",
    }
