"""Structured JSON logger for scan and error tracking."""

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from a11y_axe.constants import ERROR_TRUNCATION_CHARS
from a11y_axe.logging_config import LOG_DATEFMT, LOG_FORMAT

__all__ = ["ScanLogger", "LOG_FORMAT", "LOG_DATEFMT"]


class ScanLogger:
    """Structured JSON logger with request_id correlation."""

    def __init__(self, log_dir: Path, level: str = "INFO") -> None:
        self._log_dir = log_dir
        self._log_dir.mkdir(parents=True, exist_ok=True)
        self._logger = logging.getLogger("a11y_axe.scans")
        self._logger.setLevel(getattr(logging, level.upper()))

        if not self._logger.handlers:
            handler = logging.FileHandler(log_dir / "scans.log")
            handler.setFormatter(logging.Formatter("%(message)s"))
            self._logger.addHandler(handler)

    def log_scan(
        self,
        request_id: str,
        tool: str,
        target: str,
        violations: int | None,
        duration_ms: float,
    ) -> None:
        self._logger.info(
            json.dumps({
                "type": "scan",
                "timestamp": datetime.now(UTC).isoformat(),
                "request_id": request_id,
                "tool": tool,
                "target": target[:ERROR_TRUNCATION_CHARS],
                "violations": violations,
                "duration_ms": duration_ms,
            })
        )

    def log_error(
        self,
        request_id: str,
        tool: str,
        error: str,
    ) -> None:
        self._logger.error(
            json.dumps({
                "type": "error",
                "timestamp": datetime.now(UTC).isoformat(),
                "request_id": request_id,
                "tool": tool,
                "error": error[:ERROR_TRUNCATION_CHARS],
            })
        )

    def log_step(
        self,
        request_id: str,
        step: str,
        target: str,
        status: str,
        duration_ms: float,
        error: str | None = None,
    ) -> None:
        self._logger.info(
            json.dumps({
                "type": "step",
                "timestamp": datetime.now(UTC).isoformat(),
                "request_id": request_id,
                "step": step,
                "target": target[:ERROR_TRUNCATION_CHARS],
                "status": status,
                "duration_ms": duration_ms,
                "error": error,
            })
        )
