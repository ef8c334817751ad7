"""Process-wide axe-core script source.

Loaded lazily on first scan, from ``A11Y_AXE_SCRIPT_PATH`` when set or
downloaded from ``A11Y_AXE_SCRIPT_URL`` otherwise, then kept for the
life of the process. The text is never mutated after load, so every
concurrent session can inject the same string.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import httpx
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from a11y_axe.config import Settings
from a11y_axe.constants import (
    RETRY_INITIAL_WAIT,
    RETRY_MAX_ATTEMPTS,
    RETRY_MAX_WAIT,
)
from a11y_axe.resilience.errors import ScriptLoadError, is_retryable

logger = logging.getLogger(__name__)

_axe_source: str | None = None
_load_lock = asyncio.Lock()


async def get_axe_source(settings: Settings) -> str:
    """Return the axe-core source, loading it on first use."""
    global _axe_source  # noqa: PLW0603
    if _axe_source is not None:
        return _axe_source
    async with _load_lock:
        if _axe_source is None:
            _axe_source = await _load(settings)
    return _axe_source


def reset_axe_source() -> None:
    """Forget the cached source so the next scan reloads it."""
    global _axe_source, _load_lock  # noqa: PLW0603
    _axe_source = None
    _load_lock = asyncio.Lock()


async def _load(settings: Settings) -> str:
    if settings.axe_script_path is not None:
        source = await _read(settings.axe_script_path)
        origin = str(settings.axe_script_path)
    else:
        try:
            source = await _download(
                settings.axe_script_url,
                settings.axe_download_timeout_seconds,
            )
        except httpx.HTTPError as exc:
            raise ScriptLoadError(
                str(exc),
                step="load axe-core",
                target=settings.axe_script_url,
            ) from exc
        origin = settings.axe_script_url
    if not source.strip():
        raise ScriptLoadError(
            "script is empty", step="load axe-core", target=origin
        )
    logger.info(
        "event=axe_source_loaded origin=%s chars=%d",
        origin,
        len(source),
    )
    return source


async def _read(path: Path) -> str:
    try:
        return await asyncio.to_thread(path.read_text, encoding="utf-8")
    except OSError as exc:
        raise ScriptLoadError(
            str(exc), step="load axe-core", target=str(path)
        ) from exc


@retry(
    stop=stop_after_attempt(RETRY_MAX_ATTEMPTS),
    wait=wait_exponential_jitter(
        initial=RETRY_INITIAL_WAIT, max=RETRY_MAX_WAIT
    ),
    retry=retry_if_exception(is_retryable),
    reraise=True,
)
async def _download(url: str, timeout: float) -> str:
    """Fetch the script, retrying transient, server and timeout failures."""
    async with httpx.AsyncClient(
        timeout=timeout, follow_redirects=True
    ) as client:
        response = await client.get(url)
        response.raise_for_status()
        return response.text
