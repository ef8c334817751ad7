"""Scan strategies: url, html, file, authenticated and batch.

Each strategy is a fixed sequence of steps over one scoped browser
session. Steps run strictly one after another; each is bounded by its
own timeout and translated into the scan error taxonomy on failure.
Scopes close the page and the browser before any error reaches the
caller.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from a11y_axe.axe.runner import run_axe
from a11y_axe.axe.source import get_axe_source
from a11y_axe.browser.protocols import Page
from a11y_axe.browser.session import (
    BrowserSession,
    Launcher,
    browser_session,
)
from a11y_axe.config import Settings
from a11y_axe.constants import (
    WAIT_UNTIL_DOM_READY,
    WAIT_UNTIL_NETWORK_IDLE,
    StepStatus,
)
from a11y_axe.logger import ScanLogger
from a11y_axe.resilience.errors import (
    FileReadError,
    LaunchError,
    NavigationError,
    ScanError,
    ScanTimeoutError,
)
from a11y_axe.scanning.requests import (
    AuthenticatedScan,
    BatchScan,
    FileScan,
    HtmlScan,
    ScanRequest,
    UrlScan,
)

logger = logging.getLogger(__name__)


class Scanner:
    """Runs scan requests against a fresh browser session per call.

    ``launcher`` defaults to headless Chromium; tests pass a fake.
    """

    def __init__(
        self,
        settings: Settings,
        launcher: Launcher | None = None,
        scan_logger: ScanLogger | None = None,
    ) -> None:
        self._settings = settings
        self._launcher = launcher
        self._scan_logger = scan_logger

    @property
    def settings(self) -> Settings:
        return self._settings

    async def scan(
        self, request: ScanRequest, request_id: str = ""
    ) -> dict[str, Any] | list[dict[str, Any]]:
        """Dispatch ``request`` to the matching strategy."""
        match request:
            case UrlScan():
                return await self.scan_url(request, request_id)
            case HtmlScan():
                return await self.scan_html(request, request_id)
            case FileScan():
                return await self.scan_file(request, request_id)
            case AuthenticatedScan():
                return await self.scan_authenticated(request, request_id)
            case BatchScan():
                return await self.scan_batch(request, request_id)
        raise TypeError(f"unsupported scan request: {request!r}")

    async def scan_url(
        self, request: UrlScan, request_id: str = ""
    ) -> dict[str, Any]:
        source = await get_axe_source(self._settings)
        async with (
            browser_session(self._settings, self._launcher) as session,
            self._open_page(session, request.url, request_id) as page,
        ):
            await self._navigate(page, request.url, request_id)
            return await self._evaluate(
                page, source, request.tags, request.url, request_id
            )

    async def scan_html(
        self, request: HtmlScan, request_id: str = ""
    ) -> dict[str, Any]:
        source = await get_axe_source(self._settings)
        async with (
            browser_session(self._settings, self._launcher) as session,
            self._open_page(session, request.target, request_id) as page,
        ):
            await self._set_content(
                page, request.html, request.target, request_id
            )
            return await self._evaluate(
                page, source, request.tags, request.target, request_id
            )

    async def scan_file(
        self, request: FileScan, request_id: str = ""
    ) -> dict[str, Any]:
        source = await get_axe_source(self._settings)
        target = request.target
        async with (
            browser_session(self._settings, self._launcher) as session,
            self._open_page(session, target, request_id) as page,
        ):
            html = await self._read_file(request.path, request_id)
            await self._set_content(page, html, target, request_id)
            return await self._evaluate(
                page, source, request.tags, target, request_id
            )

    async def scan_authenticated(
        self, request: AuthenticatedScan, request_id: str = ""
    ) -> dict[str, Any]:
        """Log in through the form at ``login_url``, then scan ``url``.

        Only the post-submit navigation is checked; whether the session
        is actually authenticated is not verified.
        """
        source = await get_axe_source(self._settings)
        timeout_ms = self._settings.navigation_timeout_ms
        async with (
            browser_session(self._settings, self._launcher) as session,
            self._open_page(
                session, request.login_url, request_id
            ) as page,
        ):
            await self._navigate(page, request.login_url, request_id)
            async with self._step(
                "enter credentials", request.login_url, request_id
            ):
                await page.fill(
                    request.username_selector,
                    request.username,
                    timeout=timeout_ms,
                )
                await page.fill(
                    request.password_selector,
                    request.password.get_secret_value(),
                    timeout=timeout_ms,
                )
            async with (
                self._step(
                    "submit login",
                    request.login_url,
                    request_id,
                    error_cls=NavigationError,
                ),
                page.expect_navigation(timeout=timeout_ms),
            ):
                await page.click(
                    request.submit_selector, timeout=timeout_ms
                )
            await self._navigate(page, request.url, request_id)
            return await self._evaluate(
                page, source, request.tags, request.url, request_id
            )

    async def scan_batch(
        self, request: BatchScan, request_id: str = ""
    ) -> list[dict[str, Any]]:
        """Scan each URL in order on one shared browser.

        A failing URL becomes an ``{"url", "error"}`` entry and the loop
        moves on; the output always has one entry per requested URL.
        Only a launch failure aborts the whole batch.
        """
        source = await get_axe_source(self._settings)
        tags = request.tags
        out: list[dict[str, Any]] = []
        async with browser_session(
            self._settings, self._launcher
        ) as session:
            for url in request.urls:
                try:
                    async with self._open_page(
                        session, url, request_id
                    ) as page:
                        await self._navigate(page, url, request_id)
                        results = await self._evaluate(
                            page, source, tags, url, request_id
                        )
                except Exception as exc:  # noqa: BLE001
                    logger.warning(
                        "event=batch_entry_failed url=%s error=%s",
                        url,
                        exc,
                    )
                    out.append({"url": url, "error": str(exc)})
                else:
                    out.append({"url": url, "results": results})
        return out

    # ── Steps ────────────────────────────────────────────

    @asynccontextmanager
    async def _open_page(
        self, session: BrowserSession, target: str, request_id: str
    ) -> AsyncIterator[Page]:
        """Open a page as a bounded step; close it when the block exits."""
        async with self._step(
            "open page", target, request_id, error_cls=LaunchError
        ):
            page = await session.new_page()
        try:
            yield page
        finally:
            await session.release_page(page)

    async def _navigate(
        self, page: Page, url: str, request_id: str
    ) -> None:
        async with self._step(
            "navigate", url, request_id, error_cls=NavigationError
        ):
            await page.goto(
                url,
                wait_until=WAIT_UNTIL_NETWORK_IDLE,
                timeout=self._settings.navigation_timeout_ms,
            )

    async def _set_content(
        self, page: Page, html: str, target: str, request_id: str
    ) -> None:
        async with self._step("set content", target, request_id):
            await page.set_content(
                html,
                wait_until=WAIT_UNTIL_DOM_READY,
                timeout=self._settings.navigation_timeout_ms,
            )

    async def _read_file(self, path: Path, request_id: str) -> str:
        async with self._step("read file", str(path), request_id):
            try:
                return await asyncio.to_thread(
                    path.read_text, encoding="utf-8", errors="replace"
                )
            except OSError as exc:
                raise FileReadError(
                    exc.strerror or str(exc),
                    step="read file",
                    target=str(path),
                ) from exc

    async def _evaluate(
        self,
        page: Page,
        source: str,
        tags: list[str],
        target: str,
        request_id: str,
    ) -> dict[str, Any]:
        async with self._step(
            "evaluate",
            target,
            request_id,
            timeout=self._settings.evaluation_timeout_seconds,
        ):
            return await run_axe(page, source, tags)

    @asynccontextmanager
    async def _step(
        self,
        step: str,
        target: str,
        request_id: str,
        *,
        timeout: float | None = None,
        error_cls: type[ScanError] = ScanError,
    ) -> AsyncIterator[None]:
        """Bound one step and translate browser errors.

        Playwright and asyncio timeouts become ``ScanTimeoutError``,
        other Playwright errors become ``error_cls``.
        """
        limit = timeout or self._settings.navigation_timeout_seconds
        start = time.monotonic()
        error: str | None = "interrupted"
        try:
            async with asyncio.timeout(limit):
                yield
            error = None
        except ScanError as exc:
            error = str(exc)
            raise
        except (PlaywrightTimeoutError, TimeoutError) as exc:
            error = f"exceeded {limit:g}s"
            raise ScanTimeoutError(
                error, step=step, target=target
            ) from exc
        except PlaywrightError as exc:
            error = exc.message
            raise error_cls(error, step=step, target=target) from exc
        finally:
            self._record(step, target, request_id, start, error)

    def _record(
        self,
        step: str,
        target: str,
        request_id: str,
        start: float,
        error: str | None,
    ) -> None:
        duration_ms = (time.monotonic() - start) * 1000
        status = StepStatus.FAILED if error else StepStatus.DONE
        logger.debug(
            "event=scan_step step=%s target=%s status=%s duration_ms=%.0f",
            step,
            target,
            status,
            duration_ms,
        )
        if self._scan_logger is not None:
            self._scan_logger.log_step(
                request_id, step, target, status, duration_ms, error
            )
