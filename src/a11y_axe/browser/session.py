"""Browser session manager.

A ``BrowserSession`` owns one browser process and every page opened from
it. ``browser_session`` scopes the process, ``BrowserSession.open_page``
scopes a page; both release on every exit path, including timeouts and
cancellation. Close failures are logged and dropped so they never mask
the result or the error of the work that ran inside the scope.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any, TypeAlias

from playwright.async_api import async_playwright

from a11y_axe.browser.protocols import Browser, Page
from a11y_axe.config import Settings
from a11y_axe.resilience.errors import LaunchError, ScanError

logger = logging.getLogger(__name__)

Launcher: TypeAlias = Callable[[Settings], Awaitable["BrowserSession"]]


class BrowserSession:
    """One browser process plus bookkeeping of its open pages."""

    def __init__(self, browser: Browser, driver: Any = None) -> None:
        self._browser = browser
        # Playwright driver handle, stopped after the browser closes
        self._driver = driver
        self._open_pages = 0
        self._closed = False

    @property
    def open_pages(self) -> int:
        return self._open_pages

    @property
    def closed(self) -> bool:
        return self._closed

    async def new_page(self) -> Page:
        """Open a page; pair with ``release_page``."""
        page = await self._browser.new_page()
        self._open_pages += 1
        return page

    async def release_page(self, page: Page) -> None:
        self._open_pages -= 1
        await _close_quietly(page, "page")

    @asynccontextmanager
    async def open_page(self) -> AsyncIterator[Page]:
        """Open a fresh page, closing it when the block exits."""
        page = await self.new_page()
        try:
            yield page
        finally:
            await self.release_page(page)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await _close_quietly(self._browser, "browser")
        if self._driver is not None:
            try:
                await self._driver.stop()
            except Exception as exc:  # noqa: BLE001
                logger.warning(
                    "event=teardown_failed resource=driver error=%s", exc
                )


async def _close_quietly(resource: Page | Browser, name: str) -> None:
    try:
        await resource.close()
    except Exception as exc:  # noqa: BLE001
        logger.warning(
            "event=teardown_failed resource=%s error=%s", name, exc
        )


async def _stop_driver(manager: Any) -> None:
    # Exiting the context manager stops a partly started driver too
    try:
        await manager.__aexit__(None, None, None)
    except Exception as exc:  # noqa: BLE001
        logger.warning(
            "event=teardown_failed resource=driver error=%s", exc
        )


async def launch_chromium(settings: Settings) -> BrowserSession:
    """Start Playwright and launch headless Chromium."""
    manager = async_playwright()
    try:
        driver = await manager.start()
        browser = await driver.chromium.launch(
            headless=settings.headless,
            args=settings.browser_args,
        )
    except BaseException:
        # Also reached when a launch timeout cancels start() midway
        await _stop_driver(manager)
        raise
    return BrowserSession(browser, driver=driver)


@asynccontextmanager
async def browser_session(
    settings: Settings,
    launcher: Launcher | None = None,
) -> AsyncIterator[BrowserSession]:
    """Launch a browser for the duration of the block.

    Launch failures surface as ``LaunchError``; the process is closed on
    every exit path once launched.
    """
    launch = launcher or launch_chromium
    try:
        async with asyncio.timeout(settings.navigation_timeout_seconds):
            session = await launch(settings)
    except ScanError:
        raise
    except Exception as exc:
        raise LaunchError(str(exc) or type(exc).__name__, step="launch") from exc
    logger.debug("event=browser_launched")
    try:
        yield session
    finally:
        await session.close()
        logger.debug("event=browser_closed")
