"""In-memory fake browser for testing.

``FakeBrowser``/``FakePage`` satisfy the protocols in
``a11y_axe.browser.protocols``. No Chromium, no network; every call is
recorded so tests can assert the exact step sequence and that nothing
was left open.
"""

# pyright: reportUnusedFunction=false

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any

from a11y_axe.browser.session import BrowserSession
from a11y_axe.config import Settings

EMPTY_AXE_RESULT: dict[str, Any] = {
    "violations": [],
    "passes": [],
    "incomplete": [],
    "inapplicable": [],
}


class FakePage:
    """Records every call; ``fail_on`` maps a method name to an exception.

    ``delays`` maps a method name to seconds slept before it returns,
    which lets tests trip step timeouts.
    """

    def __init__(
        self,
        browser: FakeBrowser,
        result: dict[str, Any] | None = None,
        fail_on: dict[str, BaseException] | None = None,
        delays: dict[str, float] | None = None,
    ) -> None:
        self._browser = browser
        self.result = result if result is not None else EMPTY_AXE_RESULT
        self.fail_on = fail_on or {}
        self.delays = delays or {}
        self.calls: list[tuple[str, Any]] = []
        self.closed = False
        self.url = "about:blank"

    async def _step(self, name: str, arg: Any = None) -> None:
        self.calls.append((name, arg))
        delay = self.delays.get(name)
        if delay:
            await asyncio.sleep(delay)
        exc = self.fail_on.get(name)
        if exc is not None:
            raise exc

    async def goto(
        self,
        url: str,
        *,
        wait_until: Any = None,
        timeout: float | None = None,
    ) -> None:
        await self._step("goto", url)
        self.url = url

    async def set_content(
        self,
        html: str,
        *,
        wait_until: Any = None,
        timeout: float | None = None,
    ) -> None:
        await self._step("set_content", html)

    async def fill(
        self, selector: str, value: str, *, timeout: float | None = None
    ) -> None:
        await self._step("fill", (selector, value))

    async def click(
        self, selector: str, *, timeout: float | None = None
    ) -> None:
        await self._step("click", selector)

    @asynccontextmanager
    async def expect_navigation(
        self, *, timeout: float | None = None
    ) -> AsyncIterator[None]:
        yield
        await self._step("wait_for_navigation")

    async def add_script_tag(self, *, content: str | None = None) -> None:
        await self._step("add_script_tag", content)

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        await self._step("evaluate", arg)
        return self.result

    async def close(self) -> None:
        self.calls.append(("close", None))
        self.closed = True
        exc = self.fail_on.get("close")
        if exc is not None:
            raise exc

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]


class FakeBrowser:
    """Hands out ``FakePage`` instances built by ``page_factory``."""

    def __init__(
        self,
        page_factory: Callable[[FakeBrowser, int], FakePage] | None = None,
        fail_close: BaseException | None = None,
        fail_new_page: BaseException | None = None,
        new_page_delay: float | None = None,
    ) -> None:
        self._page_factory = page_factory or (lambda b, _i: FakePage(b))
        self._fail_close = fail_close
        self._fail_new_page = fail_new_page
        self._new_page_delay = new_page_delay
        self.pages: list[FakePage] = []
        self.closed = False

    async def new_page(self) -> FakePage:
        if self._new_page_delay:
            await asyncio.sleep(self._new_page_delay)
        if self._fail_new_page is not None:
            raise self._fail_new_page
        page = self._page_factory(self, len(self.pages))
        self.pages.append(page)
        return page

    async def close(self) -> None:
        self.closed = True
        if self._fail_close is not None:
            raise self._fail_close

    @property
    def open_pages(self) -> list[FakePage]:
        return [p for p in self.pages if not p.closed]


class FakeLauncher:
    """Launcher returning sessions around ``FakeBrowser`` instances."""

    def __init__(
        self,
        browser_factory: Callable[[], FakeBrowser] | None = None,
        error: BaseException | None = None,
    ) -> None:
        self._browser_factory = browser_factory or FakeBrowser
        self._error = error
        self.browsers: list[FakeBrowser] = []
        self.sessions: list[BrowserSession] = []

    async def __call__(self, settings: Settings) -> BrowserSession:
        if self._error is not None:
            raise self._error
        browser = self._browser_factory()
        self.browsers.append(browser)
        session = BrowserSession(browser)
        self.sessions.append(session)
        return session
