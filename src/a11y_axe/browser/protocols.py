"""Protocol-based browser interfaces.

Playwright's async Browser and Page satisfy these protocols structurally
(no inheritance). Test doubles can be plain classes matching the same
signatures, see ``a11y_axe.browser.fakes``.
"""

from contextlib import AbstractAsyncContextManager
from typing import Any, Protocol


class Page(Protocol):
    async def goto(
        self, url: str, *, wait_until: Any = ..., timeout: float | None = ...
    ) -> Any: ...
    async def set_content(
        self, html: str, *, wait_until: Any = ..., timeout: float | None = ...
    ) -> None: ...
    async def fill(
        self, selector: str, value: str, *, timeout: float | None = ...
    ) -> None: ...
    async def click(
        self, selector: str, *, timeout: float | None = ...
    ) -> None: ...
    def expect_navigation(
        self, *, timeout: float | None = ...
    ) -> AbstractAsyncContextManager[Any]: ...
    async def add_script_tag(self, *, content: str | None = ...) -> Any: ...
    async def evaluate(self, expression: str, arg: Any = ...) -> Any: ...
    async def close(self) -> None: ...


class Browser(Protocol):
    async def new_page(self) -> Page: ...
    async def close(self) -> None: ...
