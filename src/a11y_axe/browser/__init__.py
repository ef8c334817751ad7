"""Headless browser lifecycle: one session per scan, scoped pages."""

from a11y_axe.browser.session import (
    BrowserSession,
    Launcher,
    browser_session,
    launch_chromium,
)

__all__ = [
    "BrowserSession",
    "Launcher",
    "browser_session",
    "launch_chromium",
]
