"""Tests for the MCP server."""

from __future__ import annotations

import json
from collections.abc import Iterator
from unittest.mock import MagicMock

import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError
from mcp.shared.exceptions import McpError
from playwright.async_api import Error as PlaywrightError

from a11y_axe.browser.fakes import FakeBrowser, FakeLauncher, FakePage
from a11y_axe.config import Settings
from a11y_axe.mcp import server
from a11y_axe.mcp.server import (
    configure,
    get_scan_logger,
    get_scanner,
    mcp,
)
from tests.conftest import axe_result, violation

RESULT = axe_result(
    violation("image-alt", "critical", ["wcag2a", "wcag111"]),
    violation("region", "moderate"),
)


def _failing_on(host: str) -> FakeLauncher:
    def page_factory(browser: FakeBrowser, _index: int) -> FakePage:
        return _HostAwarePage(browser, host)

    return FakeLauncher(lambda: FakeBrowser(page_factory))


class _HostAwarePage(FakePage):
    """Fails navigation to one host, succeeds elsewhere."""

    def __init__(self, browser: FakeBrowser, host: str) -> None:
        super().__init__(browser, result=RESULT)
        self._host = host

    async def goto(self, url: str, **kwargs: object) -> None:
        if self._host in url:
            self.calls.append(("goto", url))
            raise PlaywrightError("net::ERR_CONNECTION_REFUSED")
        await super().goto(url)


@pytest.fixture
def scan_logger() -> MagicMock:
    return MagicMock()


@pytest.fixture
def mcp_configured(
    settings: Settings, scan_logger: MagicMock
) -> Iterator[FakeLauncher]:
    """Configure the MCP server with a fake browser."""
    launcher = _failing_on("down.test")
    configure(settings, launcher=launcher, scan_logger=scan_logger)
    yield launcher
    server._scanner = None
    server._scan_logger = None


class TestServerConfiguration:
    def test_configure_sets_scanner(
        self, mcp_configured: FakeLauncher, scan_logger: MagicMock
    ) -> None:
        assert get_scanner() is not None
        assert get_scan_logger() is scan_logger

    def test_unconfigured_raises(self) -> None:
        original = server._scanner
        server._scanner = None
        with pytest.raises(RuntimeError, match="not configured"):
            get_scanner()
        server._scanner = original


class TestMcpTools:
    async def test_list_tools(self, mcp_configured: FakeLauncher) -> None:
        async with Client(mcp) as client:
            tools = await client.list_tools()
            tool_names = {t.name for t in tools}
            assert tool_names == {
                "scan_url",
                "scan_html",
                "scan_file",
                "scan_batch",
                "scan_with_login",
                "summarize_results",
            }

    async def test_scan_with_login_wire_names(
        self, mcp_configured: FakeLauncher
    ) -> None:
        async with Client(mcp) as client:
            tools = {t.name: t for t in await client.list_tools()}
        schema = tools["scan_with_login"].inputSchema
        assert set(schema["required"]) == {
            "url",
            "loginUrl",
            "username",
            "password",
            "usernameSelector",
            "passwordSelector",
            "submitSelector",
        }
        assert "extraTags" in schema["properties"]

    async def test_scan_html(
        self, mcp_configured: FakeLauncher, scan_logger: MagicMock
    ) -> None:
        async with Client(mcp) as client:
            result = await client.call_tool(
                "scan_html",
                {"html": "<img>", "level": "A"},
            )
        text = result.content[0].text  # type: ignore[union-attr]
        assert json.loads(text) == RESULT

        page = mcp_configured.browsers[0].pages[0]
        assert ("evaluate", ["wcag22a"]) in page.calls
        call = scan_logger.log_scan.call_args
        assert call.args[1] == "scan_html"
        assert call.args[3] == 2

    async def test_scan_url_navigation_failure(
        self, mcp_configured: FakeLauncher, scan_logger: MagicMock
    ) -> None:
        async with Client(mcp) as client:
            with pytest.raises(ToolError, match="ERR_CONNECTION_REFUSED"):
                await client.call_tool(
                    "scan_url", {"url": "https://down.test/"}
                )
        scan_logger.log_error.assert_called_once()
        assert mcp_configured.browsers[0].closed

    async def test_page_failure_is_tool_error(
        self,
        mcp_configured: FakeLauncher,
        settings: Settings,
        scan_logger: MagicMock,
    ) -> None:
        launcher = FakeLauncher(
            lambda: FakeBrowser(fail_new_page=PlaywrightError("crashed"))
        )
        configure(settings, launcher=launcher, scan_logger=scan_logger)
        async with Client(mcp) as client:
            with pytest.raises(ToolError, match="open page failed"):
                await client.call_tool(
                    "scan_url", {"url": "https://a.test/"}
                )
        scan_logger.log_error.assert_called_once()
        assert launcher.browsers[0].closed

    async def test_invalid_url_rejected_before_launch(
        self, mcp_configured: FakeLauncher
    ) -> None:
        async with Client(mcp) as client:
            with pytest.raises(ToolError, match="not a valid http"):
                await client.call_tool(
                    "scan_url", {"url": "ftp://files.test/"}
                )
        assert mcp_configured.browsers == []

    async def test_unknown_level_rejected(
        self, mcp_configured: FakeLauncher
    ) -> None:
        async with Client(mcp) as client:
            with pytest.raises(ToolError):
                await client.call_tool(
                    "scan_url",
                    {"url": "https://a.test/", "level": "AAAA"},
                )
        assert mcp_configured.browsers == []

    async def test_scan_batch(
        self, mcp_configured: FakeLauncher, scan_logger: MagicMock
    ) -> None:
        urls = ["https://down.test/", "https://up.test/"]
        async with Client(mcp) as client:
            result = await client.call_tool(
                "scan_batch",
                {"urls": urls, "extraTags": ["best-practice"]},
            )
        entries = json.loads(
            result.content[0].text  # type: ignore[union-attr]
        )
        assert [e["url"] for e in entries] == urls
        assert "ERR_CONNECTION_REFUSED" in entries[0]["error"]
        assert entries[1]["results"] == RESULT
        assert scan_logger.log_scan.call_args.args[3] == 2

    async def test_scan_batch_empty(
        self, mcp_configured: FakeLauncher
    ) -> None:
        async with Client(mcp) as client:
            with pytest.raises(ToolError, match="urls"):
                await client.call_tool("scan_batch", {"urls": []})

    async def test_summarize_results(
        self, mcp_configured: FakeLauncher
    ) -> None:
        async with Client(mcp) as client:
            result = await client.call_tool(
                "summarize_results", {"results": json.dumps(RESULT)}
            )
        text = result.content[0].text  # type: ignore[union-attr]
        assert "Total violations: 2" in text
        assert "**image-alt help** (critical)" in text
        assert "region" not in text

    async def test_summarize_results_malformed(
        self, mcp_configured: FakeLauncher
    ) -> None:
        async with Client(mcp) as client:
            with pytest.raises(ToolError, match="parse results failed"):
                await client.call_tool(
                    "summarize_results", {"results": "not json"}
                )


class TestMcpResources:
    async def test_list_resource_templates(
        self, mcp_configured: FakeLauncher
    ) -> None:
        async with Client(mcp) as client:
            templates = await client.list_resource_templates()
        uris = {str(t.uriTemplate) for t in templates}
        assert uris == {"wcag://sc/{sc_id}", "wcag://sc/{sc_id}/{version}"}

    async def test_read_success_criterion(
        self, mcp_configured: FakeLauncher
    ) -> None:
        async with Client(mcp) as client:
            contents = await client.read_resource("wcag://sc/1.4.3")
        data = json.loads(contents[0].text)  # type: ignore[union-attr]
        assert data == {
            "id": "1.4.3",
            "spec": "https://www.w3.org/TR/WCAG22/",
            "quickref": "https://www.w3.org/WAI/WCAG22/quickref/#143",
            "understanding": "https://www.w3.org/WAI/WCAG22/Understanding/",
        }

    async def test_read_wcag21(self, mcp_configured: FakeLauncher) -> None:
        async with Client(mcp) as client:
            contents = await client.read_resource("wcag://sc/2.1.1/wcag21")
        data = json.loads(contents[0].text)  # type: ignore[union-attr]
        assert data["spec"] == "https://www.w3.org/TR/WCAG21/"

    async def test_bad_id(self, mcp_configured: FakeLauncher) -> None:
        async with Client(mcp) as client:
            with pytest.raises(McpError):
                await client.read_resource("wcag://sc/contrast")


class TestMcpPrompts:
    async def test_list_prompts(self, mcp_configured: FakeLauncher) -> None:
        async with Client(mcp) as client:
            prompts = await client.list_prompts()
        assert {p.name for p in prompts} == {"audit_page", "compare_pages"}

    async def test_compare_pages_prompt(
        self, mcp_configured: FakeLauncher
    ) -> None:
        async with Client(mcp) as client:
            result = await client.get_prompt(
                "compare_pages",
                {"urls": "https://a.test/, https://b.test/"},
            )
        text = result.messages[0].content.text  # type: ignore[union-attr]
        assert "- https://a.test/\n- https://b.test/" in text
        assert "scan_batch" in text
