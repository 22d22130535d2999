"""Tests for the browser-less fetch path."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from navbot import fetch as fetch_module
from navbot.browser.errors import ErrorKind
from navbot.browser.manager import AgentManager
from navbot.fetch import MAX_WORDS, USER_AGENT, fetch_page


def _transport(status: int, body: str = "", seen: list | None = None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status, text=body, headers={"content-type": "text/html"})

    return httpx.MockTransport(handler)


class TestFetchPage:
    """Tests for fetch_page."""

    @pytest.mark.asyncio
    async def test_success_extracts_title_and_text(self) -> None:
        seen: list = []
        body = "<html><head><title>Hello</title></head><body><h1>Hi</h1>\n<p>there  you</p></body></html>"

        result = await fetch_page("https://example.com/", transport=_transport(200, body, seen))

        assert result.success is True
        assert result.data == {"url": "https://example.com/", "title": "Hello", "text": "Hi there you"}
        assert seen[0].headers["User-Agent"] == USER_AGENT

    @pytest.mark.asyncio
    async def test_text_capped_to_word_limit(self) -> None:
        words = " ".join(f"w{i}" for i in range(MAX_WORDS + 50))
        body = f"<html><body><p>{words}</p></body></html>"

        result = await fetch_page("https://example.com/", transport=_transport(200, body))

        tokens = result.data["text"].split(" ")
        assert len(tokens) == MAX_WORDS
        assert tokens[-1] == f"w{MAX_WORDS - 1}"

    @pytest.mark.asyncio
    async def test_404_skips_parsing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test non-2xx responses fail with the status code and are not parsed."""

        def _no_parse(html: str):
            raise AssertionError("markup must not be parsed on HTTP errors")

        monkeypatch.setattr(fetch_module, "parse_document", _no_parse)

        result = await fetch_page("https://example.com/missing", transport=_transport(404, "nope"))

        assert result.success is False
        assert result.kind is ErrorKind.HTTP
        assert "404" in result.error

    @pytest.mark.asyncio
    async def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        result = await fetch_page("https://example.com/", transport=httpx.MockTransport(handler))

        assert result.kind is ErrorKind.HTTP
        assert result.error.startswith("Request failed:")

    @pytest.mark.asyncio
    async def test_empty_url(self) -> None:
        result = await fetch_page("")

        assert result.kind is ErrorKind.VALIDATION

    @pytest.mark.asyncio
    async def test_malformed_url_is_rejected(self) -> None:
        """Test URLs httpx cannot parse come back as a validation failure."""
        result = await fetch_page("http://[::1", transport=_transport(200, "<p>unused</p>"))

        assert result.success is False
        assert result.kind is ErrorKind.VALIDATION
        assert result.error.startswith("Invalid URL:")

    @pytest.mark.asyncio
    async def test_runs_while_browser_is_busy(self, manager: AgentManager) -> None:
        """Test fetching does not wait on the browser agent's lock."""
        body = "<html><head><title>Free</title></head><body>ok</body></html>"
        assert manager._lock.acquire(timeout=1)
        try:
            result = await asyncio.wait_for(
                fetch_page("https://example.com/", transport=_transport(200, body)),
                timeout=2,
            )
        finally:
            manager._lock.release()

        assert result.success is True
        assert result.data["title"] == "Free"
