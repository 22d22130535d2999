"""Pytest fixtures for navbot tests."""

from __future__ import annotations

from typing import Callable, List
from unittest.mock import MagicMock

import pytest

from navbot.browser.core import BrowserAgent
from navbot.browser.manager import AgentManager
from navbot.config import AgentSettings

SAMPLE_HTML = """
<html>
  <head>
    <title>Example Domain</title>
    <meta name="description" content="An example page">
  </head>
  <body>
    <nav id="menu">
      <a href="/a">  A  </a>
      <a href="https://x.com/b">B</a>
    </nav>
    <main>
      <p class="lead">hello   world</p>
      <p class="lead">foo
         bar</p>
      <a href="docs/page.html">Docs</a>
      <a name="anchor-only">No href</a>
    </main>
  </body>
</html>
"""


@pytest.fixture
def page() -> MagicMock:
    """Stub Playwright page that records every driver interaction."""
    stub = MagicMock(name="page")
    stub.url = "https://example.com/page"
    stub.content.return_value = SAMPLE_HTML
    return stub


@pytest.fixture
def agent(page: MagicMock) -> BrowserAgent:
    return BrowserAgent(page)


@pytest.fixture
def no_settle(monkeypatch: pytest.MonkeyPatch) -> List[int]:
    """Record settle delays instead of sleeping through them."""
    delays: List[int] = []
    monkeypatch.setattr("navbot.browser.core._settle", delays.append)
    return delays


@pytest.fixture
def launches() -> List[bool]:
    return []


@pytest.fixture
def launcher(page: MagicMock, launches: List[bool]) -> Callable[..., BrowserAgent]:
    """Launcher that wraps the stub page instead of starting Chromium."""

    def _launch(settings: AgentSettings, *, headless: bool) -> BrowserAgent:
        launches.append(headless)
        return BrowserAgent(page)

    return _launch


@pytest.fixture
def manager(launcher: Callable[..., BrowserAgent]):
    mgr = AgentManager(AgentSettings(), launcher=launcher)
    yield mgr
    mgr.shutdown()
