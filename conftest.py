"""Shared fakes standing in for Playwright's async browser objects."""

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import urlparse

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeoutError


class FakePage:
    """Records every instruction it receives in the shared action log."""

    def __init__(self, name: str, actions: List[tuple]):
        self.name = name
        self.actions = actions
        self.missing = set()
        self.unclickable = set()
        self.timeouts: List[tuple] = []
        self.on_click: Dict[str, Callable[[], None]] = {}
        self.closed = False
        self.url = "about:blank"

    async def set_viewport_size(self, size):
        self.actions.append((self.name, "viewport", size["width"], size["height"]))

    async def goto(self, url):
        self.url = url
        self.actions.append((self.name, "goto", url))

    async def wait_for_selector(self, selector, state="visible", timeout=None):
        self.actions.append((self.name, "wait", selector, state))
        if selector in self.missing:
            raise PlaywrightTimeoutError(f"Timeout exceeded waiting for {selector}")

    async def click(self, selector, timeout=None):
        self.actions.append((self.name, "click", selector))
        self.timeouts.append(("click", selector, timeout))
        if selector in self.unclickable:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded clicking {selector}")
        hook = self.on_click.get(selector)
        if hook:
            hook()

    async def fill(self, selector, value, timeout=None):
        self.actions.append((self.name, "fill", selector, value))
        self.timeouts.append(("fill", selector, timeout))

    def is_closed(self):
        return self.closed


class FakeContext:
    def __init__(self, actions: List[tuple], cookies: List[Dict[str, Any]]):
        self.actions = actions
        self.pages: List[FakePage] = []
        self.cookie_jar = cookies

    def open_page(self, name: str, index: Optional[int] = None) -> FakePage:
        page = FakePage(name, self.actions)
        if index is None:
            self.pages.append(page)
        else:
            self.pages.insert(index, page)
        return page

    async def new_page(self):
        return self.open_page("original")

    async def cookies(self, urls=None):
        if urls is None:
            self.actions.append(("context", "cookies", None))
            return list(self.cookie_jar)
        self.actions.append(("context", "cookies", urls))
        host = urlparse(urls).hostname
        return [c for c in self.cookie_jar if host.endswith(c["domain"].lstrip("."))]


class FakeBrowser:
    def __init__(self, context: FakeContext):
        self.context = context
        self.close_count = 0

    async def new_context(self):
        return self.context

    async def close(self):
        self.close_count += 1


class FakePlaywright:
    """Async context manager mimicking async_playwright()."""

    def __init__(self, browser: FakeBrowser):
        self.browser = browser
        self.launch_options: Optional[Dict[str, Any]] = None
        self.started = False
        self.chromium = self

    async def launch(self, **options):
        self.launch_options = options
        return self.browser

    async def __aenter__(self):
        self.started = True
        return self

    async def __aexit__(self, *exc):
        return False


COOKIES = [
    {"name": "sid", "value": "abc123", "domain": "app.example", "path": "/",
     "expires": -1, "httpOnly": True, "secure": True, "sameSite": "Lax"},
    {"name": "NID", "value": "g00gle", "domain": ".google.com", "path": "/",
     "expires": -1, "httpOnly": True, "secure": True, "sameSite": "None"},
]


class FakeDriver:
    """Bundles the fake Playwright objects for one test."""

    def __init__(self):
        self.actions: List[tuple] = []
        self.context = FakeContext(self.actions, [dict(c) for c in COOKIES])
        self.browser = FakeBrowser(self.context)
        self.playwright = FakePlaywright(self.browser)
        self.factory_calls = 0

    def factory(self):
        self.factory_calls += 1
        return self.playwright

    def actions_for(self, page_name: str) -> List[tuple]:
        return [a for a in self.actions if a[0] == page_name]


@pytest.fixture
def driver():
    return FakeDriver()


@pytest.fixture
def sleeps(monkeypatch, driver):
    """Replace asyncio.sleep so delays are recorded in the action log instead of waited."""
    recorded = []

    async def fake_sleep(seconds, result=None):
        recorded.append(seconds)
        driver.actions.append(("timer", "sleep", seconds))
        return result

    monkeypatch.setattr(asyncio, "sleep", fake_sleep)
    return recorded


@pytest.fixture
def restore_root_logger():
    """Undo setup_logging's changes to the root logger."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
