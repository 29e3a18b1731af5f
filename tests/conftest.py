"""Shared fixtures: a fake Playwright page and a test config.

The fake page implements just the Page methods the pipeline calls.  Markers
present on the page are plain selector strings; per-URL markers and detail
groups switch in when a URL is typed into the query input, the same way the
real inspection page changes after a search.
"""

from __future__ import annotations

import pytest
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from index_inspector.config.loader import Config, Selectors
from index_inspector.tools.extract_tool import GROUPS_JS, TEXT_JS
from index_inspector.tools.storage_tool import ResultSink

SELECTORS = Selectors()

QUOTA = "text=Quota exceeded"
SERVICE_ERROR = "text=Something went wrong"
NOT_IN_PROPERTY = "text=URL not in property"

DEFAULT_GROUPS = [
    ["https://example.com/sitemap.xml"],
    ["https://example.com/"],
    ["https://example.com/page"],
    ["Inspected URL"],
]

DEFAULT_TEXTS = {
    SELECTORS.coverage: "Submitted and indexed",
    SELECTORS.index_state: "URL is on Google",
    SELECTORS.index_state_description: "It can appear in Google Search results",
    SELECTORS.last_crawl: "Aug 1, 2024, 10:00:00 AM",
}


class FakeKeyboard:
    def __init__(self, page: "FakePage"):
        self.page = page

    def press(self, key: str) -> None:
        self.page.calls.append(("press", key))


class FakePage:
    def __init__(
        self,
        present: set[str] | None = None,
        item_markers: dict[str, set[str]] | None = None,
        item_groups: dict[str, list[list[str]]] | None = None,
        texts: dict[str, str | None] | None = None,
        groups: list[list[str]] | None = None,
        goto_failures: int = 0,
        screenshot_error: bool = False,
    ):
        self.base_present = set(present if present is not None else {
            SELECTORS.secret_input,
            SELECTORS.landing_marker,
            SELECTORS.search_box,
            SELECTORS.result_marker,
        })
        self.present = set(self.base_present)
        self.item_markers = item_markers or {}
        self.item_groups = item_groups or {}
        self.texts = dict(DEFAULT_TEXTS if texts is None else texts)
        self.default_groups = groups if groups is not None else DEFAULT_GROUPS
        self.groups = self.default_groups
        self.goto_failures = goto_failures
        self.screenshot_error = screenshot_error
        self.keyboard = FakeKeyboard(self)
        self.calls: list[tuple] = []
        self.screenshots: list[tuple[str, bool]] = []
        self.typed: list[tuple[str, str]] = []
        self.default_timeout = None

    # navigation / input
    def goto(self, url: str) -> None:
        self.calls.append(("goto", url))
        if self.goto_failures:
            self.goto_failures -= 1
            raise PlaywrightError("net::ERR_CONNECTION_RESET")
        self.present = set(self.base_present)
        self.groups = self.default_groups

    def type(self, selector: str, text: str, delay: float = 0) -> None:
        self.calls.append(("type", selector, text))
        self.typed.append((selector, text))
        if selector == SELECTORS.query_input:
            self.present |= self.item_markers.get(text, set())
            self.groups = self.item_groups.get(text, self.default_groups)

    def click(self, selector: str) -> None:
        self.calls.append(("click", selector))

    # waits and probes
    def wait_for_selector(self, selector: str, timeout: float | None = None):
        self.calls.append(("wait_for_selector", selector, timeout))
        if selector not in self.present:
            raise PlaywrightTimeoutError(f"Timeout waiting for {selector}")
        return object()

    def wait_for_timeout(self, timeout: float) -> None:
        self.calls.append(("wait_for_timeout", timeout))

    def query_selector(self, selector: str):
        return object() if selector in self.present else None

    def set_default_timeout(self, timeout: float) -> None:
        self.default_timeout = timeout

    # reads
    def evaluate(self, expression: str, arg=None):
        if expression == TEXT_JS:
            if arg not in self.texts:
                raise PlaywrightError(f"TypeError: document.querySelector(...) is null ({arg})")
            return self.texts[arg]
        if expression == GROUPS_JS:
            return [list(g) for g in self.groups]
        raise AssertionError(f"unexpected evaluate: {expression}")

    def screenshot(self, path: str, full_page: bool = False) -> bytes:
        self.screenshots.append((path, full_page))
        if self.screenshot_error:
            raise PlaywrightError("screenshot failed")
        return b""

    def count(self, name: str) -> int:
        return sum(1 for c in self.calls if c[0] == name)


class FakeSession:
    """Stands in for BrowserSession; records close() calls."""

    def __init__(self, page: FakePage):
        self.page = page
        self.authenticated = False
        self.close_calls = 0

    def close(self) -> None:
        self.close_calls += 1


@pytest.fixture
def config(tmp_path) -> Config:
    return Config.from_dict({
        "credentials": {"identity": "me@example.com", "secret": "hunter2", "site": "https://example.com/"},
        "input_path": str(tmp_path / "urls.csv"),
        "timeouts": {
            "second_factor_probe_ms": 0,
            "second_factor_wait_ms": 0,
            "search_settle_ms": 0,
            "quota_settle_ms": 0,
            "snapshot_settle_ms": 0,
        },
        "retry_policy": {"max_attempts": 3, "backoff_seconds": 0},
        "output": {
            "json_path": str(tmp_path / "out" / "results.json"),
            "csv_path": str(tmp_path / "out" / "results.csv"),
            "snapshot_path": str(tmp_path / "out" / "quota-exc.png"),
        },
    })


@pytest.fixture
def sink(config) -> ResultSink:
    return ResultSink(config.output.json_path, config.output.csv_path)
