"""Browser tool - launch and release the Playwright session."""

import logging
from dataclasses import dataclass, field
from typing import Any

from playwright.sync_api import sync_playwright

from ..config.loader import BrowserConfig, Timeouts

logger = logging.getLogger(__name__)


@dataclass
class BrowserSession:
    """
    Handle to one browsing context and its page.
    Owned by the pipeline; the extraction loop only borrows `page`.
    """

    page: Any
    context: Any = None
    browser: Any = None
    playwright: Any = None
    authenticated: bool = False
    closed: bool = field(default=False, init=False)

    def close(self) -> None:
        """Release browser and driver. Safe to call more than once."""
        if self.closed:
            return
        self.closed = True
        try:
            if self.browser is not None:
                self.browser.close()
        finally:
            if self.playwright is not None:
                self.playwright.stop()
        logger.info("Browser closed")


def open_browser(browser_config: BrowserConfig, timeouts: Timeouts) -> BrowserSession:
    """
    Start Playwright, launch the configured engine and open one page.
    The page default timeout is set so no wait is unbounded.
    """
    pw = sync_playwright().start()
    try:
        engine = getattr(pw, browser_config.engine)
        browser = engine.launch(headless=browser_config.headless)
        context = browser.new_context()
        page = context.new_page()
        page.set_default_timeout(timeouts.default_timeout_ms)
    except Exception:
        pw.stop()
        raise
    logger.info(
        "Started %s browser (headless=%s)", browser_config.engine, browser_config.headless
    )
    return BrowserSession(page=page, context=context, browser=browser, playwright=pw)
