"""Auth tool - log into Search Console on the session's page."""

import logging

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from ..config.loader import BrowserConfig, Credentials, Selectors, Timeouts
from ..errors import AuthenticationError
from ..models.page_state import PageClassification
from .browser_tool import BrowserSession

logger = logging.getLogger(__name__)


def detect_second_factor(page, selectors: Selectors, timeouts: Timeouts) -> PageClassification | None:
    """Short bounded probe for the 2-step verification prompt."""
    try:
        page.wait_for_selector(
            selectors.second_factor_marker, timeout=timeouts.second_factor_probe_ms
        )
    except PlaywrightTimeoutError:
        return None
    return PageClassification.SECOND_FACTOR_REQUIRED


def authenticate(
    session: BrowserSession,
    credentials: Credentials,
    selectors: Selectors,
    timeouts: Timeouts,
    browser_config: BrowserConfig,
) -> BrowserSession:
    """
    Submit identity and secret, give the operator time for a second factor,
    then wait for the Search Console landing page.
    Raises AuthenticationError when any bounded wait runs out.
    """
    page = session.page
    delay = browser_config.type_delay_ms
    try:
        page.goto(selectors.login_url)

        logger.info("Entering email...")
        page.type(selectors.identity_input, credentials.identity, delay=delay)
        page.keyboard.press("Enter")

        logger.info("Entering password...")
        page.wait_for_selector(selectors.secret_input)
        page.type(selectors.secret_input, credentials.resolve_secret(), delay=delay)
        page.keyboard.press("Enter")

        if detect_second_factor(page, selectors, timeouts):
            logger.warning(
                "You have 2-step Verification enabled. Check your device to pass to the next "
                "step. Waiting %d seconds before looking for the landing page.",
                timeouts.second_factor_wait_ms // 1000,
            )
            page.wait_for_timeout(timeouts.second_factor_wait_ms)
        else:
            logger.info("No 2-step Verification was detected. Accessing Search Console...")

        page.wait_for_selector(selectors.landing_marker, timeout=timeouts.landing_timeout_ms)
    except PlaywrightError as e:
        # PlaywrightTimeoutError is a subclass
        raise AuthenticationError(f"Login did not complete: {e}") from e

    session.authenticated = True
    logger.info("Logged in, Search Console landing page loaded")
    return session
