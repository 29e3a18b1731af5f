"""Extraction loop - per-URL state machine over one authenticated page."""

import logging
from typing import Iterable, Iterator, Optional
from urllib.parse import quote

from playwright.sync_api import Error as PlaywrightError
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..config.loader import Config, MarkerRule
from ..errors import ExtractionError
from ..models.page_state import LoopState, PageClassification
from ..models.report import LoopReport, SkippedItem
from ..models.work_item import WorkItem
from ..tools.classify_tool import classify_page, next_state_for
from ..tools.extract_tool import extract_fields
from ..tools.storage_tool import ResultSink

logger = logging.getLogger(__name__)


def inspect_url(template: str, site: str) -> str:
    """Inspection entry point for a property; site is escaped like encodeURIComponent."""
    return template.format(site=quote(site, safe="-_.!~*'()"))


class ExtractionLoop:
    """
    Drives one item at a time through
    IDLE -> NAVIGATING -> CLASSIFYING -> EXTRACTING | SKIPPING | ABORTING -> IDLE,
    until STOPPED. Each state has one handler returning the next state.
    Borrows the page; closing it is the caller's job.
    """

    def __init__(self, page, sink: ResultSink, config: Config):
        self.page = page
        self.sink = sink
        self.config = config
        self.state = LoopState.IDLE
        self.report = LoopReport()
        self._items: Iterator[WorkItem] = iter(())
        self._item: Optional[WorkItem] = None
        self._classification: Optional[PageClassification] = None
        self._rule: Optional[MarkerRule] = None
        self._skip_reason = ""
        self._handlers = {
            LoopState.IDLE: self._on_idle,
            LoopState.NAVIGATING: self._on_navigating,
            LoopState.CLASSIFYING: self._on_classifying,
            LoopState.EXTRACTING: self._on_extracting,
            LoopState.SKIPPING: self._on_skipping,
            LoopState.ABORTING: self._on_aborting,
        }

    def run(self, items: Iterable[WorkItem]) -> LoopReport:
        items = list(items)
        self.report = LoopReport(total=len(items))
        self._items = iter(items)
        self.state = LoopState.IDLE
        while self.state != LoopState.STOPPED:
            self.state = self.step()
        logger.info(
            "Loop stopped: %d extracted, %d skipped of %d (%s)",
            self.report.extracted,
            len(self.report.skipped),
            self.report.total,
            self.report.stop_reason,
        )
        return self.report

    def step(self) -> LoopState:
        """Run the handler for the current state and return the next state."""
        return self._handlers[self.state]()

    def _on_idle(self) -> LoopState:
        self._item = next(self._items, None)
        self._classification = None
        self._rule = None
        self._skip_reason = ""
        if self._item is None:
            self.report.stop_reason = "all items processed"
            return LoopState.STOPPED
        if not self._item.normalized.strip():
            self._skip_reason = "blank line"
            return LoopState.SKIPPING
        return LoopState.NAVIGATING

    def _goto(self, url: str) -> None:
        policy = self.config.retry_policy
        for attempt in Retrying(
            stop=stop_after_attempt(policy.max_attempts),
            wait=wait_exponential(multiplier=policy.backoff_seconds, max=30),
            retry=retry_if_exception_type(PlaywrightError),
            reraise=True,
        ):
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.warning("Retrying navigation to %s (attempt %d)", url, attempt.retry_state.attempt_number)
                self.page.goto(url)

    def _on_navigating(self) -> LoopState:
        selectors = self.config.selectors
        timeouts = self.config.timeouts
        page = self.page

        # Every item starts from the same inspection surface; the URL goes in the search box
        self._goto(inspect_url(selectors.inspect_url_template, self.config.credentials.site))
        page.wait_for_selector(selectors.search_box)
        page.wait_for_timeout(timeouts.search_settle_ms)

        page.click(selectors.search_form)
        page.type(selectors.query_input, self._item.raw_value, delay=self.config.browser.query_type_delay_ms)

        # The quota banner can only be seen after it renders; its absence cannot be awaited
        page.wait_for_timeout(timeouts.quota_settle_ms)
        return LoopState.CLASSIFYING

    def _on_classifying(self) -> LoopState:
        self._classification, self._rule = classify_page(self.page, self.config.failure_policy)
        next_state = next_state_for(self._classification)
        if next_state == LoopState.SKIPPING:
            self._skip_reason = self._rule.message or self._rule.name
        return next_state

    def _on_extracting(self) -> LoopState:
        item = self._item
        logger.info("Retrieving #%d %s", item.number, item.normalized)
        try:
            result = extract_fields(self.page, item, self.config.selectors, self.config.extraction)
        except (PlaywrightError, ExtractionError) as e:
            if self.config.extraction_errors == "abort":
                logger.error("Extraction failed for #%d %s, stopping: %s", item.number, item.normalized, e)
                raise
            self._skip_reason = f"extraction failed: {e}"
            return LoopState.SKIPPING

        self.sink.append(result)
        self.report.extracted += 1
        return LoopState.IDLE

    def _on_skipping(self) -> LoopState:
        item = self._item
        logger.warning("URL #%d %s skipped: %s", item.number, item.normalized, self._skip_reason)
        self.report.skipped.append(
            SkippedItem(index=item.index, value=item.normalized, reason=self._skip_reason)
        )
        return LoopState.IDLE

    def _on_aborting(self) -> LoopState:
        rule = self._rule
        logger.error("%s Stopping at URL #%d %s.", rule.message or rule.name, self._item.number, self._item.normalized)
        self.report.aborted = True
        self.report.stop_reason = rule.name
        self._take_snapshot()
        return LoopState.STOPPED

    def _take_snapshot(self) -> None:
        path = self.config.output.snapshot_path
        try:
            self.page.wait_for_timeout(self.config.timeouts.snapshot_settle_ms)
            self.page.screenshot(path=path, full_page=True)
        except PlaywrightError as e:
            logger.error("Could not save diagnostic screenshot to %s: %s", path, e)
            return
        self.report.snapshot_path = path
        logger.info("Saved diagnostic screenshot to %s", path)
