"""Pipeline agent - control plane for an index inspection run."""

import logging
from pathlib import Path
from typing import Callable

from ..config.loader import BrowserConfig, Config, Timeouts
from ..models.report import LoopReport
from ..tools.auth_tool import authenticate
from ..tools.browser_tool import BrowserSession, open_browser
from ..tools.input_tool import load_work_items
from ..tools.storage_tool import ResultSink
from .extraction_loop import ExtractionLoop

logger = logging.getLogger(__name__)

BrowserFactory = Callable[[BrowserConfig, Timeouts], BrowserSession]


class PipelineAgent:
    """
    Orchestrates one run: load URLs, log in, run the extraction loop.
    Owns the browser session and closes it on every exit path.
    Does NOT read page fields or decide per-item outcomes itself.
    """

    def __init__(self, config: Config, browser_factory: BrowserFactory = open_browser):
        self.config = config
        self.browser_factory = browser_factory

    def run(self) -> LoopReport:
        """Run full pipeline: load → authenticate → inspect each URL → store."""
        config = self.config
        # Input and credentials are checked before any browser is launched
        items = load_work_items(config.input_path)
        config.credentials.check()

        sink = ResultSink(config.output.json_path, config.output.csv_path)
        Path(config.output.snapshot_path).parent.mkdir(parents=True, exist_ok=True)

        session = self.browser_factory(config.browser, config.timeouts)
        try:
            authenticate(
                session,
                config.credentials,
                config.selectors,
                config.timeouts,
                config.browser,
            )
            loop = ExtractionLoop(session.page, sink, config)
            return loop.run(items)
        finally:
            session.close()
