"""Main entry point for the index inspection pipeline."""

import argparse
import logging
import sys
from pathlib import Path

from playwright.sync_api import Error as PlaywrightError

from .agent.pipeline_agent import PipelineAgent
from .config.loader import load_config
from .errors import PipelineError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_ABORTED = 2


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Check Search Console indexing status for a list of URLs"
    )
    parser.add_argument(
        "-c",
        "--config",
        default="config/config.yaml",
        help="Path to config file (YAML or JSON)",
    )
    parser.add_argument(
        "-i",
        "--input",
        help="URL list to inspect, overrides input_path from the config",
    )
    parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    args = parser.parse_args(argv)

    # Resolve paths relative to project root
    project_root = Path(__file__).resolve().parent.parent.parent
    config_path = Path(args.config)
    if not config_path.is_absolute():
        config_path = project_root / config_path

    if not config_path.exists():
        print(f"Config not found: {config_path}", file=sys.stderr)
        return EXIT_ERROR

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        config = load_config(config_path)
        if args.input:
            config.input_path = str(Path(args.input).resolve())
        if args.headed:
            config.browser.headless = False
        if not Path(config.input_path).is_absolute():
            config.input_path = str(project_root / config.input_path)
        for name in ("json_path", "csv_path", "snapshot_path"):
            value = getattr(config.output, name)
            if not Path(value).is_absolute():
                setattr(config.output, name, str(project_root / value))

        report = PipelineAgent(config).run()
    except (PipelineError, PlaywrightError) as e:
        logger.error("There was an error running the pipeline: %s", e)
        return EXIT_ERROR

    print(
        f"Inspected {report.extracted} of {report.total} URLs "
        f"({len(report.skipped)} skipped). Results saved to {config.output.json_path}"
    )
    if report.aborted:
        print(f"Run stopped early: {report.stop_reason}", file=sys.stderr)
        return EXIT_ABORTED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
