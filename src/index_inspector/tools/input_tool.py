"""Input tool - read the list of URLs to inspect."""

import logging
from pathlib import Path

from ..errors import InputError
from ..models.work_item import WorkItem

logger = logging.getLogger(__name__)


def load_work_items(path: str | Path) -> list[WorkItem]:
    """
    Read newline-delimited URLs into WorkItems, one per line, in file order.
    Lines are split on '\\n' only; a trailing '\\r' stays in raw_value and is
    stripped later, when the value is stored or logged.
    Blank lines are kept; the extraction loop skips them.
    """
    path = Path(path)
    try:
        # newline="" disables universal newlines so '\r' survives the read
        with open(path, encoding="utf-8", newline="") as f:
            raw = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Cannot read input file {path}: {e}") from e

    items = [WorkItem(raw_value=line, index=index) for index, line in enumerate(raw.split("\n"))]

    logger.info("Checking %d urls", len(items))
    return items
