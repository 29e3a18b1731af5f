"""Extract tool - read the inspection result fields from the page."""

import logging

from ..config.loader import ExtractionConfig, Selectors
from ..errors import DetailGroupMismatch, ExtractionError
from ..models.work_item import ExtractionResult, FieldValue, WorkItem

logger = logging.getLogger(__name__)


TEXT_JS = "sel => document.querySelector(sel).textContent"
GROUPS_JS = "sel => Array.from(document.querySelectorAll(sel)).map(el => el.innerText.split(/\\n/))"


def _read_text(page, selector: str) -> str:
    text = page.evaluate(TEXT_JS, selector)
    if text is None:
        raise ExtractionError(f"No text content for {selector}")
    return text


def _read_groups(page, selector: str) -> list[list[str]]:
    groups = page.evaluate(GROUPS_JS, selector)
    return [[str(v) for v in group] for group in groups or []]


def _join(values: list[str]) -> str:
    # Same as JS Array.prototype.toString: one value comes back unchanged
    return ",".join(values)


def fold_groups(
    groups: list[list[str]],
    url: str,
    extraction: ExtractionConfig,
) -> dict[str, FieldValue]:
    """
    Turn detail groups into named fields.
    Groups must appear in the declared order; missing groups raise
    DetailGroupMismatch, extra trailing groups are ignored.
    """
    names = extraction.detail_groups
    if len(groups) < len(names):
        raise DetailGroupMismatch(names, len(groups))
    if len(groups) > len(names):
        logger.debug("Ignoring %d extra detail groups", len(groups) - len(names))

    fields: dict[str, FieldValue] = {}
    for name, values in zip(names, groups):
        if name == extraction.self_canonical_group and values[:1] == [extraction.self_canonical_placeholder]:
            fields[name] = url
        elif name in extraction.multi_value_groups and len(values) > 1:
            fields[name] = list(values)
        else:
            fields[name] = _join(values)
    return fields


def extract_fields(
    page,
    item: WorkItem,
    selectors: Selectors,
    extraction: ExtractionConfig,
) -> ExtractionResult:
    """
    Open the detailed inspection result and read every field.
    Only returns once all reads succeeded; any failure propagates.
    """
    page.click(selectors.submit)
    page.wait_for_selector(selectors.result_marker)

    fields: dict[str, FieldValue] = {}
    fields["coverage"] = _read_text(page, selectors.coverage)
    fields["index state"] = _read_text(page, selectors.index_state)
    logger.info("%s", fields["index state"])
    fields["index state description"] = _read_text(page, selectors.index_state_description)

    page.click(selectors.details_toggle)
    fields["last crawl"] = _read_text(page, selectors.last_crawl)

    groups = _read_groups(page, selectors.detail_groups)
    fields.update(fold_groups(groups, item.normalized, extraction))

    return ExtractionResult(url=item.normalized, fields=fields)
