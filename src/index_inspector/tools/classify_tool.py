"""Classify tool - decide what state the inspection page is in."""

import logging
from typing import Optional

from ..config.loader import MarkerRule
from ..models.page_state import (
    DISPOSITION_STATES,
    DISPOSITIONS,
    Disposition,
    LoopState,
    PageClassification,
)

logger = logging.getLogger(__name__)


def classify_page(
    page, policy: list[MarkerRule]
) -> tuple[PageClassification, Optional[MarkerRule]]:
    """
    Probe the page for each policy marker in order.
    The first marker present decides; no marker means the page is ready.
    """
    for rule in policy:
        if page.query_selector(rule.selector):
            logger.debug("Marker %s matched (%s)", rule.name, rule.selector)
            return rule.classification, rule
    return PageClassification.READY, None


def disposition_for(classification: PageClassification) -> Disposition:
    try:
        return DISPOSITIONS[classification]
    except KeyError:
        raise ValueError(f"No loop disposition for {classification.value}") from None


def next_state_for(classification: PageClassification) -> LoopState:
    """Loop state that follows a classified page."""
    return DISPOSITION_STATES[disposition_for(classification)]
