"""Page classification, dispositions and extraction loop states."""

from enum import Enum


class PageClassification(str, Enum):
    """State of a just-navigated page. Always re-derived from the current page."""

    READY = "READY"
    QUOTA_EXCEEDED = "QUOTA_EXCEEDED"
    TRANSIENT_ERROR = "TRANSIENT_ERROR"
    ITEM_NOT_APPLICABLE = "ITEM_NOT_APPLICABLE"
    SECOND_FACTOR_REQUIRED = "SECOND_FACTOR_REQUIRED"  # login only


class Disposition(str, Enum):
    """What the loop does with the current item."""

    CONTINUE = "CONTINUE"
    SKIP_ITEM = "SKIP_ITEM"
    ABORT = "ABORT"


DISPOSITIONS = {
    PageClassification.READY: Disposition.CONTINUE,
    PageClassification.QUOTA_EXCEEDED: Disposition.ABORT,
    PageClassification.TRANSIENT_ERROR: Disposition.SKIP_ITEM,
    PageClassification.ITEM_NOT_APPLICABLE: Disposition.SKIP_ITEM,
}


class LoopState(str, Enum):
    """Extraction loop states. All transitions are made by ExtractionLoop."""

    IDLE = "IDLE"
    NAVIGATING = "NAVIGATING"
    CLASSIFYING = "CLASSIFYING"
    EXTRACTING = "EXTRACTING"
    SKIPPING = "SKIPPING"
    ABORTING = "ABORTING"
    STOPPED = "STOPPED"  # terminal


# Next state once the page has been classified
DISPOSITION_STATES = {
    Disposition.CONTINUE: LoopState.EXTRACTING,
    Disposition.SKIP_ITEM: LoopState.SKIPPING,
    Disposition.ABORT: LoopState.ABORTING,
}
