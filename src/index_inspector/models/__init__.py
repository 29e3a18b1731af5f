"""Data models for the index inspection pipeline."""

from .work_item import WorkItem, ExtractionResult, FieldValue, strip_cr
from .page_state import (
    PageClassification,
    Disposition,
    LoopState,
    DISPOSITIONS,
    DISPOSITION_STATES,
)
from .report import LoopReport, SkippedItem

__all__ = [
    "WorkItem",
    "ExtractionResult",
    "FieldValue",
    "strip_cr",
    "PageClassification",
    "Disposition",
    "LoopState",
    "DISPOSITIONS",
    "DISPOSITION_STATES",
    "LoopReport",
    "SkippedItem",
]
