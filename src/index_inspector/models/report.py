"""Summary of one extraction loop run."""

from typing import Optional

from pydantic import BaseModel, Field


class SkippedItem(BaseModel):
    """An item that was skipped, with enough context to re-run it later."""

    index: int
    value: str
    reason: str


class LoopReport(BaseModel):
    """What happened during a run: counts, skips and why the loop stopped."""

    total: int = 0
    extracted: int = 0
    skipped: list[SkippedItem] = Field(default_factory=list)
    aborted: bool = False
    stop_reason: Optional[str] = None
    snapshot_path: Optional[str] = None
