"""Storage tool - persist inspection results as JSON and CSV."""

import json
import logging
import os
from pathlib import Path
from typing import Iterator

import pandas as pd

from ..models.work_item import ExtractionResult, FieldValue

logger = logging.getLogger(__name__)


def dump_json(records: list[dict[str, FieldValue]]) -> str:
    """Pretty-printed JSON array, 2-space indent, field order preserved."""
    return json.dumps(records, ensure_ascii=False, indent=2)


def records_frame(records: list[dict[str, FieldValue]]) -> pd.DataFrame:
    """
    Tabular view of the records.
    Columns are the union of all keys in first-seen order; list fields
    are joined with ", " so each result stays on one row.
    """
    df = pd.DataFrame(records)
    for col in df.columns:
        if df[col].dtype == "object":
            if df[col].apply(lambda x: isinstance(x, list)).any():
                df[col] = df[col].apply(
                    lambda x: ", ".join(str(v) for v in x) if isinstance(x, list) else x
                )
    return df


def dump_csv(records: list[dict[str, FieldValue]]) -> str:
    return records_frame(records).to_csv(index=False, lineterminator="\n")


def _write_atomic(path: Path, content: str) -> None:
    """Write to a sibling temp file and swap it in, so readers never see half a file."""
    tmp = path.with_name(path.name + ".tmp")
    with open(tmp, "w", encoding="utf-8", newline="") as f:
        f.write(content)
        f.flush()
        try:
            os.fsync(f.fileno())  # Force write to disk
        except OSError:
            pass
    os.replace(tmp, path)


class ResultSink:
    """
    Owns the result collection for one run.
    append() is the only mutator; every call rewrites both output files in full.
    """

    def __init__(self, json_path: str | Path, csv_path: str | Path):
        self.json_path = Path(json_path).resolve()
        self.csv_path = Path(csv_path).resolve()
        self.json_path.parent.mkdir(parents=True, exist_ok=True)
        self.csv_path.parent.mkdir(parents=True, exist_ok=True)
        self._results: list[ExtractionResult] = []
        self._reset()
        logger.info("Writing results to %s and %s", self.json_path, self.csv_path)

    def _reset(self) -> None:
        """Delete output left over from a previous run."""
        for path in (self.json_path, self.csv_path):
            if path.exists():
                path.unlink()
                logger.info("Deleted existing file at %s", path)

    def __len__(self) -> int:
        return len(self._results)

    def __iter__(self) -> Iterator[ExtractionResult]:
        return iter(list(self._results))

    def records(self) -> list[dict[str, FieldValue]]:
        return [r.to_record() for r in self._results]

    def append(self, result: ExtractionResult) -> bool:
        """
        Add a result and persist everything collected so far.
        Returns False if writing failed; the result stays in memory and is
        written by the next successful flush.
        """
        self._results.append(result)
        return self.flush()

    def flush(self) -> bool:
        records = self.records()
        try:
            _write_atomic(self.json_path, dump_json(records))
            _write_atomic(self.csv_path, dump_csv(records))
        except OSError as e:
            logger.error(
                "Failed to write %d results to %s / %s: %s",
                len(records), self.json_path, self.csv_path, e,
                exc_info=True,
            )
            return False
        logger.debug("Stored %d results", len(records))
        return True


def load_results(json_path: str | Path) -> list[dict[str, FieldValue]]:
    """Read a results JSON file written by ResultSink."""
    with open(json_path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{json_path} does not contain a JSON array")
    return data


def export_excel(records: list[dict[str, FieldValue]], excel_path: str | Path) -> Path:
    """Write the records to an .xlsx sheet."""
    excel_path = Path(excel_path)
    records_frame(records).to_excel(excel_path, index=False, engine="openpyxl")
    return excel_path
