"""Work item and extraction result models."""

from typing import Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

FieldValue = Union[str, list[str]]


def strip_cr(value: str) -> str:
    """Remove carriage returns left over from Windows line endings."""
    return value.replace("\r", "")


class WorkItem(BaseModel):
    """One line of the input file, kept verbatim."""

    model_config = ConfigDict(frozen=True)

    raw_value: str = Field(..., description="Line as read, may end with '\\r'")
    index: int = Field(..., ge=0, description="0-based position in the input file")

    @property
    def normalized(self) -> str:
        return strip_cr(self.raw_value)

    @property
    def number(self) -> int:
        """1-based position, for log messages."""
        return self.index + 1


class ExtractionResult(BaseModel):
    """Fields read for one successfully inspected URL."""

    model_config = ConfigDict(frozen=True)

    url: str
    fields: dict[str, FieldValue] = Field(default_factory=dict)

    @field_validator("url")
    @classmethod
    def _strip_cr(cls, value: str) -> str:
        return strip_cr(value)

    def to_record(self) -> dict[str, FieldValue]:
        """Flat record with url first, then fields in extraction order."""
        record: dict[str, FieldValue] = {"url": self.url}
        for key, value in self.fields.items():
            record[key] = list(value) if isinstance(value, list) else value
        return record
