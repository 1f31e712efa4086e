"""CallableResult model for the typedform callable protocol."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class NormalizationStats(BaseModel):
    """Counts for one execute() call."""

    input: int = 0
    output: int = 0
    skipped: int = 0  # Items that were not objects and passed through
    coerced_fields: int = 0


class CallableResult(BaseModel):
    """Result returned by typedform's execute().

    Carries either the normalized payloads inline (`items`) or a reference
    to them (`items_ref`), never both.
    """

    schema_version: str = "1.0"
    items: list[Any] | None = None
    items_ref: str | None = None
    stats: NormalizationStats = Field(default_factory=NormalizationStats)

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def check_single_payload_source(self) -> CallableResult:
        if (self.items is None) == (self.items_ref is None):
            raise ValueError("Exactly one of 'items' or 'items_ref' must be set")
        return self

    @classmethod
    def inline(cls, items: list[Any], stats: NormalizationStats) -> CallableResult:
        return cls(items=items, stats=stats)

    def to_dict(self) -> dict[str, Any]:
        """Serialize, leaving out whichever payload source is unset.

        Payload items are passed through as-is so None values inside them
        survive.
        """
        result: dict[str, Any] = {"schema_version": self.schema_version}
        if self.items is not None:
            result["items"] = self.items
        else:
            result["items_ref"] = self.items_ref
        result["stats"] = self.stats.model_dump()
        return result
