"""Host item model.

An item is one record travelling between workflow nodes: a JSON-like
mapping plus the index of the input item it was produced from.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field as PydanticField


class NodeItem(BaseModel):
    """A single input or output record."""

    data: dict[str, Any] = PydanticField(
        default_factory=dict,
        description="Field name to value mapping",
    )

    paired_item: Optional[int] = PydanticField(
        None,
        description="Index of the input item this record originates from",
        ge=0,
    )

    model_config = {"extra": "forbid"}

    @classmethod
    def from_records(
        cls, records: list[dict[str, Any]], paired_item: Optional[int] = None
    ) -> list[NodeItem]:
        """Wrap plain records as items, optionally tagging their source index."""
        return [cls(data=dict(record), paired_item=paired_item) for record in records]

    @classmethod
    def error(cls, message: str) -> NodeItem:
        """Build the single record returned when continuing on failure."""
        return cls(data={"error": message})
