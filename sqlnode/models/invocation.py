"""Invocation model.

An invocation is what the host hands the node each time it runs: the
selected operation, the batch of input items and the loosely-typed
parameter bag configured on the node.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field as PydanticField, field_validator

from sqlnode.exceptions import ConfigurationError
from sqlnode.models.credentials import Credentials
from sqlnode.models.item import NodeItem

_MISSING = object()


class Invocation(BaseModel):
    """One run of the node over a batch of items.

    Parameter values are either constants or callables taking
    ``(item, index)``; the latter stand in for host expressions that are
    evaluated per item (e.g. a query built from the item's fields).

    Examples:
        >>> Invocation(
        ...     operation="executeQuery",
        ...     parameters={"query": lambda item, i: f"SELECT * FROM t{i}"},
        ...     items=[{"a": 1}, {"a": 2}],
        ... )
    """

    operation: str = PydanticField(
        "insert",
        description="executeQuery, executeStoredProcedure, insert or update",
    )

    parameters: dict[str, Any] = PydanticField(
        default_factory=dict,
        description="Node parameters keyed by name",
    )

    items: list[NodeItem] = PydanticField(
        default_factory=list,
        description="Input items",
    )

    continue_on_fail: bool = PydanticField(
        False,
        description="Turn failures into a single error item instead of raising",
    )

    credentials: Optional[Credentials] = PydanticField(
        None,
        description="Credentials, when the invocation is loaded from a file",
    )

    model_config = {"extra": "forbid", "arbitrary_types_allowed": True}

    @field_validator("items", mode="before")
    @classmethod
    def wrap_plain_records(cls, v: Any) -> Any:
        """Accept plain mappings as item data."""
        if not isinstance(v, list):
            return v
        return [item if isinstance(item, NodeItem) else {"data": item} for item in v]

    def get_parameter(self, name: str, index: int = 0, default: Any = _MISSING) -> Any:
        """Read a parameter value as seen by the item at ``index``.

        Args:
            name: Parameter name
            index: Item index the value is evaluated for
            default: Returned when the parameter is not set

        Returns:
            The parameter value

        Raises:
            ConfigurationError: If the parameter is not set and has no default
        """
        if name not in self.parameters:
            if default is _MISSING:
                raise ConfigurationError(f"Missing required parameter: {name}")
            return default

        value = self.parameters[name]
        if callable(value):
            item = self.items[index] if index < len(self.items) else None
            return value(item, index)
        return value
