"""Projection of input items onto a column list."""

from __future__ import annotations

import copy
from typing import Any, Mapping


def project_columns(record: Mapping[str, Any], columns: list[str]) -> list[Any]:
    """Values of ``columns`` in ``record``, in column order.

    Missing fields become None. Values are deep-copied so statements never
    share mutable state with the host's items.

    Examples:
        >>> project_columns({"id": 1, "name": "a", "extra": True}, ["id", "name", "missing"])
        [1, 'a', None]
    """
    return [copy.deepcopy(record.get(column)) for column in columns]

