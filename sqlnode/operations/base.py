"""Base Operation abstract class.

This module defines the Operation interface: one handler per node
operation, built from its typed configuration.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Union

from pydantic import BaseModel

from sqlnode.core.connector import Connector
from sqlnode.models.item import NodeItem


@dataclass
class BoundStatement:
    """SQL text plus the values bound to its placeholders.

    ``binds`` is a list for positional ``?`` placeholders and a dict for
    named ``:name`` placeholders.
    """

    sql: str
    binds: Union[list[Any], dict[str, Any]] = field(default_factory=list)


class Operation(ABC):
    """Base class for node operations.

    Operations compose a Connector rather than owning one; the node opens
    and closes the connection around ``run()``.

    Examples:
        >>> operation = InsertOperation(InsertConfig(table="t", columns="id,name"))
        >>> operation.build_statements(items)
        [BoundStatement(sql='INSERT INTO t(id,name) VALUES (?,?)', binds=[1, 'a'])]
        >>> await operation.run(connector, items)
    """

    def __init__(self, config: BaseModel):
        """Initialize operation with its resolved configuration.

        Args:
            config: Typed operation configuration
        """
        self.config = config

    @abstractmethod
    def build_statements(self, items: list[NodeItem]) -> list[BoundStatement]:
        """Statements this operation executes for ``items``, in order.

        Pure: no connection is needed, so hosts can preview them.
        """
        pass

    @abstractmethod
    async def run(self, connector: Connector, items: list[NodeItem]) -> list[NodeItem]:
        """Execute the operation and map results back to items.

        Args:
            connector: Connected connector
            items: Input items

        Returns:
            Output items

        Raises:
            ConnectorError: If a statement fails
        """
        pass
