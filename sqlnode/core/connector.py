"""Base Connector abstract class.

This module defines the Connector interface for managing the single
database connection an invocation works on.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence


@dataclass(frozen=True)
class OutBind:
    """Marks a named bind as an output parameter of a procedure call.

    Attributes:
        type: "string", "number" or "date"
    """

    type: str = "string"


class Connector(ABC):
    """Base class for managing a connection to a database.

    A connector owns exactly one live connection between ``connect()`` and
    ``disconnect()``. Statements may be issued concurrently from several
    tasks; implementations are responsible for running them safely on the
    one connection.

    Examples:
        Using a connector as an async context manager:
        >>> async with SQLiteConnector(config) as conn:
        ...     rows = await conn.execute_query("SELECT * FROM orders")
    """

    def __init__(self, config: dict[str, Any]):
        """Initialize connector with configuration.

        Args:
            config: Connection configuration dictionary
        """
        self.config = config
        self.connection: Optional[Any] = None

    @abstractmethod
    async def connect(self) -> None:
        """Open the connection.

        Raises:
            ConnectionError: If connection fails
        """
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the connection.

        Should handle cases where connection is already closed gracefully.
        """
        pass

    @abstractmethod
    async def test_connection(self) -> bool:
        """Test connectivity to the database.

        Returns:
            True if connection is successful, False otherwise
        """
        pass

    @abstractmethod
    async def execute_query(self, query: str) -> list[dict[str, Any]]:
        """Execute a query without binds and return its rows.

        Args:
            query: SQL text

        Returns:
            List of records as dictionaries (empty for statements without rows)

        Raises:
            ConnectorError: If query execution fails
        """
        pass

    @abstractmethod
    async def execute_statement(self, statement: str, binds: Sequence[Any]) -> dict[str, Any]:
        """Execute a DML statement with positional ``?`` placeholders.

        Args:
            statement: SQL text using ``?`` for every bind
            binds: Values in placeholder order

        Returns:
            Result metadata, e.g. ``{"affected_rows": 2, "last_row_id": 7}``

        Raises:
            ConnectorError: If statement execution fails
        """
        pass

    @abstractmethod
    async def call_procedure(self, statement: str, binds: Mapping[str, Any]) -> dict[str, Any]:
        """Execute a procedure call with named binds.

        Args:
            statement: Call statement using ``:name`` placeholders
            binds: Name to value; ``OutBind`` values mark output parameters

        Returns:
            Output parameter name to returned value

        Raises:
            ConnectorError: If the call fails
        """
        pass

    @abstractmethod
    async def list_tables(self) -> list[str]:
        """List table names visible to the connected user.

        Raises:
            ConnectorError: If tables cannot be listed
        """
        pass

    async def __aenter__(self) -> Connector:
        """Async context manager entry: open the connection.

        Returns:
            Self
        """
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit: close the connection."""
        await self.disconnect()

    @property
    def is_connected(self) -> bool:
        """Check if connection is established.

        Returns:
            True if connected, False otherwise
        """
        return self.connection is not None
