"""The SQL node: runs one operation per invocation over one connection.

This is the adapter the host calls. Per invocation it opens a single
connection, resolves the node parameters into a typed operation, runs it
and closes the connection exactly once, on every exit path.
"""

from __future__ import annotations

import logging
from typing import Callable, Literal, Optional

from pydantic import BaseModel

from sqlnode.core.connector import Connector
from sqlnode.core.registry import create_connector
from sqlnode.models.credentials import Credentials
from sqlnode.models.invocation import Invocation
from sqlnode.models.item import NodeItem
from sqlnode.models.operation import resolve_operation
from sqlnode.operations import BoundStatement, get_operation

logger = logging.getLogger(__name__)

ConnectorFactory = Callable[[Credentials], Connector]


class ConnectionTestResult(BaseModel):
    """Outcome of a credential test."""

    status: Literal["OK", "Error"]
    message: str

    model_config = {"extra": "forbid"}


class TableOption(BaseModel):
    """One entry of the table picker."""

    name: str
    value: str

    model_config = {"extra": "forbid"}


class SQLNode:
    """SQL operation adapter.

    Examples:
        >>> node = SQLNode()
        >>> invocation = Invocation(
        ...     operation="insert",
        ...     parameters={"table": "employees", "columns": "id,name"},
        ...     items=[{"id": 1, "name": "Ada"}],
        ... )
        >>> items = await node.execute(invocation, credentials)
    """

    def __init__(self, connector_factory: Optional[ConnectorFactory] = None):
        """Initialize the node.

        Args:
            connector_factory: Builds an unconnected Connector from
                credentials; defaults to the protocol registry
        """
        self.connector_factory = connector_factory or create_connector

    async def execute(self, invocation: Invocation, credentials: Credentials) -> list[NodeItem]:
        """Run the invocation's operation over its items.

        Connection failures propagate before anything else happens. Once
        connected, any failure (unknown operation, invalid parameters,
        statement errors) either becomes a single ``{"error": message}``
        item when ``continue_on_fail`` is set, or is raised after the
        connection has been closed.

        Args:
            invocation: Operation, parameters and items
            credentials: Database credentials

        Returns:
            Output items

        Raises:
            SQLNodeError: If the invocation fails and continue_on_fail is off
        """
        connector = self.connector_factory(credentials)
        await connector.connect()

        failed = False
        try:
            try:
                config = resolve_operation(invocation)
                operation = get_operation(config)
                logger.info(
                    "Running %s over %d items", invocation.operation, len(invocation.items)
                )
                return_items = await operation.run(connector, invocation.items)
            except Exception as e:
                failed = True
                if not invocation.continue_on_fail:
                    logger.error("Operation %s failed: %s", invocation.operation, e)
                    raise
                logger.warning(
                    "Operation %s failed, continuing: %s", invocation.operation, e
                )
                return_items = [NodeItem.error(str(e))]
        finally:
            await self._disconnect(connector, after_failure=failed)

        return return_items

    async def _disconnect(self, connector: Connector, after_failure: bool) -> None:
        """Close the connection once.

        After an operation failure the close error is only logged, so the
        first failure is the one the caller sees.
        """
        try:
            await connector.disconnect()
        except Exception as e:
            if not after_failure:
                raise
            logger.warning("Closing the connection failed after an earlier error: %s", e)

    def preview(self, invocation: Invocation) -> list[BoundStatement]:
        """Statements the invocation would execute, without connecting.

        Raises:
            UnsupportedOperationError: If the operation name is unknown
            ConfigurationError: If parameters are missing or invalid
        """
        operation = get_operation(resolve_operation(invocation))
        return operation.build_statements(invocation.items)

    async def test_credentials(self, credentials: Credentials) -> ConnectionTestResult:
        """Open one connection, ping the database over it and close it."""
        try:
            connector = self.connector_factory(credentials)
            await connector.connect()
            try:
                reachable = await connector.test_connection()
            finally:
                await connector.disconnect()
        except Exception as e:
            return ConnectionTestResult(status="Error", message=str(e))

        if not reachable:
            return ConnectionTestResult(status="Error", message="Connection test query failed")
        return ConnectionTestResult(status="OK", message="Connection successful!")

    async def search_tables(
        self, credentials: Credentials, filter: Optional[str] = None
    ) -> list[TableOption]:
        """List tables for the table picker.

        Args:
            credentials: Database credentials
            filter: Optional case-insensitive substring to match

        Returns:
            Table options, name and value both set to the table name
        """
        connector = self.connector_factory(credentials)
        await connector.connect()
        try:
            tables = await connector.list_tables()
        finally:
            await connector.disconnect()

        if filter:
            needle = filter.lower()
            tables = [table for table in tables if needle in table.lower()]
        return [TableOption(name=table, value=table) for table in tables]
