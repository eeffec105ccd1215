"""SQL-based connector base class using SQLAlchemy's asyncio extension.

This module provides a base class for database connectors that open one
SQLAlchemy ``AsyncConnection`` per invocation.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
import re
from abc import abstractmethod
from typing import Any, Mapping, Optional, Sequence, Union

from sqlalchemy import Date, Numeric, String, bindparam, inspect, outparam, text
from sqlalchemy.engine import URL
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from sqlnode.core.config import config as sqlnode_config
from sqlnode.core.connector import Connector, OutBind
from sqlnode.exceptions import ConnectionError, ConnectorError

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\?")

OUT_BIND_TYPES = {
    "string": String,
    "number": Numeric,
    "date": Date,
}


def render_placeholders(statement: str, paramstyle: str) -> str:
    """Rewrite ``?`` placeholders into the driver's paramstyle.

    Every ``?`` in the text is treated as a placeholder, including one inside
    a quoted identifier.

    Args:
        statement: SQL text using ``?`` placeholders
        paramstyle: DBAPI paramstyle of the driver

    Returns:
        SQL text the driver accepts with a positional bind sequence

    Examples:
        >>> render_placeholders("UPDATE t SET a = ? WHERE id = ?", "named")
        'UPDATE t SET a = :1 WHERE id = :2'
        >>> render_placeholders("VALUES (?,?)", "format")
        'VALUES (%s,%s)'
    """
    if paramstyle in ("named", "numeric"):
        counter = itertools.count(1)
        return _PLACEHOLDER.sub(lambda _: f":{next(counter)}", statement)
    if paramstyle == "numeric_dollar":
        counter = itertools.count(1)
        return _PLACEHOLDER.sub(lambda _: f"${next(counter)}", statement)
    if paramstyle in ("format", "pyformat"):
        return _PLACEHOLDER.sub("%s", statement)
    return statement


class SQLConnector(Connector):
    """Base class for SQL database connectors using SQLAlchemy asyncio.

    Provides:
    - Async engine creation with ``NullPool`` (no pooling in sqlnode)
    - One ``AsyncConnection`` per connect/disconnect cycle
    - Serialized statement execution on that connection
    - Row mapping, DML metadata, procedure OUT binds, table listing

    Subclasses must implement:
    - _build_connection_url(): Database-specific SQLAlchemy URL
    - _get_database_name(): Database name for error messages

    Configuration keys:
        - user: Username
        - password: Password
        - connect_string: DSN or SQLAlchemy URL
        - echo: Enable SQL logging (default: SQLNODE_ECHO_SQL)
    """

    def __init__(self, config: dict[str, Any]):
        """Initialize SQL connector.

        Args:
            config: Connection configuration dictionary
        """
        super().__init__(config)
        self.engine: Optional[AsyncEngine] = None
        self.connection: Optional[AsyncConnection] = None
        self._lock = asyncio.Lock()

    @abstractmethod
    def _build_connection_url(self) -> Union[str, URL]:
        """Build the SQLAlchemy URL for the async driver.

        Returns:
            SQLAlchemy URL or URL string (e.g. "sqlite+aiosqlite:///orders.db")

        Raises:
            ConfigurationError: If required config is missing or invalid
        """
        pass

    @abstractmethod
    def _get_database_name(self) -> str:
        """Get database name for error messages.

        Returns:
            Human-readable database name (e.g., "Oracle", "SQLite")
        """
        pass

    def _get_connect_args(self) -> dict[str, Any]:
        """Extra keyword arguments handed to the DBAPI ``connect()``."""
        return {}

    def _get_ping_query(self) -> str:
        """Query used by test_connection()."""
        return "SELECT 1"

    def _prepare_positional(self, statement: str) -> str:
        """Adapt a ``?``-placeholder statement to the connected driver."""
        return render_placeholders(statement, self.engine.dialect.paramstyle)

    async def connect(self) -> None:
        """Open the connection.

        Raises:
            ConnectionError: If connection fails
        """
        db_name = self._get_database_name()
        try:
            self.engine = create_async_engine(
                self._build_connection_url(),
                poolclass=NullPool,
                echo=self.config.get("echo", sqlnode_config.echo_sql),
                hide_parameters=True,
                connect_args=self._get_connect_args(),
            )
            self.connection = await self.engine.connect()
        except Exception as e:
            await self.disconnect()
            raise ConnectionError(f"Failed to connect to {db_name}: {e}") from e
        logger.debug("Connected to %s", db_name)

    async def disconnect(self) -> None:
        """Close the connection and dispose the engine.

        Safe to call even if already disconnected.
        """
        if self.connection is not None:
            try:
                await self.connection.close()
            finally:
                self.connection = None
                logger.debug("Disconnected from %s", self._get_database_name())
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None

    async def test_connection(self) -> bool:
        """Test connectivity, connecting first if needed.

        Returns:
            True if connection is successful, False otherwise
        """
        try:
            if not self.is_connected:
                await self.connect()
            async with self._lock:
                await self.connection.exec_driver_sql(self._get_ping_query())
            return True
        except Exception:
            return False

    def _require_connection(self) -> AsyncConnection:
        if not self.is_connected:
            raise ConnectorError("Not connected to database")
        return self.connection

    async def _rollback(self, conn: AsyncConnection) -> None:
        try:
            await conn.rollback()
        except Exception:
            logger.warning("Rollback after failed statement also failed", exc_info=True)

    async def execute_query(self, query: str) -> list[dict[str, Any]]:
        """Execute a query without binds and return its rows.

        The text goes to the driver untouched, so colons inside literals are
        not mistaken for bind parameters.

        Args:
            query: SQL text

        Returns:
            List of records as dictionaries (column_name -> value)

        Raises:
            ConnectorError: If not connected or query execution fails
        """
        conn = self._require_connection()
        async with self._lock:
            try:
                result = await conn.exec_driver_sql(query)
                rows = [dict(row._mapping) for row in result] if result.returns_rows else []
                await conn.commit()
            except Exception as e:
                await self._rollback(conn)
                raise ConnectorError(f"Failed to execute query: {e}") from e
        logger.debug("Query returned %d rows", len(rows))
        return rows

    async def execute_statement(self, statement: str, binds: Sequence[Any]) -> dict[str, Any]:
        """Execute a positional-bind DML statement and commit it.

        Args:
            statement: SQL text using ``?`` placeholders
            binds: Values in placeholder order

        Returns:
            ``{"affected_rows": ..., "last_row_id": ...}``

        Raises:
            ConnectorError: If not connected or statement execution fails
        """
        conn = self._require_connection()
        sql = self._prepare_positional(statement)
        async with self._lock:
            try:
                result = await conn.exec_driver_sql(sql, tuple(binds))
                metadata = {
                    "affected_rows": result.rowcount,
                    "last_row_id": result.lastrowid,
                }
                await conn.commit()
            except Exception as e:
                await self._rollback(conn)
                raise ConnectorError(f"Failed to execute statement: {e}") from e
        logger.debug("Statement affected %s rows", metadata["affected_rows"])
        return metadata

    async def call_procedure(self, statement: str, binds: Mapping[str, Any]) -> dict[str, Any]:
        """Execute a procedure call and read back its OUT binds.

        Args:
            statement: Call statement using ``:name`` placeholders
            binds: Name to value; ``OutBind`` values become output parameters

        Returns:
            Output parameter name to returned value

        Raises:
            ConnectorError: If not connected or the call fails
        """
        conn = self._require_connection()
        params = []
        out_names = []
        for name, value in binds.items():
            if isinstance(value, OutBind):
                type_ = OUT_BIND_TYPES.get(value.type, String)
                params.append(outparam(name, type_()))
                out_names.append(name)
            else:
                params.append(bindparam(name, value))

        async with self._lock:
            try:
                result = await conn.execute(text(statement).bindparams(*params))
                out_parameters = getattr(result, "out_parameters", None) or {}
                await conn.commit()
            except Exception as e:
                await self._rollback(conn)
                raise ConnectorError(f"Failed to call procedure: {e}") from e
        return {name: out_parameters.get(name) for name in out_names}

    async def list_tables(self) -> list[str]:
        """List table names via the SQLAlchemy inspector.

        Raises:
            ConnectorError: If not connected or introspection fails
        """
        conn = self._require_connection()
        async with self._lock:
            try:
                return await conn.run_sync(
                    lambda sync_conn: inspect(sync_conn).get_table_names()
                )
            except Exception as e:
                raise ConnectorError(f"Failed to list tables: {e}") from e
