"""Shared fixtures: a recording stub connector and temporary SQLite databases."""

import asyncio
import tempfile
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

import pytest

from sqlnode.core.connector import Connector
from sqlnode.core.node import SQLNode
from sqlnode.exceptions import ConnectionError, ConnectorError
from sqlnode.models.credentials import Credentials


class StubConnector(Connector):
    """Connector double that records every call.

    Args:
        rows: query text -> rows returned by execute_query
        delays: query text -> seconds to sleep before answering
        fail_on: statements (query or DML text) that raise ConnectorError
        out_values: values returned by call_procedure, by bind name
        fail_connect: raise ConnectionError from connect()
        fail_disconnect: raise ConnectorError from disconnect()
        ping_ok: what test_connection() reports once connected
    """

    def __init__(
        self,
        rows: Optional[dict[str, list[dict[str, Any]]]] = None,
        delays: Optional[dict[str, float]] = None,
        fail_on: Optional[set[str]] = None,
        out_values: Optional[dict[str, Any]] = None,
        fail_connect: bool = False,
        tables: Optional[list[str]] = None,
        fail_disconnect: bool = False,
        ping_ok: bool = True,
    ):
        super().__init__({})
        self.rows = rows or {}
        self.delays = delays or {}
        self.fail_on = fail_on or set()
        self.out_values = out_values or {}
        self.fail_connect = fail_connect
        self.tables = tables or []
        self.fail_disconnect = fail_disconnect
        self.ping_ok = ping_ok

        self.connect_calls = 0
        self.disconnect_calls = 0
        self.statements: list[tuple[str, Any]] = []
        self.completed: list[str] = []

    async def connect(self) -> None:
        self.connect_calls += 1
        if self.fail_connect:
            raise ConnectionError("Failed to connect to Stub: listener refused")
        self.connection = object()

    async def disconnect(self) -> None:
        self.disconnect_calls += 1
        self.connection = None
        if self.fail_disconnect:
            raise ConnectorError("Failed to close connection: ORA-03113")

    async def test_connection(self) -> bool:
        return self.is_connected and self.ping_ok

    async def _run(self, sql: str, binds: Any) -> None:
        self.statements.append((sql, binds))
        await asyncio.sleep(self.delays.get(sql, 0))
        self.completed.append(sql)
        if sql in self.fail_on:
            raise ConnectorError(f"Failed to execute statement: ORA-00942 on {sql}")

    async def execute_query(self, query: str) -> list[dict[str, Any]]:
        await self._run(query, None)
        return [dict(row) for row in self.rows.get(query, [])]

    async def execute_statement(self, statement: str, binds: Sequence[Any]) -> dict[str, Any]:
        await self._run(statement, list(binds))
        return {"affected_rows": 1, "last_row_id": None}

    async def call_procedure(self, statement: str, binds: Mapping[str, Any]) -> dict[str, Any]:
        await self._run(statement, dict(binds))
        return dict(self.out_values)

    async def list_tables(self) -> list[str]:
        return list(self.tables)


@pytest.fixture
def credentials():
    """Oracle-style credentials; never used to open a real connection."""
    return Credentials(user="hr", password="secret", connect_string="localhost/XEPDB1")


@pytest.fixture
def stub():
    """A fresh stub connector."""
    return StubConnector()


@pytest.fixture
def node(stub):
    """A node whose every connection is the stub."""
    return SQLNode(connector_factory=lambda credentials: stub)


@pytest.fixture
def temp_db():
    """Create a temporary SQLite database file path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = f.name
    yield db_path
    # Cleanup
    Path(db_path).unlink(missing_ok=True)


@pytest.fixture
def sqlite_credentials(temp_db):
    """Credentials pointing at the temporary SQLite database."""
    return Credentials(connect_string=f"sqlite:///{temp_db}")
