"""Tests against a real SQLite database through aiosqlite."""

import logging

import pytest

from sqlnode.core.node import SQLNode
from sqlnode.exceptions import ConnectionError, ConnectorError
from sqlnode.models.invocation import Invocation
from sqlnode.operators.sqlite import SQLiteConnector


@pytest.fixture
async def sqlite_connector(temp_db):
    """Create a connected SQLite connector for testing."""
    connector = SQLiteConnector({"database": temp_db})
    await connector.connect()
    yield connector
    await connector.disconnect()


@pytest.fixture
async def sample_table(sqlite_connector):
    """Create a sample table with test data."""
    await sqlite_connector.execute_query(
        """
        CREATE TABLE product (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            description TEXT,
            price REAL
        )
        """
    )
    await sqlite_connector.execute_statement(
        "INSERT INTO product(id,name,price) VALUES (?,?,?),(?,?,?)",
        [1, "Widget", 9.5, 2, "Gadget", 20.0],
    )
    return "product"


class TestSQLiteConnector:
    """Test SQLite connector."""

    async def test_connection(self, sqlite_connector):
        assert sqlite_connector.is_connected
        assert await sqlite_connector.test_connection()

    async def test_disconnect_is_idempotent(self, temp_db):
        connector = SQLiteConnector({"database": temp_db})
        await connector.connect()

        await connector.disconnect()
        await connector.disconnect()

        assert not connector.is_connected
        assert connector.engine is None

    async def test_context_manager(self, temp_db):
        async with SQLiteConnector({"connect_string": f"sqlite:///{temp_db}"}) as connector:
            rows = await connector.execute_query("SELECT 1 AS one")

        assert rows == [{"one": 1}]
        assert not connector.is_connected

    async def test_execute_query(self, sqlite_connector, sample_table):
        rows = await sqlite_connector.execute_query(
            f"SELECT id, name FROM {sample_table} ORDER BY id"
        )
        assert rows == [{"id": 1, "name": "Widget"}, {"id": 2, "name": "Gadget"}]

    async def test_colon_in_literal_is_not_a_bind(self, sqlite_connector):
        rows = await sqlite_connector.execute_query("SELECT 'at 10:30' AS t")
        assert rows == [{"t": "at 10:30"}]

    async def test_execute_statement_metadata(self, sqlite_connector, sample_table):
        metadata = await sqlite_connector.execute_statement(
            "UPDATE product SET price = ? WHERE price < ?;", [1.0, 100]
        )
        assert metadata["affected_rows"] == 2
        assert "last_row_id" in metadata

    async def test_failed_statement_raises_and_rolls_back(self, sqlite_connector, sample_table):
        with pytest.raises(ConnectorError, match="Failed to execute statement"):
            await sqlite_connector.execute_statement(
                "INSERT INTO product(id,name) VALUES (?,?)", [1, "duplicate"]
            )

        # connection is still usable
        rows = await sqlite_connector.execute_query("SELECT COUNT(*) AS n FROM product")
        assert rows == [{"n": 2}]

    async def test_failed_query(self, sqlite_connector):
        with pytest.raises(ConnectorError, match="no such table"):
            await sqlite_connector.execute_query("SELECT * FROM missing")

    async def test_list_tables(self, sqlite_connector, sample_table):
        assert await sqlite_connector.list_tables() == ["product"]

    async def test_requires_connection(self, temp_db):
        connector = SQLiteConnector({"database": temp_db})
        with pytest.raises(ConnectorError, match="Not connected"):
            await connector.execute_query("SELECT 1")

    async def test_echo_hides_bind_values(self, temp_db, caplog):
        caplog.set_level(logging.INFO, logger="sqlalchemy.engine")

        async with SQLiteConnector({"database": temp_db, "echo": True}) as connector:
            await connector.execute_query("CREATE TABLE account (id INTEGER, secret TEXT)")
            await connector.execute_statement(
                "INSERT INTO account(id,secret) VALUES (?,?)", [1, "hunter2"]
            )

        assert "INSERT INTO account" in caplog.text
        assert "hunter2" not in caplog.text

    async def test_connect_failure(self, tmp_path):
        connector = SQLiteConnector({"database": str(tmp_path / "missing" / "db.sqlite")})

        with pytest.raises(ConnectionError, match="Failed to connect to SQLite"):
            await connector.connect()

        assert not connector.is_connected
        assert connector.engine is None


class TestSQLiteRoundTrip:
    """Run every operation end to end through SQLNode."""

    @pytest.fixture
    async def prepared(self, sqlite_connector, sample_table):
        # release the file before the node opens its own connection
        await sqlite_connector.disconnect()
        return sample_table

    async def test_insert_then_query(self, prepared, sqlite_credentials):
        node = SQLNode()

        inserted = await node.execute(
            Invocation(
                operation="insert",
                parameters={"table": "product", "columns": "id,name,price"},
                items=[
                    {"id": 3, "name": "Sprocket", "price": 1.25, "colour": "red"},
                    {"id": 4, "name": "Flange"},
                ],
            ),
            sqlite_credentials,
        )
        assert len(inserted) == 1
        assert inserted[0].data["affected_rows"] == 2

        queried = await node.execute(
            Invocation(
                operation="executeQuery",
                parameters={"query": "SELECT id, name, price FROM product WHERE id > 2 ORDER BY id"},
                items=[{}],
            ),
            sqlite_credentials,
        )
        assert [item.data for item in queried] == [
            {"id": 3, "name": "Sprocket", "price": 1.25},
            {"id": 4, "name": "Flange", "price": None},
        ]
        assert {item.paired_item for item in queried} == {0}

    async def test_update(self, prepared, sqlite_credentials):
        node = SQLNode()

        updated = await node.execute(
            Invocation(
                operation="update",
                parameters={"table": "product", "columns": "name,description"},
                items=[
                    {"id": 1, "name": "Widget v2", "description": "improved"},
                    {"id": 2, "name": "Gadget v2", "description": None},
                    {"id": 99, "name": "ghost", "description": "no such row"},
                ],
            ),
            sqlite_credentials,
        )

        assert [item.data["affected_rows"] for item in updated] == [1, 1, 0]
        assert [item.paired_item for item in updated] == [0, 1, 2]

        rows = await node.execute(
            Invocation(
                operation="executeQuery",
                parameters={"query": "SELECT name, description FROM product ORDER BY id"},
                items=[{}],
            ),
            sqlite_credentials,
        )
        assert [item.data for item in rows] == [
            {"name": "Widget v2", "description": "improved"},
            {"name": "Gadget v2", "description": None},
        ]

    async def test_queries_per_item(self, prepared, sqlite_credentials):
        result = await SQLNode().execute(
            Invocation(
                operation="executeQuery",
                parameters={
                    "query": lambda item, index: (
                        f"SELECT name FROM product WHERE id = {item.data['id']}"
                    )
                },
                items=[{"id": 2}, {"id": 1}],
            ),
            sqlite_credentials,
        )

        assert [(item.data["name"], item.paired_item) for item in result] == [
            ("Gadget", 0),
            ("Widget", 1),
        ]

    async def test_procedure_error_becomes_item(self, prepared, sqlite_credentials):
        # SQLite has no stored procedures, so the driver error is surfaced
        result = await SQLNode().execute(
            Invocation(
                operation="executeStoredProcedure",
                parameters={"storedProcedure": "proc"},
                continue_on_fail=True,
            ),
            sqlite_credentials,
        )

        assert len(result) == 1
        assert result[0].data["error"].startswith("Failed to call procedure")

    async def test_credentials_and_tables(self, prepared, sqlite_credentials):
        node = SQLNode()

        check = await node.test_credentials(sqlite_credentials)
        tables = await node.search_tables(sqlite_credentials, filter="PROD")

        assert check.status == "OK"
        assert [(t.name, t.value) for t in tables] == [("product", "product")]
