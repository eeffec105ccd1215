"""SQLite connector implementation using SQLAlchemy and aiosqlite.

This module provides connection management for SQLite databases.
"""

from __future__ import annotations

from typing import Union

from sqlalchemy.engine import URL, make_url

from sqlnode.exceptions import ConfigurationError
from sqlnode.operators.sql.connector import SQLConnector


class SQLiteConnector(SQLConnector):
    """SQLite connector using SQLAlchemy's ``sqlite+aiosqlite`` dialect.

    Configuration keys:
        - connect_string: ``sqlite:///path.db`` URL (driver is switched to aiosqlite)
        - database: Database file path (alternative to connect_string)
        - echo: Enable SQL logging (default: SQLNODE_ECHO_SQL)

    User and password are ignored.

    Examples:
        >>> config = {"connect_string": "sqlite:///orders.db"}
        >>> async with SQLiteConnector(config) as conn:
        ...     rows = await conn.execute_query("SELECT * FROM orders LIMIT 10")
    """

    def _build_connection_url(self) -> Union[str, URL]:
        """Build SQLite connection URL from config.

        Returns:
            SQLAlchemy URL using the aiosqlite driver

        Raises:
            ConfigurationError: If required config is missing
        """
        connect_string = self.config.get("connect_string")
        if connect_string:
            url = make_url(connect_string)
            if url.drivername == "sqlite":
                url = url.set(drivername="sqlite+aiosqlite")
            return url

        if "database" not in self.config:
            raise ConfigurationError("Missing required config key: connect_string or database")

        return URL.create("sqlite+aiosqlite", database=self.config["database"])

    def _get_database_name(self) -> str:
        """Get database name for error messages.

        Returns:
            "SQLite"
        """
        return "SQLite"
