"""Oracle connector implementation using SQLAlchemy and python-oracledb.

This module provides connection management for Oracle databases.
"""

from __future__ import annotations

from typing import Any, Union

from sqlalchemy.engine import URL, make_url

from sqlnode.core.config import config as sqlnode_config
from sqlnode.exceptions import ConfigurationError
from sqlnode.operators.sql.connector import SQLConnector


class OracleConnector(SQLConnector):
    """Oracle connector using SQLAlchemy's ``oracle+oracledb`` dialect.

    The connect string is normally an Oracle DSN (``host/service``, an
    Easy Connect string or a TNS alias) and is handed to the driver as
    ``dsn``. A full SQLAlchemy URL is accepted as well.

    Configuration keys:
        - user: Username (required for DSN connect strings)
        - password: Password
        - connect_string: DSN or ``oracle+oracledb://...`` URL (required)
        - echo: Enable SQL logging (default: SQLNODE_ECHO_SQL)

    Examples:
        >>> config = {"user": "hr", "password": "secret", "connect_string": "localhost/XEPDB1"}
        >>> async with OracleConnector(config) as conn:
        ...     rows = await conn.execute_query("SELECT * FROM employees")
    """

    def _connect_string(self) -> str:
        connect_string = self.config.get("connect_string")
        if not connect_string:
            raise ConfigurationError("Missing required config key: connect_string")
        return connect_string

    def _is_url(self) -> bool:
        return "://" in self._connect_string()

    def _build_connection_url(self) -> Union[str, URL]:
        """Build Oracle connection URL from config.

        Returns:
            SQLAlchemy URL

        Raises:
            ConfigurationError: If required config is missing
        """
        user = self.config.get("user") or None
        password = self.config.get("password") or None

        if self._is_url():
            url = make_url(self._connect_string())
            if url.username is None and user:
                url = url.set(username=user, password=password)
            return url

        if not user:
            raise ConfigurationError("Missing required config key: user")
        return URL.create(sqlnode_config.oracle_driver, username=user, password=password)

    def _get_connect_args(self) -> dict[str, Any]:
        if self._is_url():
            return {}
        return {"dsn": self._connect_string()}

    def _get_ping_query(self) -> str:
        return "SELECT 1 FROM DUAL"

    def _prepare_positional(self, statement: str) -> str:
        # Oracle rejects a statement terminator in SQL passed to the driver
        return super()._prepare_positional(statement.rstrip().rstrip(";"))

    def _get_database_name(self) -> str:
        """Get database name for error messages.

        Returns:
            "Oracle"
        """
        return "Oracle"
