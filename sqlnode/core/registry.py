"""Connector resolution.

Maps the credentials' connect string to a Connector class and builds it.
"""

from __future__ import annotations

import importlib

from sqlnode.core.connector import Connector
from sqlnode.exceptions import ConfigurationError
from sqlnode.models.credentials import Credentials

# Protocol -> default connector class (dotted path)
DEFAULT_CONNECTORS = {
    "oracle": "sqlnode.operators.oracle.connector.OracleConnector",
    "sqlite": "sqlnode.operators.sqlite.connector.SQLiteConnector",
}

# Connect strings without a URL scheme are Oracle DSNs
DSN_PROTOCOL = "oracle"


def get_connection_protocol(connect_string: str) -> str:
    """Extract connection protocol from a connect string.

    Examples:
        >>> get_connection_protocol("sqlite+aiosqlite:///orders.db")
        'sqlite'
        >>> get_connection_protocol("localhost/XEPDB1")
        'oracle'
    """
    if "://" in connect_string:
        protocol = connect_string.split("://")[0]
        # Normalize protocol (strip driver suffix)
        return protocol.split("+")[0].lower()
    return DSN_PROTOCOL


def load_connector_class(path: str) -> type[Connector]:
    """Import a Connector class from its dotted path.

    Args:
        path: e.g. "sqlnode.operators.sqlite.SQLiteConnector"

    Returns:
        Connector subclass

    Raises:
        ConfigurationError: If module/class not found or not a Connector
    """
    module_path, _, class_name = path.rpartition(".")
    if not module_path:
        raise ConfigurationError(f"Invalid connector path: '{path}'")

    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        raise ConfigurationError(
            f"Failed to import connector module '{module_path}'.\n"
            f"Error: {e}\n"
            f"Make sure the module exists and is importable."
        ) from e

    try:
        connector_class = getattr(module, class_name)
    except AttributeError as e:
        available_classes = [name for name in dir(module) if not name.startswith("_")]
        raise ConfigurationError(
            f"Class '{class_name}' not found in module '{module_path}'.\n"
            f"Available classes: {available_classes}"
        ) from e

    if not (isinstance(connector_class, type) and issubclass(connector_class, Connector)):
        raise ConfigurationError(f"'{path}' is not a Connector subclass")
    return connector_class


def resolve_connector_class(credentials: Credentials) -> type[Connector]:
    """Pick the Connector class for a set of credentials.

    An explicit ``credentials.connector`` wins; otherwise the default for
    the connect string's protocol is used.

    Raises:
        ConfigurationError: If no connector is registered for the protocol
    """
    if credentials.connector:
        return load_connector_class(credentials.connector)

    protocol = get_connection_protocol(credentials.connect_string)
    if protocol not in DEFAULT_CONNECTORS:
        raise ConfigurationError(
            f"No default connector registered for protocol '{protocol}'.\n"
            f"Available protocols: {', '.join(DEFAULT_CONNECTORS.keys())}\n"
            f"Set 'connector' in the credentials to a Connector class path."
        )
    return load_connector_class(DEFAULT_CONNECTORS[protocol])


def create_connector(credentials: Credentials) -> Connector:
    """Build an unconnected Connector for the given credentials."""
    connector_class = resolve_connector_class(credentials)
    return connector_class(credentials.as_connector_config())
