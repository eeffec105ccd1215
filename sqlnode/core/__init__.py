"""sqlnode core package.

This package contains the Connector interface, connector resolution,
configuration and the SQLNode adapter itself.
"""

from sqlnode.core.connector import Connector, OutBind
from sqlnode.core.node import ConnectionTestResult, SQLNode, TableOption
from sqlnode.core.registry import create_connector

__all__ = [
    "Connector",
    "OutBind",
    "SQLNode",
    "ConnectionTestResult",
    "TableOption",
    "create_connector",
]
