"""sqlnode - SQL operations for workflow hosts."""

__version__ = "0.1.0"

# Re-export key models for convenience
from sqlnode.models import (
    Credentials,
    ExecuteQueryConfig,
    ExecuteStoredProcedureConfig,
    InsertConfig,
    Invocation,
    NodeItem,
    UpdateConfig,
)

# Re-export the node and connector interface
from sqlnode.core import Connector, OutBind, SQLNode

# Re-export connector implementations
from sqlnode.operators.oracle import OracleConnector
from sqlnode.operators.sqlite import SQLiteConnector

__all__ = [
    # Version
    "__version__",
    # Models
    "Credentials",
    "Invocation",
    "NodeItem",
    "ExecuteQueryConfig",
    "ExecuteStoredProcedureConfig",
    "InsertConfig",
    "UpdateConfig",
    # Core
    "Connector",
    "OutBind",
    "SQLNode",
    # Connectors
    "OracleConnector",
    "SQLiteConnector",
]
