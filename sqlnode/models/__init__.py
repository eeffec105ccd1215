"""sqlnode models package.

This package contains the Pydantic models exchanged with the host:
credentials, items, invocations and the typed operation configurations.
"""

from sqlnode.models.credentials import Credentials
from sqlnode.models.invocation import Invocation
from sqlnode.models.item import NodeItem
from sqlnode.models.operation import (
    OPERATIONS,
    ExecuteQueryConfig,
    ExecuteStoredProcedureConfig,
    InParameter,
    InsertConfig,
    InsertOptions,
    OperationConfig,
    OutParameter,
    UpdateConfig,
    resolve_operation,
    split_columns,
)

__all__ = [
    "Credentials",
    "Invocation",
    "NodeItem",
    # Operation configs
    "OPERATIONS",
    "OperationConfig",
    "ExecuteQueryConfig",
    "ExecuteStoredProcedureConfig",
    "InsertConfig",
    "UpdateConfig",
    "InParameter",
    "OutParameter",
    "InsertOptions",
    "resolve_operation",
    "split_columns",
]
