"""Node operations.

One Operation class per operation name, selected from the resolved
configuration's type.
"""

from __future__ import annotations

from sqlnode.models.operation import (
    ExecuteQueryConfig,
    ExecuteStoredProcedureConfig,
    InsertConfig,
    OperationConfig,
    UpdateConfig,
)
from sqlnode.operations.base import BoundStatement, Operation
from sqlnode.operations.insert import InsertOperation, build_insert_statement
from sqlnode.operations.procedure import ExecuteStoredProcedureOperation, build_call_statement
from sqlnode.operations.query import ExecuteQueryOperation
from sqlnode.operations.update import UpdateOperation, build_update_statement

OPERATION_CLASSES: dict[type, type[Operation]] = {
    ExecuteQueryConfig: ExecuteQueryOperation,
    ExecuteStoredProcedureConfig: ExecuteStoredProcedureOperation,
    InsertConfig: InsertOperation,
    UpdateConfig: UpdateOperation,
}


def get_operation(config: OperationConfig) -> Operation:
    """Instantiate the Operation handling ``config``."""
    return OPERATION_CLASSES[type(config)](config)


__all__ = [
    "BoundStatement",
    "Operation",
    "ExecuteQueryOperation",
    "ExecuteStoredProcedureOperation",
    "InsertOperation",
    "UpdateOperation",
    "OPERATION_CLASSES",
    "get_operation",
    "build_call_statement",
    "build_insert_statement",
    "build_update_statement",
]
