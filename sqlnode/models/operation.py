"""Typed operation configurations.

The host passes node parameters as a loose bag of values. They are resolved
once, at the start of an invocation, into one of four typed configurations
discriminated by ``operation``.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    BaseModel,
    Field as PydanticField,
    TypeAdapter,
    ValidationError as PydanticValidationError,
    field_validator,
    model_validator,
)

from sqlnode.exceptions import ConfigurationError, UnsupportedOperationError
from sqlnode.models.invocation import Invocation

EXECUTE_QUERY = "executeQuery"
EXECUTE_STORED_PROCEDURE = "executeStoredProcedure"
INSERT = "insert"
UPDATE = "update"

OPERATIONS = (EXECUTE_QUERY, EXECUTE_STORED_PROCEDURE, INSERT, UPDATE)


def split_columns(value: Any) -> list[str]:
    """Turn a comma-separated column string (or a list) into trimmed names.

    Examples:
        >>> split_columns(" id, name ,description")
        ['id', 'name', 'description']
    """
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [str(column).strip() for column in value if str(column).strip()]


class InParameter(BaseModel):
    """Stored-procedure input parameter."""

    name: str = PydanticField(..., min_length=1)
    value: Any = None

    model_config = {"extra": "forbid"}


class OutParameter(BaseModel):
    """Stored-procedure output parameter, populated by the call."""

    name: str = PydanticField(..., min_length=1)
    type: Literal["string", "number", "date"] = PydanticField(
        "string",
        description="Type of the driver output variable",
    )

    model_config = {"extra": "forbid"}


class ExecuteQueryConfig(BaseModel):
    """Run one raw query per input item."""

    operation: Literal["executeQuery"] = EXECUTE_QUERY

    queries: list[str] = PydanticField(
        default_factory=list,
        description="Query text evaluated for each input item, in item order",
    )

    model_config = {"extra": "forbid"}

    @field_validator("queries")
    @classmethod
    def validate_queries(cls, v: list[str]) -> list[str]:
        """Every item needs a query to run."""
        for index, query in enumerate(v):
            if not query.strip():
                raise ValueError(f"Query for item {index} is empty")
        return v


class ExecuteStoredProcedureConfig(BaseModel):
    """Call one stored procedure for the whole batch."""

    operation: Literal["executeStoredProcedure"] = EXECUTE_STORED_PROCEDURE

    procedure: str = PydanticField(..., min_length=1)

    in_params: list[InParameter] = PydanticField(default_factory=list)

    out_params: list[OutParameter] = PydanticField(default_factory=list)

    model_config = {"extra": "forbid"}


class InsertOptions(BaseModel):
    """Modifiers for the INSERT statement."""

    ignore: bool = PydanticField(
        False,
        description="Emit IGNORE so ignorable errors do not fail the statement",
    )

    priority: Optional[Literal["LOW_PRIORITY", "HIGH_PRIORITY"]] = PydanticField(
        None,
        description="Priority keyword emitted right after INSERT",
    )

    model_config = {"extra": "forbid"}


class _TableConfig(BaseModel):
    table: str
    columns: list[str] = PydanticField(default_factory=list)

    model_config = {"extra": "forbid"}

    @field_validator("table", mode="before")
    @classmethod
    def extract_table(cls, v: Any) -> Any:
        """Accept a plain name or a ``{"mode": ..., "value": ...}`` locator."""
        if isinstance(v, dict):
            v = v.get("value", "")
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("table cannot be empty")
        return v

    @field_validator("columns", mode="before")
    @classmethod
    def parse_columns(cls, v: Any) -> list[str]:
        return split_columns(v)


class InsertConfig(_TableConfig):
    """Insert every input item as one row, in a single statement."""

    operation: Literal["insert"] = INSERT

    options: InsertOptions = PydanticField(default_factory=InsertOptions)

    @field_validator("columns")
    @classmethod
    def require_columns(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("columns cannot be empty")
        return v


class UpdateConfig(_TableConfig):
    """Update one row per input item, matched on ``update_key``."""

    operation: Literal["update"] = UPDATE

    update_key: str = PydanticField("id", min_length=1)

    @model_validator(mode="after")
    def prepend_update_key(self) -> UpdateConfig:
        """The key column is always part of the SET list."""
        if self.update_key not in self.columns:
            self.columns.insert(0, self.update_key)
        return self


OperationConfig = Annotated[
    Union[ExecuteQueryConfig, ExecuteStoredProcedureConfig, InsertConfig, UpdateConfig],
    PydanticField(discriminator="operation"),
]

_operation_adapter: TypeAdapter[OperationConfig] = TypeAdapter(OperationConfig)


def resolve_operation(invocation: Invocation) -> OperationConfig:
    """Read the node parameters for the selected operation into a typed config.

    Args:
        invocation: Current invocation

    Returns:
        One of ExecuteQueryConfig, ExecuteStoredProcedureConfig,
        InsertConfig, UpdateConfig

    Raises:
        UnsupportedOperationError: If the operation name is unknown
        ConfigurationError: If parameters are missing or invalid
    """
    operation = invocation.operation
    get = invocation.get_parameter

    if operation == EXECUTE_QUERY:
        raw = {
            "operation": operation,
            "queries": [get("query", index) for index in range(len(invocation.items))],
        }
    elif operation == EXECUTE_STORED_PROCEDURE:
        procedure_parameters = get("procedureParameters", 0, None) or {}
        raw = {
            "operation": operation,
            "procedure": get("storedProcedure", 0),
            "in_params": procedure_parameters.get("in") or [],
            "out_params": procedure_parameters.get("out") or [],
        }
    elif operation == INSERT:
        raw = {
            "operation": operation,
            "table": get("table", 0),
            "columns": get("columns", 0, ""),
            "options": get("options", 0, None) or {},
        }
    elif operation == UPDATE:
        raw = {
            "operation": operation,
            "table": get("table", 0),
            "update_key": get("updateKey", 0, "id"),
            "columns": get("columns", 0, ""),
        }
    else:
        raise UnsupportedOperationError(operation)

    try:
        return _operation_adapter.validate_python(raw)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid parameters for operation '{operation}': {e}") from e
