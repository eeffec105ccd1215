"""sqlnode exception hierarchy."""

from __future__ import annotations


class SQLNodeError(Exception):
    """Base exception for all sqlnode errors."""

    pass


class ConfigurationError(SQLNodeError):
    """Raised when credentials or node parameters are invalid or missing."""

    pass


class ConnectionError(SQLNodeError):
    """Raised when connection to the database fails."""

    pass


class ConnectorError(SQLNodeError):
    """Raised when a statement fails on an open connection."""

    pass


class OperationError(SQLNodeError):
    """Raised when an operation cannot be carried out."""

    pass


class UnsupportedOperationError(OperationError):
    """Raised when the selected operation name is not one of the known ones."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f'The operation "{operation}" is not supported!')


class ValidationError(SQLNodeError):
    """Raised when an invocation file fails validation."""

    pass
