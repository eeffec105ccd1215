"""Oracle operators."""

from sqlnode.operators.oracle.connector import OracleConnector

__all__ = ["OracleConnector"]
