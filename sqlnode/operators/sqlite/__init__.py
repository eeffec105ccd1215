"""SQLite operators."""

from sqlnode.operators.sqlite.connector import SQLiteConnector

__all__ = ["SQLiteConnector"]
