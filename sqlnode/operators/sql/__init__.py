"""Generic SQL operators for SQLAlchemy-based databases.

SQLConnector manages one asyncio connection through SQLAlchemy and is
subclassed per database (OracleConnector, SQLiteConnector).
"""

from sqlnode.operators.sql.connector import SQLConnector, render_placeholders

__all__ = ["SQLConnector", "render_placeholders"]
