"""Database-specific connector implementations.

Each subpackage provides a Connector for one database family:

    - sql: SQLAlchemy asyncio base class shared by all of them
    - oracle: Oracle via python-oracledb
    - sqlite: SQLite via aiosqlite
"""
