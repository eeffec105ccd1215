"""Process-wide settings read from ``SQLNODE_*`` environment variables.

Modules read settings from the ``config`` instance below, never from
``os.environ`` directly.

Environment Variables:
    SQLNODE_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL
                       Default: INFO

    SQLNODE_LOG_FORMAT: Log line format, text or json
                        Default: text

    SQLNODE_ECHO_SQL: Log every statement through SQLAlchemy's engine echo
                      Default: false

    SQLNODE_ORACLE_DRIVER: SQLAlchemy dialect+driver used for Oracle DSNs
                           Default: oracle+oracledb
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("text", "json")


def _env_flag(key: str, default: bool) -> bool:
    raw = os.environ.get(key, "").strip().lower()
    if not raw:
        return default
    return raw in ("true", "1", "yes", "on")


def _env(key: str, default: str) -> str:
    return os.environ.get(key, default)


@dataclass
class SQLNodeConfig:
    """Settings snapshot taken when the instance is created.

    Usage:
        from sqlnode.core.config import config

        engine = create_async_engine(url, echo=config.echo_sql)
    """

    # Logging
    log_level: str = field(default_factory=lambda: _env("SQLNODE_LOG_LEVEL", "INFO").upper())
    log_format: str = field(default_factory=lambda: _env("SQLNODE_LOG_FORMAT", "text").lower())

    # Engines
    echo_sql: bool = field(default_factory=lambda: _env_flag("SQLNODE_ECHO_SQL", False))
    oracle_driver: str = field(
        default_factory=lambda: _env("SQLNODE_ORACLE_DRIVER", "oracle+oracledb")
    )

    def __post_init__(self):
        if self.log_level not in LOG_LEVELS:
            raise ValueError(
                f"Invalid SQLNODE_LOG_LEVEL: {self.log_level}. Expected one of {', '.join(LOG_LEVELS)}"
            )
        if self.log_format not in LOG_FORMATS:
            raise ValueError(
                f"Invalid SQLNODE_LOG_FORMAT: {self.log_format}. Expected one of {', '.join(LOG_FORMATS)}"
            )
        if not self.oracle_driver.startswith("oracle"):
            raise ValueError(
                f"SQLNODE_ORACLE_DRIVER must be an oracle dialect, got {self.oracle_driver}"
            )

    def as_dict(self) -> dict:
        """Settings as a plain dictionary."""
        return {
            "log_level": self.log_level,
            "log_format": self.log_format,
            "echo_sql": self.echo_sql,
            "oracle_driver": self.oracle_driver,
        }


def load_config() -> SQLNodeConfig:
    """Re-read the environment into a new SQLNodeConfig."""
    return SQLNodeConfig()


# Read once at import
config = load_config()
