"""Logging setup for the sqlnode CLI.

Library modules only create loggers with ``logging.getLogger(__name__)``;
handlers are installed here, by the process that hosts the node. JSON
lines are rendered by structlog on top of those stdlib records.
"""

from __future__ import annotations

import logging
from typing import Optional

import structlog

from sqlnode.core.config import config

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def json_formatter() -> structlog.stdlib.ProcessorFormatter:
    """Formatter rendering stdlib records as one JSON object per line.

    Keys: ``event``, ``logger``, ``level``, ``timestamp`` and, when the
    record carries one, ``exception``.
    """
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
    )


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """Install a stderr handler on the ``sqlnode`` logger.

    Args:
        level: Log level name, defaults to SQLNODE_LOG_LEVEL
        fmt: "text" or "json", defaults to SQLNODE_LOG_FORMAT
    """
    level = (level or config.log_level).upper()
    fmt = fmt or config.log_format

    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(json_formatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    logger = logging.getLogger("sqlnode")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
