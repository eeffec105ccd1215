"""insert: write every input item as a row with one multi-row INSERT."""

from __future__ import annotations

import logging
from typing import Any

from sqlnode.core.connector import Connector
from sqlnode.models.item import NodeItem
from sqlnode.models.operation import InsertConfig, InsertOptions
from sqlnode.operations.base import BoundStatement, Operation
from sqlnode.utils.items import project_columns

logger = logging.getLogger(__name__)


def build_insert_statement(
    table: str,
    columns: list[str],
    rows: list[list[Any]],
    options: InsertOptions,
) -> BoundStatement:
    """Build ``INSERT [priority] [IGNORE] INTO table(cols) VALUES (?,..),..``.

    Table and column names are inserted verbatim; only values are bound.

    Args:
        table: Target table
        columns: Column names, in bind order
        rows: Projected values per row, each in column order
        options: Priority and IGNORE modifiers

    Returns:
        Statement with one placeholder group per row and the row values
        flattened in row order, then column order
    """
    keywords = ["INSERT"]
    if options.priority:
        keywords.append(options.priority)
    if options.ignore:
        keywords.append("IGNORE")

    placeholder_group = "(" + ",".join("?" for _ in columns) + ")"
    values = ",".join(placeholder_group for _ in rows)
    sql = f"{' '.join(keywords)} INTO {table}({','.join(columns)}) VALUES {values}"

    binds = [value for row in rows for value in row]
    return BoundStatement(sql=sql, binds=binds)


class InsertOperation(Operation):
    """Insert the listed columns of all items in a single statement.

    Fields missing from an item are inserted as NULL. The output is the
    driver's result metadata, not the inserted data.
    """

    config: InsertConfig

    def build_statements(self, items: list[NodeItem]) -> list[BoundStatement]:
        rows = [project_columns(item.data, self.config.columns) for item in items]
        return [
            build_insert_statement(
                self.config.table, self.config.columns, rows, self.config.options
            )
        ]

    async def run(self, connector: Connector, items: list[NodeItem]) -> list[NodeItem]:
        statement = self.build_statements(items)[0]
        logger.debug("Inserting %d rows into %s", len(items), self.config.table)

        metadata = await connector.execute_statement(statement.sql, statement.binds)
        return [NodeItem(data=metadata)]
