"""update: one UPDATE per input item, matched on the update key."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from sqlnode.core.connector import Connector
from sqlnode.models.item import NodeItem
from sqlnode.models.operation import UpdateConfig
from sqlnode.operations.base import BoundStatement, Operation
from sqlnode.utils.fanout import gather_all
from sqlnode.utils.items import project_columns

logger = logging.getLogger(__name__)


def build_update_statement(
    table: str, columns: list[str], update_key: str, record: Mapping[str, Any]
) -> BoundStatement:
    """Build ``UPDATE table SET c1 = ?, ... WHERE key = ?;`` for one record.

    The key column is part of ``columns``, so its value is bound twice:
    once in the SET list and once more, appended, for the WHERE clause.

    Examples:
        >>> stmt = build_update_statement("t", ["id", "name"], "id", {"id": 7, "name": "x"})
        >>> stmt.sql
        'UPDATE t SET id = ?, name = ? WHERE id = ?;'
        >>> stmt.binds
        [7, 'x', 7]
    """
    assignments = ", ".join(f"{column} = ?" for column in columns)
    sql = f"UPDATE {table} SET {assignments} WHERE {update_key} = ?;"
    binds = project_columns(record, columns) + project_columns(record, [update_key])
    return BoundStatement(sql=sql, binds=binds)


class UpdateOperation(Operation):
    """Update one row per item, all statements issued concurrently.

    Results (driver metadata) come back in item order, each tagged with
    its item's index.
    """

    config: UpdateConfig

    def build_statements(self, items: list[NodeItem]) -> list[BoundStatement]:
        return [
            build_update_statement(
                self.config.table, self.config.columns, self.config.update_key, item.data
            )
            for item in items
        ]

    async def run(self, connector: Connector, items: list[NodeItem]) -> list[NodeItem]:
        statements = self.build_statements(items)
        logger.debug("Updating %d rows in %s", len(statements), self.config.table)

        results = await gather_all(
            connector.execute_statement(statement.sql, statement.binds)
            for statement in statements
        )
        return [
            NodeItem(data=metadata, paired_item=index) for index, metadata in enumerate(results)
        ]
