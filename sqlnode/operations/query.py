"""executeQuery: run one raw query per input item."""

from __future__ import annotations

import logging

from sqlnode.core.connector import Connector
from sqlnode.models.item import NodeItem
from sqlnode.models.operation import ExecuteQueryConfig
from sqlnode.operations.base import BoundStatement, Operation
from sqlnode.utils.fanout import gather_all

logger = logging.getLogger(__name__)


class ExecuteQueryOperation(Operation):
    """Execute each item's query concurrently, without binds.

    Rows of every query become output items tagged with the index of the
    item whose query produced them; groups are concatenated in item order.
    """

    config: ExecuteQueryConfig

    def build_statements(self, items: list[NodeItem]) -> list[BoundStatement]:
        return [BoundStatement(sql=query) for query in self.config.queries]

    async def run(self, connector: Connector, items: list[NodeItem]) -> list[NodeItem]:
        statements = self.build_statements(items)
        logger.debug("Running %d queries", len(statements))

        results = await gather_all(
            connector.execute_query(statement.sql) for statement in statements
        )

        return_items: list[NodeItem] = []
        for index, rows in enumerate(results):
            return_items.extend(NodeItem.from_records(rows, paired_item=index))
        return return_items
