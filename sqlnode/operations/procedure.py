"""executeStoredProcedure: call one procedure and return its OUT values."""

from __future__ import annotations

import logging

from sqlnode.core.connector import Connector, OutBind
from sqlnode.models.item import NodeItem
from sqlnode.models.operation import ExecuteStoredProcedureConfig, InParameter, OutParameter
from sqlnode.operations.base import BoundStatement, Operation

logger = logging.getLogger(__name__)


def build_call_statement(
    procedure: str, in_params: list[InParameter], out_params: list[OutParameter]
) -> str:
    """PL/SQL block calling ``procedure`` with IN placeholders, then OUT ones.

    Examples:
        >>> build_call_statement("proc", [InParameter(name="p1", value=5)], [OutParameter(name="p2")])
        'BEGIN proc(:p1, :p2); END;'
    """
    placeholders = ", ".join(f":{param.name}" for param in [*in_params, *out_params])
    return f"BEGIN {procedure}({placeholders}); END;"


class ExecuteStoredProcedureOperation(Operation):
    """Call the configured procedure once for the whole batch.

    The single output item maps each OUT parameter name to the value the
    call returned for it, however many input items there were.
    """

    config: ExecuteStoredProcedureConfig

    def build_statements(self, items: list[NodeItem]) -> list[BoundStatement]:
        binds = {param.name: param.value for param in self.config.in_params}
        for param in self.config.out_params:
            binds[param.name] = OutBind(type=param.type)

        sql = build_call_statement(
            self.config.procedure, self.config.in_params, self.config.out_params
        )
        return [BoundStatement(sql=sql, binds=binds)]

    async def run(self, connector: Connector, items: list[NodeItem]) -> list[NodeItem]:
        statement = self.build_statements(items)[0]
        logger.debug("Calling %s", statement.sql)

        out_binds = await connector.call_procedure(statement.sql, statement.binds)

        output = {param.name: out_binds.get(param.name) for param in self.config.out_params}
        return [NodeItem(data=output)]
