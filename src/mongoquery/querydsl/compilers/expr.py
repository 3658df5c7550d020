"""Expression compiler.

Compiles eval expressions into MongoDB aggregation expressions. Aggregate
calls (`$sum`, `$avg`, `$min`, `$max`, `$count`) cannot be evaluated inline;
each one emits `$group` stages to a caller-supplied sink and is replaced by a
placeholder `{"$": name}` referencing the field those stages produce.
"""

from typing import Any, List, Mapping, Optional

from ...constants import AGGREGATE_OPS, FIELD_REF
from ...exceptions import InvalidQueryError
from ...logger import Logger
from ...settings import settings as api_settings
from ...types import AggregateSink, EvalExpr, PipelineStage
from ..naming import NameGenerator
from .utils import field_path

__all__ = ("ExpressionCompiler",)


class ExpressionCompiler:
    """Compile an eval expression tree for one compile pass.

    Args:
        virtual_key: Field name rewritten to the backend identity field
        on_aggr: Sink receiving the stages emitted for each aggregate node,
            called in depth-first, left-to-right order
        names: Name generator shared by the pass
    """

    def __init__(
        self,
        virtual_key: Optional[str] = None,
        on_aggr: Optional[AggregateSink] = None,
        names: Optional[NameGenerator] = None,
    ) -> None:
        self.virtual_key = api_settings.VIRTUAL_KEY if virtual_key is None else virtual_key
        self.on_aggr = on_aggr
        self.names = names or NameGenerator()
        self.logger = Logger("compiler.expr")

    def compile(self, expr: EvalExpr) -> Any:
        if isinstance(expr, (list, tuple)):
            return [self.compile(item) for item in expr]
        if not isinstance(expr, Mapping):
            # literals (numbers, strings, booleans, dates) pass through
            return expr
        if expr.get(FIELD_REF):
            ref = expr[FIELD_REF]
            name = ref if isinstance(ref, str) else ref[1]
            return field_path(name, self.virtual_key)

        for op in AGGREGATE_OPS:
            if op in expr:
                return self._compile_aggregate(op, expr[op])

        return {key: self.compile(value) for key, value in expr.items()}

    def _compile_aggregate(self, op: str, operand: EvalExpr) -> Any:
        if self.on_aggr is None:
            raise InvalidQueryError("Aggregate expression requires a pipeline sink", operator=op)
        if isinstance(operand, str):
            value = field_path(operand, self.virtual_key)
        else:
            value = self.compile(operand)
        name = self.names.generate()
        stages: List[PipelineStage]
        if op == "$count":
            # distinct count: group by value, then count the groups
            stages = [
                {"$group": {"_id": value}},
                {"$group": {"_id": None, name: {"$count": {}}}},
            ]
        else:
            stages = [{"$group": {"_id": None, name: {op: value}}}]
        self.logger.debug("Aggregate %s emitted %d stage(s) into %s", op, len(stages), name)
        self.on_aggr(stages)
        return {FIELD_REF: name}
