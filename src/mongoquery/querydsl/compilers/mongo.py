"""MongoDB where compiler.

Transforms query expressions (or `Q` nodes) into MongoDB filter documents and
eval expressions into aggregation expressions.

Query expressions map field names to field queries and may also carry:
- `$and` / `$or`: lists of nested query expressions
- `$not`: a nested query expression, compiled to `$nor`
- `$expr`: a boolean eval expression

MongoDB rejects empty `$and` / `$or` arrays and has no top-level `$not`, so:
- `{"$and": []}` adds no constraint
- `{"$or": []}` makes the whole query `NO_MATCH`
- `{"$not": q}` becomes `{"$nor": [q]}`

A query that can never match compiles to `NO_MATCH`, never to `{}`.
"""

from typing import Any, Dict, List, Optional, Union

from ...logger import Logger
from ...settings import settings as api_settings
from ...types import AggregateSink, EvalExpr, Filter
from ..naming import NameGenerator
from .base import NO_MATCH, BaseWhere, NoMatch
from .expr import ExpressionCompiler
from .field import FieldQueryCompiler
from .utils import get_actual_key, normalize_where_input

__all__ = (
    "MongoWhereCompiler",
    "mongo_where",
)

CompiledWhere = Union[Filter, NoMatch]


class MongoWhereCompiler(BaseWhere):
    """Compile query expressions into MongoDB filter dicts.

    Nested fields use dot notation and `$not` is rewritten to `$nor`.
    `$function` support comes from settings and is required by `$regexFor`.

    Args:
        virtual_key: Default field name rewritten to `_id`
        supports_function: Whether `$function` may be emitted
    """

    def __init__(self, virtual_key: Optional[str] = None, supports_function: Optional[bool] = None) -> None:
        self.virtual_key = api_settings.VIRTUAL_KEY if virtual_key is None else virtual_key
        self.fields = FieldQueryCompiler(supports_function=supports_function)
        self.logger = Logger("compiler.mongo")

    def to_where(
        self,
        where: Union[Dict[str, Any], Any],
        virtual_key: Optional[str] = None,
        on_aggr: Optional[AggregateSink] = None,
        names: Optional[NameGenerator] = None,
    ) -> CompiledWhere:
        """Convert Q object or query expression to a MongoDB filter dict.

        Args:
            where: Q object or query expression dict
            virtual_key: Field name standing in for `_id` (default: compiler's)
            on_aggr: Sink for pipeline stages emitted by aggregates in `$expr`
            names: Name generator for aggregate placeholders

        Returns:
            MongoDB filter dict, or `NO_MATCH` if the query can never match
        """
        node = normalize_where_input(where)
        virtual_key = self.virtual_key if virtual_key is None else virtual_key
        exprs = ExpressionCompiler(virtual_key, on_aggr=on_aggr, names=names)
        result = self._transform_query(node, virtual_key, exprs)
        self.logger.compiled("where", node, result)
        return result

    def to_expr(self, node: Dict[str, Any], virtual_key: Optional[str] = None) -> str:
        """Convert query expression to its filter string representation for debugging."""
        return str(self.to_where(node, virtual_key))

    def to_eval(
        self,
        expr: EvalExpr,
        virtual_key: Optional[str] = None,
        on_aggr: Optional[AggregateSink] = None,
        names: Optional[NameGenerator] = None,
    ) -> Any:
        """Compile an eval expression into a MongoDB aggregation expression.

        Aggregates emit their `$group` stages to `on_aggr` and are replaced by
        `{"$": name}` placeholders.
        """
        virtual_key = self.virtual_key if virtual_key is None else virtual_key
        result = ExpressionCompiler(virtual_key, on_aggr=on_aggr, names=names).compile(expr)
        self.logger.compiled("eval", expr, result)
        return result

    def _transform_query(self, query: Dict[str, Any], virtual_key: str, exprs: ExpressionCompiler) -> CompiledWhere:
        result: Filter = {}
        additional: List[Filter] = []
        for key, value in query.items():
            if key == "$and":
                children = []
                for item in value:
                    child = self._transform_query(item, virtual_key, exprs)
                    if child is NO_MATCH:
                        return NO_MATCH
                    if child:
                        children.append(child)
                if children:
                    result["$and"] = children
            elif key == "$or":
                if not value:
                    return NO_MATCH
                children = []
                unconstrained = False
                for item in value:
                    child = self._transform_query(item, virtual_key, exprs)
                    if child is NO_MATCH:
                        continue
                    if not child:
                        unconstrained = True
                    else:
                        children.append(child)
                if unconstrained:
                    continue
                if not children:
                    return NO_MATCH
                result["$or"] = children
            elif key == "$not":
                child = self._transform_query(value, virtual_key, exprs)
                if child is NO_MATCH:
                    continue
                if not child:
                    return NO_MATCH
                result["$nor"] = [child]
            elif key == "$expr":
                additional.append({"$expr": exprs.compile(value)})
            else:
                actual_key = get_actual_key(key, virtual_key)
                child = self.fields.transform(value, actual_key, additional)
                if child.is_never:
                    return NO_MATCH
                if not child.is_fragment:
                    continue
                existing = result.get(actual_key)
                if isinstance(existing, dict):
                    # shared operators go to $and instead of overwriting
                    if existing.keys() & child.fragment.keys():
                        additional.append({actual_key: child.fragment})
                    else:
                        existing.update(child.fragment)
                else:
                    result[actual_key] = child.fragment
        if additional:
            result.setdefault("$and", []).extend(additional)
        return result


mongo_where = MongoWhereCompiler()
