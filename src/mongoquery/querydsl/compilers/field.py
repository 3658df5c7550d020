"""Field query compiler.

Compiles the predicate attached to a single field into a tri-state `Match`.

Shorthand forms are desugared first:

- scalar or date -> `{"$eq": value}`
- list or tuple  -> `{"$in": [...]}`, an empty list never matches
- compiled regex -> `{"$regex": pattern}`
- None           -> `{"$exists": False}`
- any other non-mapping value (e.g. an ObjectId) -> `{"$eq": value}`

Operator dicts may combine `$and`, `$or`, `$not`, `$el` and `$regexFor` with
any native MongoDB operator, which is copied through untouched. Constraints
that cannot live under the field key (e.g. `$or`, `$nor`, `$expr`) are pushed
to a caller-supplied list of extra filters.
"""

from typing import Any, Dict, List, Mapping, Optional

from ...constants import REGEX_FOR_BODY
from ...exceptions import UnsupportedFeatureError
from ...logger import Logger
from ...settings import settings as api_settings
from ...types import FieldQuery, Filter
from .base import Match
from .utils import is_pattern, is_scalar

__all__ = ("FieldQueryCompiler",)


class FieldQueryCompiler:
    """Compile one field's query into always / never / filter fragment.

    Args:
        supports_function: Whether the server can evaluate `$function`
            (server-side JavaScript). `$regexFor` depends on it.
    """

    def __init__(self, supports_function: Optional[bool] = None) -> None:
        if supports_function is None:
            supports_function = api_settings.SUPPORTS_FUNCTION
        self.supports_function = supports_function
        self.logger = Logger("compiler.field")

    def to_document(self, query: FieldQuery, key: str) -> Match:
        """Compile `query` into a standalone filter document for `key`.

        The field's own operators go under `key`; extra constraints are
        gathered under `$and` in the same document.
        """
        filters: List[Filter] = []
        result: Filter = {}
        child = self.transform(query, key, filters)
        if child.is_never:
            return child
        if child.is_fragment:
            result[key] = child.fragment
        if filters:
            result["$and"] = filters
        return Match.of(result)

    def transform(self, query: FieldQuery, key: str, filters: List[Filter]) -> Match:
        """Compile `query` into the operator dict stored under `key`.

        Constraints that need their own document are appended to `filters`.
        A `Match.always()` result may still have pushed entries to `filters`.
        """
        if is_scalar(query):
            return Match.of({"$eq": query})
        if isinstance(query, (list, tuple)):
            if not query:
                return Match.never()
            return Match.of({"$in": list(query)})
        if is_pattern(query):
            return Match.of({"$regex": query})
        if query is None:
            return Match.of({"$exists": False})
        if not isinstance(query, Mapping):
            # opaque values such as ObjectId compare by equality
            return Match.of({"$eq": query})

        result: Dict[str, Any] = {}
        for prop, value in query.items():
            if prop == "$and":
                for item in value:
                    child = self.to_document(item, key)
                    if child.is_never:
                        return child
                    if child.is_fragment:
                        filters.append(child.fragment)
            elif prop == "$or":
                if not self._transform_or(value, key, result, filters, "$in" in query):
                    return Match.never()
            elif prop == "$not":
                # $nor over a compound child can force a collection scan
                child = self.to_document(value, key)
                if child.is_always:
                    return Match.never()
                if child.is_fragment:
                    filters.append({"$nor": [child.fragment]})
            elif prop == "$el":
                child = self.transform(value, key, filters)
                if child.is_never:
                    return child
                if child.is_fragment:
                    result["$elemMatch"] = child.fragment
            elif prop == "$regexFor":
                filters.append(self._regex_for(key, value))
            elif prop == "$in" and isinstance(value, (list, tuple)) and not value:
                return Match.never()
            else:
                result[prop] = value
        return Match.of(result)

    def _transform_or(
        self,
        items: List[FieldQuery],
        key: str,
        result: Dict[str, Any],
        filters: List[Filter],
        has_in: bool,
    ) -> bool:
        """Compile a field-level `$or`. Returns False when it can never match."""
        if not items:
            return False
        if not has_in and all(is_scalar(item) for item in items):
            result["$in"] = list(items)
            return True
        disjuncts: List[Filter] = []
        for item in items:
            child = self.to_document(item, key)
            if child.is_always:
                return True
            if child.is_fragment:
                disjuncts.append(child.fragment)
        if not disjuncts:
            return False
        filters.append({"$or": disjuncts})
        return True

    def _regex_for(self, key: str, operand: Any) -> Filter:
        if not self.supports_function:
            raise UnsupportedFeatureError(
                "$regexFor requires server-side $function support",
                operator="$regexFor",
                field=key,
            )
        self.logger.debug("Compiling $regexFor on field %s as $function predicate", key)
        return {
            "$expr": {
                "$function": {
                    "body": REGEX_FOR_BODY,
                    "args": ["$" + key, operand],
                    "lang": "js",
                },
            },
        }
