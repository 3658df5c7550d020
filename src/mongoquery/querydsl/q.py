"""Query DSL core utilities.

This module defines the `Q` class used to compose query expressions without
writing the nested dict grammar by hand. A `Q` node turns into a query
expression dict which the MongoDB compiler understands.

Typical usage:

- Build filters: `Q(age__gte=18) & Q(age__lte=30)`
- Negate: `~Q(is_active=True)`
- Compile: `q.to_where("mongo")` or `q.to_expr("mongo")`
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, List, Literal

BackendType = Literal["generic", "mongo"]


class Q:
    """Composable boolean query node.

    A `Q` instance holds leaf-level filters (e.g., `field__op=value`) or
    boolean combinations of child `Q` nodes using `$and` / `$or` connectors.

    - Use `&` to combine with logical AND.
    - Use `|` to combine with logical OR.
    - Use `~` to negate a node.

    Filter keys follow the `field__lookup` convention where lookup is one
    of: `eq`, `ne`, `gt`, `gte`, `lt`, `lte`, `in`, `nin`, `exists`,
    `regex`, `regexfor`, `size`, `el`. A key without a known lookup is an
    equality test; nested fields use `__` and become dotted paths.
    """

    _OP_MAP = {
        "eq": "$eq",
        "ne": "$ne",
        "gt": "$gt",
        "gte": "$gte",
        "lt": "$lt",
        "lte": "$lte",
        "in": "$in",
        "nin": "$nin",
        "exists": "$exists",
        "regex": "$regex",
        "regexfor": "$regexFor",
        "size": "$size",
        "el": "$el",
    }

    def __init__(self, negate: bool = False, **filters: Any):
        """Initialize a `Q` node.

        - negate: whether this node is negated.
        - filters: leaf-level filters using `field__lookup=value` pairs.
        """
        self.filters: Dict[str, Any] = filters
        self.children: List["Q"] = []
        self.connector = "$and"
        self.negate = negate

    def __and__(self, other: "Q") -> "Q":
        """Return a new node representing logical AND of two nodes."""
        node = Q()
        node.connector = "$and"
        node.children = [self, other]
        return node

    def __or__(self, other: "Q") -> "Q":
        """Return a new node representing logical OR of two nodes."""
        node = Q()
        node.connector = "$or"
        node.children = [self, other]
        return node

    def __invert__(self) -> "Q":
        """Return a negated copy of this node (logical NOT)."""
        q = deepcopy(self)
        q.negate = not self.negate
        return q

    def __str__(self) -> str:
        return str(self.to_dict())

    def __repr__(self) -> str:
        return f"<Q: {self.to_dict()}>"

    # -------------------
    # Query expression dict
    # -------------------
    def _leaf_to_dict(self) -> Dict[str, Dict[str, Any]]:
        """Convert leaf filters to field queries keyed by dotted field path."""
        result: Dict[str, Dict[str, Any]] = {}
        for key, value in self.filters.items():
            field, op = key, "$eq"
            if "__" in key:
                # "info__lang__eq" -> field="info__lang", lookup="eq"
                head, lookup = key.rsplit("__", 1)
                if lookup in self._OP_MAP:
                    field, op = head, self._OP_MAP[lookup]
            field_key = field.replace("__", ".")
            result.setdefault(field_key, {})
            result[field_key][op] = value
        return result

    def to_dict(self) -> Dict[str, Any]:
        """Return the query expression dict of this node.

        - Leaves become `{field: {op: value}}` mappings.
        - Boolean combinations use `{"$and": [...]}`, `{"$or": [...]}`.
        - Negation wraps with `{"$not": node}`.
        """
        if self.children:
            node = {self.connector: [child.to_dict() for child in self.children]}
        else:
            node = self._leaf_to_dict()
        if self.negate:
            return {"$not": node}
        return node

    # -------------------
    # Backend-specific expression/dict
    # -------------------
    def to_where(self, backend: BackendType = "generic", **kwargs: Any) -> Any:
        """Compile to a backend-native filter.

        - For `mongo`, returns a filter dict or `NO_MATCH`; keyword arguments
          (`virtual_key`, `on_aggr`, `names`) go to the compiler.
        - For `generic`, returns the query expression dict.
        """
        node = self.to_dict()
        if backend == "mongo":
            from .compilers.mongo import mongo_where

            return mongo_where.to_where(node, **kwargs)
        return node

    def to_expr(self, backend: BackendType = "generic") -> str:
        """Compile to a string expression for debugging."""
        node = self.to_dict()
        if backend == "mongo":
            from .compilers.mongo import mongo_where

            return mongo_where.to_expr(node)
        return str(node)
