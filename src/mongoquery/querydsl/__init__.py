"""Query DSL module.

Exports the `Q` class for building composable query expressions, and the
MongoDB compilers turning query and eval expressions into filter documents
and aggregation pipelines.
"""

from .compilers import NO_MATCH, ExpressionCompiler, FieldQueryCompiler, Match, MongoWhereCompiler, is_no_match, mongo_where
from .naming import NameGenerator
from .q import Q

__all__ = (
    "Q",
    "NO_MATCH",
    "is_no_match",
    "Match",
    "NameGenerator",
    "FieldQueryCompiler",
    "ExpressionCompiler",
    "MongoWhereCompiler",
    "mongo_where",
)
