from .base import NO_MATCH, BaseWhere, Match, MatchKind, NoMatch, is_no_match
from .expr import ExpressionCompiler
from .field import FieldQueryCompiler
from .mongo import MongoWhereCompiler, mongo_where

__all__ = (
    "BaseWhere",
    "Match",
    "MatchKind",
    "NoMatch",
    "NO_MATCH",
    "is_no_match",
    "FieldQueryCompiler",
    "ExpressionCompiler",
    "MongoWhereCompiler",
    "mongo_where",
)
