"""Base compiler interface and compile result types.

Defines the abstract contract for where compilers, the tri-state `Match`
returned for a single field query, and the `NO_MATCH` sentinel returned for a
whole query that can never match.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

__all__ = (
    "BaseWhere",
    "Match",
    "MatchKind",
    "NoMatch",
    "NO_MATCH",
    "is_no_match",
)


class MatchKind(str, Enum):
    ALWAYS = "always"
    NEVER = "never"
    FRAGMENT = "fragment"


@dataclass(frozen=True)
class Match:
    """Result of compiling one field query.

    Exactly one of: always-matches, never-matches, or a filter fragment.
    An empty fragment is never produced; "no constraint" is `Match.always()`.
    """

    kind: MatchKind
    fragment: Optional[Dict[str, Any]] = None

    @classmethod
    def always(cls) -> "Match":
        return _ALWAYS

    @classmethod
    def never(cls) -> "Match":
        return _NEVER

    @classmethod
    def of(cls, fragment: Dict[str, Any]) -> "Match":
        if not fragment:
            return _ALWAYS
        return cls(MatchKind.FRAGMENT, fragment)

    @property
    def is_always(self) -> bool:
        return self.kind is MatchKind.ALWAYS

    @property
    def is_never(self) -> bool:
        return self.kind is MatchKind.NEVER

    @property
    def is_fragment(self) -> bool:
        return self.kind is MatchKind.FRAGMENT


_ALWAYS = Match(MatchKind.ALWAYS)
_NEVER = Match(MatchKind.NEVER)


class NoMatch:
    """Marker for a query that matches no documents.

    Distinct from `{}`, which is an unconstrained filter matching everything.
    """

    _instance: Optional["NoMatch"] = None

    def __new__(cls) -> "NoMatch":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_MATCH"

    def __reduce__(self) -> str:
        return "NO_MATCH"


NO_MATCH = NoMatch()


def is_no_match(result: Any) -> bool:
    """Return True if a compiled filter is the `NO_MATCH` sentinel."""
    return result is NO_MATCH


class BaseWhere(ABC):
    """Abstract base class for where clause compilers.

    Subclasses implement `to_where` and `to_expr` to produce backend-specific
    filter structures.
    """

    @abstractmethod
    def to_where(self, node: Dict[str, Any]) -> Any:
        """Convert a query node into the backend-native filter representation."""
        raise NotImplementedError

    @abstractmethod
    def to_expr(self, node: Dict[str, Any]) -> str:
        """Convert a query node into a string expression for debugging."""
        raise NotImplementedError
