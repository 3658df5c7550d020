"""Abstract driver interface.

A driver owns one backend connection and executes table operations. Query and
eval arguments arrive in the abstract grammar; `build_filter` and
`build_eval` compile them with the MongoDB compiler.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from .exceptions import UnknownTableError
from .querydsl.compilers.mongo import CompiledWhere, MongoWhereCompiler, mongo_where
from .querydsl.naming import NameGenerator
from .schema import CursorOptions, DatabaseStats, TableModel
from .types import Pipeline, QueryExpr

if TYPE_CHECKING:
    from .engine import Database


class Driver(ABC):
    """Base class for backend drivers.

    Attributes:
        database: Owning database, source of table models
        config: Driver-specific configuration
        where_compiler: Compiler used for filters and expressions
    """

    where_compiler: MongoWhereCompiler = mongo_where

    def __init__(self, database: "Database", config: Optional[Dict[str, Any]] = None) -> None:
        self.database = database
        self.config = config or {}

    def model(self, name: str) -> TableModel:
        model = self.database.tables.get(name)
        if model:
            return model
        raise UnknownTableError(f'unknown table name "{name}"', table=name)

    def build_filter(self, table: str, query: QueryExpr, pipeline: Optional[Pipeline] = None) -> CompiledWhere:
        """Compile `query` for `table`; aggregate stages are appended to `pipeline`."""
        model = self.model(table)
        return self.where_compiler.to_where(
            query,
            virtual_key=model.virtual_key,
            on_aggr=pipeline.extend if pipeline is not None else None,
            names=NameGenerator(reserved=model.fields),
        )

    def build_eval(self, table: str, expr: Any) -> Tuple[Any, Pipeline]:
        """Compile `expr` for `table`, returning the value and the emitted stages."""
        model = self.model(table)
        pipeline: Pipeline = []
        value = self.where_compiler.to_eval(
            expr,
            virtual_key=model.virtual_key,
            on_aggr=pipeline.extend,
            names=NameGenerator(reserved=model.fields),
        )
        return value, pipeline

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @abstractmethod
    async def start(self) -> None: ...

    @abstractmethod
    async def stop(self) -> None: ...

    @abstractmethod
    async def drop(self) -> None: ...

    @abstractmethod
    async def stats(self) -> DatabaseStats: ...

    @abstractmethod
    async def prepare(self, name: str) -> None:
        """Bring the backend table `name` in line with its current model."""

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    @abstractmethod
    async def get(self, table: str, query: QueryExpr, cursor: CursorOptions) -> List[Dict[str, Any]]: ...

    @abstractmethod
    async def eval(self, table: str, expr: Any, query: QueryExpr) -> Any: ...

    @abstractmethod
    async def set(self, table: str, query: QueryExpr, data: Dict[str, Any]) -> None: ...

    @abstractmethod
    async def remove(self, table: str, query: QueryExpr) -> None: ...

    @abstractmethod
    async def create(self, table: str, data: Dict[str, Any]) -> Dict[str, Any]: ...

    @abstractmethod
    async def upsert(self, table: str, data: List[Dict[str, Any]], keys: List[str]) -> None: ...
