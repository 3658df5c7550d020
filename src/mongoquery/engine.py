"""
Database orchestrator.

`Database` keeps the table models, the connected drivers and the schema
preparation schedule, and dispatches table operations to the driver serving
each table. Queries and expressions are forwarded uncompiled; drivers compile
them with the MongoDB compiler.

Schema preparation is debounced: `extend` only records the table name in a
pending set and schedules a single flush task on the running event loop. All
`extend` calls made in the same synchronous turn are therefore prepared with
one `driver.prepare(name)` per table name.
"""

import asyncio
from typing import Any, Dict, List, Optional, Sequence, Type, Union

from .abc import Driver
from .exceptions import DriverNotConnectedError, InvalidFieldError
from .logger import Logger
from .schema import CursorOptions, DatabaseStats, TableModel
from .types import QueryExpr


class Database:
    """High-level entry point owning table models and driver connections.

    Attributes:
        tables: Table models by name
        drivers: Connected drivers by connection name
    """

    def __init__(self) -> None:
        self.tables: Dict[str, TableModel] = {}
        self.drivers: Dict[str, Driver] = {}
        # insertion-ordered set of table names awaiting preparation
        self._stashed: Dict[str, None] = {}
        self._flush_task: Optional[asyncio.Task] = None
        self.logger = Logger("engine")

    # ------------------------------------------------------------------
    # Connections
    # ------------------------------------------------------------------
    async def connect(
        self,
        driver_cls: Type[Driver],
        config: Optional[Dict[str, Any]] = None,
        name: str = "default",
    ) -> Driver:
        """Start a driver, register it under `name` and prepare every table."""
        driver = driver_cls(self, config)
        await driver.start()
        self.drivers[name] = driver
        self.logger.message("Driver connected: name=%s driver=%s", name, driver_cls.__name__)
        self.refresh()
        return driver

    def refresh(self) -> None:
        """Schedule preparation of every declared table."""
        for name in self.tables:
            self._stash(name)

    def _driver_for(self, table: str) -> Optional[Driver]:
        model = self.tables.get(table)
        if model is not None and model.driver:
            return self.drivers.get(model.driver)
        return next(iter(self.drivers.values()), None)

    def get_driver(self, table: str) -> Driver:
        driver = self._driver_for(table)
        if driver is None:
            raise DriverNotConnectedError("No driver connected", table=table)
        return driver

    async def stop_all(self) -> None:
        drivers = list(self.drivers.values())
        self.drivers = {}
        await asyncio.gather(*(driver.stop() for driver in drivers))

    async def drop_all(self) -> None:
        await asyncio.gather(*(driver.drop() for driver in self.drivers.values()))

    async def stats(self) -> DatabaseStats:
        stats = DatabaseStats()
        for result in await asyncio.gather(*(driver.stats() for driver in self.drivers.values())):
            stats.size += result.size
            stats.tables.update(result.tables)
        return stats

    # ------------------------------------------------------------------
    # Schema preparation
    # ------------------------------------------------------------------
    def extend(
        self,
        name: str,
        fields: Dict[str, Any],
        primary: Union[str, List[str], None] = None,
        driver: Optional[str] = None,
    ) -> TableModel:
        """Declare or extend table `name` and schedule its preparation."""
        model = self.tables.get(name)
        if model is None:
            model = self.tables[name] = TableModel(name=name, driver=driver)
        model.extend(fields, primary=primary)
        self._stash(name)
        return model

    def _stash(self, name: str) -> None:
        self._stashed[name] = None
        if self._flush_task is not None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # outside an event loop the flush happens on the next awaited operation
            return
        self._flush_task = loop.create_task(self._flush())

    async def _flush(self) -> None:
        try:
            while self._stashed:
                names = list(self._stashed)
                self._stashed.clear()
                for name in names:
                    driver = self._driver_for(name)
                    if driver is None:
                        # prepared again by refresh() once its driver connects
                        self.logger.debug("No driver for table %s, deferring preparation", name)
                        continue
                    self.logger.debug("Preparing table %s", name)
                    await driver.prepare(name)
        finally:
            self._flush_task = None

    async def _ready(self, table: str) -> None:
        """Wait until pending preparation (including `table`'s) has completed."""
        if table in self._stashed and self._flush_task is None:
            self._flush_task = asyncio.get_running_loop().create_task(self._flush())
        if self._flush_task is not None:
            await self._flush_task

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    async def get(
        self,
        table: str,
        query: QueryExpr,
        cursor: Union[CursorOptions, Sequence[str], Dict[str, Any], None] = None,
    ) -> List[Dict[str, Any]]:
        await self._ready(table)
        return await self.get_driver(table).get(table, query, CursorOptions.from_any(cursor))

    async def eval(self, table: str, expr: Any, query: Optional[QueryExpr] = None) -> Any:
        await self._ready(table)
        return await self.get_driver(table).eval(table, expr, query or {})

    async def set(self, table: str, query: QueryExpr, update: Dict[str, Any]) -> None:
        await self._ready(table)
        driver = self.get_driver(table)
        primary = driver.model(table).primary_keys
        modified = [key for key in primary if key in update]
        if modified:
            raise InvalidFieldError("cannot modify primary key", field=modified[0], operation="set", table=table)
        await driver.set(table, query, update)

    async def remove(self, table: str, query: QueryExpr) -> None:
        await self._ready(table)
        await self.get_driver(table).remove(table, query)

    async def create(self, table: str, data: Dict[str, Any]) -> Dict[str, Any]:
        await self._ready(table)
        return await self.get_driver(table).create(table, data)

    async def upsert(
        self,
        table: str,
        data: List[Dict[str, Any]],
        keys: Union[str, List[str], None] = None,
    ) -> None:
        await self._ready(table)
        driver = self.get_driver(table)
        if keys is None:
            keys = driver.model(table).primary_keys
        elif isinstance(keys, str):
            keys = [keys]
        await driver.upsert(table, data, keys)
