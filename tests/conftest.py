"""Pytest configuration and fixtures for mongoquery tests."""

import random
from typing import Any, Dict, List

import pytest
from dotenv import load_dotenv

from mongoquery.abc import Driver
from mongoquery.querydsl.compilers.base import is_no_match
from mongoquery.querydsl.compilers.mongo import MongoWhereCompiler
from mongoquery.querydsl.naming import NameGenerator
from mongoquery.schema import CursorOptions, DatabaseStats, TableStats

# Load environment variables
load_dotenv()


class RecordingDriver(Driver):
    """In-memory driver that records calls and the filters it compiled.

    - Stores created rows per table
    - `get` returns every row unless the query compiles to NO_MATCH
    - `eval` returns the compiled value and pipeline instead of executing them
    """

    def __init__(self, database, config=None) -> None:
        super().__init__(database, config)
        self.started = False
        self.prepared: List[str] = []
        self.calls: List[tuple] = []
        self.rows: Dict[str, List[Dict[str, Any]]] = {}

    async def start(self) -> None:
        self.started = True

    async def stop(self) -> None:
        self.started = False

    async def drop(self) -> None:
        self.rows.clear()

    async def stats(self) -> DatabaseStats:
        tables = {name: TableStats(count=len(rows), size=len(rows)) for name, rows in self.rows.items()}
        return DatabaseStats(size=sum(t.size for t in tables.values()), tables=tables)

    async def prepare(self, name: str) -> None:
        self.prepared.append(name)

    async def get(self, table: str, query, cursor: CursorOptions):
        where = self.build_filter(table, query)
        self.calls.append(("get", table, where, cursor))
        if is_no_match(where):
            return []
        return list(self.rows.get(table, []))

    async def eval(self, table: str, expr, query):
        pipeline: List[Dict[str, Any]] = []
        where = self.build_filter(table, query, pipeline)
        value, stages = self.build_eval(table, expr)
        self.calls.append(("eval", table, where, pipeline + stages))
        return value, pipeline + stages

    async def set(self, table: str, query, data) -> None:
        self.calls.append(("set", table, self.build_filter(table, query), data))

    async def remove(self, table: str, query) -> None:
        self.calls.append(("remove", table, self.build_filter(table, query)))

    async def create(self, table: str, data):
        self.rows.setdefault(table, []).append(data)
        self.calls.append(("create", table, data))
        return data

    async def upsert(self, table: str, data, keys) -> None:
        self.calls.append(("upsert", table, data, keys))


@pytest.fixture
def compiler():
    """Compiler with server-side functions enabled and `id` as virtual key."""
    return MongoWhereCompiler(virtual_key="id", supports_function=True)


@pytest.fixture
def names():
    """Seeded name generator for reproducible placeholder names."""
    return NameGenerator(rng=random.Random(1234))


@pytest.fixture
def stages():
    """Collects every sink invocation, one list entry per aggregate node."""
    calls: List[List[Dict[str, Any]]] = []

    def sink(emitted):
        calls.append(list(emitted))

    sink.calls = calls
    return sink


@pytest.fixture
def driver_cls():
    return RecordingDriver
