"""
mongoquery compiles backend-agnostic query and eval expressions into MongoDB
filter documents and aggregation pipelines, and exposes the `Database`
orchestrator that hands them to drivers.
"""

from .abc import Driver
from .engine import Database
from .querydsl import NO_MATCH, Q, is_no_match, mongo_where
from .schema import CursorOptions, DatabaseStats, TableModel, TableStats

__version__ = "0.1.0"

__all__ = [
    "Database",
    "Driver",
    "Q",
    "NO_MATCH",
    "is_no_match",
    "mongo_where",
    "CursorOptions",
    "DatabaseStats",
    "TableModel",
    "TableStats",
]
