"""Tests for the pydantic models shared by the database and drivers."""

import pydantic
import pytest

from mongoquery.schema import CursorOptions, DatabaseStats, TableModel
from mongoquery.settings import settings


class TestTableModel:
    def test_defaults(self):
        model = TableModel(name="user")
        assert model.fields == {}
        assert model.primary_keys == ["id"]
        assert model.virtual_key == "id"

    def test_extend_merges_fields(self):
        model = TableModel(name="user", fields={"name": "string"})
        model.extend({"age": "integer"}, primary="uid")
        assert model.fields == {"name": "string", "age": "integer"}
        assert model.virtual_key == "uid"

    def test_composite_primary_uses_default_virtual_key(self):
        model = TableModel(name="link", primary=["from", "to"])
        assert model.primary_keys == ["from", "to"]
        assert model.virtual_key == settings.VIRTUAL_KEY


class TestCursorOptions:
    def test_from_none(self):
        assert CursorOptions.from_any(None) == CursorOptions()

    def test_from_field_list(self):
        assert CursorOptions.from_any(["name", "age"]).fields == ["name", "age"]

    def test_from_dict(self):
        cursor = CursorOptions.from_any({"limit": 10, "offset": 5, "sort": {"age": "desc"}})
        assert cursor.limit == 10
        assert cursor.offset == 5
        assert cursor.sort == {"age": "desc"}

    def test_passthrough(self):
        cursor = CursorOptions(limit=1)
        assert CursorOptions.from_any(cursor) is cursor

    def test_rejects_negative_limit(self):
        with pytest.raises(pydantic.ValidationError):
            CursorOptions(limit=-1)

    def test_rejects_unknown_direction(self):
        with pytest.raises(pydantic.ValidationError):
            CursorOptions(sort={"age": "up"})


def test_database_stats_defaults():
    stats = DatabaseStats()
    assert stats.size == 0
    assert stats.tables == {}
