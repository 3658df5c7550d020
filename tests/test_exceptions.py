"""Tests for the exception hierarchy."""

import pytest

from mongoquery.exceptions import (
    DriverError,
    InvalidQueryError,
    MongoQueryError,
    QueryCompileError,
    UnknownTableError,
    UnsupportedFeatureError,
)


def test_message_with_details():
    err = UnsupportedFeatureError("Not supported", operator="$regexFor")
    assert str(err) == "Not supported (operator='$regexFor')"
    assert err.details == {"operator": "$regexFor"}


def test_details_only():
    assert str(MongoQueryError(table="user")) == "table='user'"


def test_repr():
    err = InvalidQueryError("Bad query", operator="$sum")
    assert repr(err) == "InvalidQueryError(message='Bad query', details={'operator': '$sum'})"


@pytest.mark.parametrize(
    "exc, base",
    [
        (InvalidQueryError, QueryCompileError),
        (UnsupportedFeatureError, QueryCompileError),
        (UnknownTableError, DriverError),
        (QueryCompileError, MongoQueryError),
    ],
)
def test_hierarchy(exc, base):
    assert issubclass(exc, base)
