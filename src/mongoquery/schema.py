"""Pydantic schemas shared by the database and its drivers."""

from typing import Any, Dict, List, Literal, Optional, Sequence, Union

from pydantic import BaseModel, Field

from .settings import settings as api_settings

Direction = Literal["asc", "desc"]


class TableModel(BaseModel):
    """Declared shape of one table, accumulated across `Database.extend` calls."""

    name: str = Field(..., description="Table name.")
    fields: Dict[str, Any] = Field(default_factory=dict, description="Field declarations by name.")
    primary: Union[str, List[str]] = Field("id", description="Primary key field(s).")
    driver: Optional[str] = Field(None, description="Name of the driver serving this table.")

    @property
    def primary_keys(self) -> List[str]:
        return [self.primary] if isinstance(self.primary, str) else list(self.primary)

    @property
    def virtual_key(self) -> str:
        """Field name compiled to the backend identity field."""
        if isinstance(self.primary, str):
            return self.primary
        return api_settings.VIRTUAL_KEY

    def extend(self, fields: Dict[str, Any], primary: Union[str, List[str], None] = None) -> None:
        self.fields.update(fields)
        if primary is not None:
            self.primary = primary


class CursorOptions(BaseModel):
    limit: Optional[int] = Field(None, ge=0)
    offset: Optional[int] = Field(None, ge=0)
    fields: Optional[List[str]] = None
    sort: Dict[str, Direction] = Field(default_factory=dict)

    @classmethod
    def from_any(cls, cursor: Union["CursorOptions", Sequence[str], Dict[str, Any], None] = None) -> "CursorOptions":
        """Accept a field list, an options dict, a CursorOptions or None."""
        if isinstance(cursor, CursorOptions):
            return cursor
        if cursor is None:
            return cls()
        if isinstance(cursor, dict):
            return cls(**cursor)
        return cls(fields=list(cursor))


class TableStats(BaseModel):
    count: int = 0
    size: int = 0


class DatabaseStats(BaseModel):
    size: int = 0
    tables: Dict[str, TableStats] = Field(default_factory=dict)
