"""
Field type definitions for metablock IR.

Field types are an open set: the well known types below are always present,
and callers may register additional identifiers on their own registry before
parsing.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field


class FieldType(BaseModel):
    """
    A field type, identified by its id.

    Examples:
        - FieldType(id="text")
        - FieldType(id="date")
    """

    id: str = Field(..., min_length=1)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.id


NONE = FieldType(id="none")
DATE = FieldType(id="date")
EMAIL = FieldType(id="email")
TEXT = FieldType(id="text")
TEXTBOX = FieldType(id="textbox")
URL = FieldType(id="url")
INT = FieldType(id="int")
FLOAT = FieldType(id="float")

BUILTIN_FIELD_TYPES: tuple[FieldType, ...] = (NONE, DATE, EMAIL, TEXT, TEXTBOX, URL, INT, FLOAT)


class FieldTypeRegistry:
    """
    Catalog of known field types.

    Registration takes a lock, lookups do not. Finish registering custom
    types before handing the registry to concurrent parses.
    """

    def __init__(self, types: Iterable[FieldType] = ()):
        self._lock = threading.Lock()
        self._types: dict[str, FieldType] = {}
        for field_type in types:
            self._types[field_type.id] = field_type

    @classmethod
    def with_defaults(cls) -> FieldTypeRegistry:
        """Create a registry holding the built-in types."""
        return cls(BUILTIN_FIELD_TYPES)

    def register(self, type_id: str) -> FieldType:
        """
        Register a type id.

        Registering an id that is already known returns the stored type.

        Raises:
            ValueError: If the id is empty or whitespace only
        """
        if not type_id or not type_id.strip():
            raise ValueError("Field type id may not be empty")
        with self._lock:
            existing = self._types.get(type_id)
            if existing is None:
                existing = FieldType(id=type_id)
                self._types[type_id] = existing
            return existing

    def lookup(self, type_id: str) -> FieldType:
        """
        Get a type by id.

        Raises:
            KeyError: If no type with this id is registered
        """
        try:
            return self._types[type_id]
        except KeyError:
            raise KeyError(f"Unknown field type '{type_id}'") from None

    def get(self, type_id: str | None) -> FieldType | None:
        if type_id is None:
            return None
        return self._types.get(type_id)

    def exists(self, type_id: str | None) -> bool:
        return type_id is not None and type_id in self._types

    def list_all(self) -> frozenset[FieldType]:
        return frozenset(self._types.values())

    def ids(self) -> list[str]:
        return sorted(self._types)

    def __contains__(self, type_id: object) -> bool:
        return isinstance(type_id, str) and type_id in self._types

    def __iter__(self) -> Iterator[FieldType]:
        return iter(list(self._types.values()))

    def __len__(self) -> int:
        return len(self._types)
