"""
Declarative schema descriptors.

A ``Schema`` names an entity, its table and its fields. A field whose type is
another ``Schema`` is a to-one relation stored as ``<key>_id`` on this table;
a field typed ``[Schema]`` is a one-to-many relation whose rows live in the
child table under ``<parent>_id``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

import humps


@dataclass
class Field:
    type: Any
    sort_by: bool = False
    search_text: bool = False
    optional: bool = False

    @property
    def is_schema(self) -> bool:
        return isinstance(self.type, Schema)

    @property
    def is_schema_list(self) -> bool:
        return (
            isinstance(self.type, list)
            and len(self.type) == 1
            and isinstance(self.type[0], Schema)
        )

    @property
    def schema(self) -> Optional["Schema"]:
        """Related schema for relation fields, ``None`` for scalars."""
        if self.is_schema:
            return self.type
        if self.is_schema_list:
            return self.type[0]
        return None


class Schema:
    def __init__(self, name: str, fields: Dict[str, Field], table_name: Optional[str] = None):
        if not name:
            raise ValueError("Schema name is required")
        self.name = name
        self._table_name = table_name
        self.fields: Dict[str, Field] = {"id": Field(int)}
        self.fields.update(fields)
        # Schemas that own this one through an array-of-schema field
        self.parents: List[Schema] = []
        for field in self.fields.values():
            if field.is_schema_list and self not in field.schema.parents:
                field.schema.parents.append(self)

    def __repr__(self) -> str:
        return f"Schema({self.name!r})"

    def __getitem__(self, key: str) -> Field:
        return self.fields[key]

    def __contains__(self, key: str) -> bool:
        return key in self.fields

    @property
    def table_name(self) -> str:
        return self._table_name or humps.decamelize(self.name)

    @property
    def foreign_key(self) -> str:
        """Field key children use to point at this schema (``postId``)."""
        return f"{humps.camelize(self.name)}Id"

    def keys(self) -> List[str]:
        return list(self.fields)

    def nested_fields(self) -> Iterator[str]:
        """Keys of one-to-many (array-of-schema) fields."""
        for key, field in self.fields.items():
            if field.is_schema_list:
                yield key

    def search_fields(self) -> Iterator[str]:
        for key, field in self.fields.items():
            if field.search_text:
                yield key

    def sort_key(self, default: str = "name") -> str:
        """Column used when another table orders by this schema."""
        for key, field in self.fields.items():
            if field.sort_by:
                return key
        return default
