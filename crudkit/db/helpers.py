"""
Query helpers shared by CRUD instances.

``select_by`` maps a field-selection projection onto columns and joins;
``nest_rows`` folds the flat joined rows back into nested dicts and
``ordered_for`` re-orders batch-loaded rows to match the requested ids.
"""
from __future__ import annotations

from collections import defaultdict
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional, Sequence

import humps
from sqlalchemy import select
from sqlalchemy.sql import Select

from .schema import Schema
from .tables import table_for

# Separator between nesting levels in SQL column labels ("author__name")
NEST_SEPARATOR = "__"


class Projection:
    """Columns and joins needed to answer one field selection.

    Calling the projection returns a ``Select`` over the aliased base table
    with every required outer join applied.
    """

    def __init__(self, schema: Schema, prefix: str = "", table_name: Optional[str] = None):
        self.schema = schema
        self.prefix = prefix
        table_name = table_name or schema.table_name
        self.base = table_for(schema, prefix, table_name).alias(table_name)
        self.columns = [self.base.c.id.label("id")]
        self._joins: Dict[str, Any] = {}

    def join(self, key: str):
        """Return the alias for the to-one relation ``key``, joining it once."""
        alias = self._joins.get(key)
        if alias is None:
            child = self.schema[key].schema
            alias = table_for(child, self.prefix).alias(humps.decamelize(key))
            self._joins[key] = alias
        return alias

    def _add_relation(self, key: str, sub_fields: Mapping) -> None:
        child = self.schema[key].schema
        alias = self.join(key)
        self.columns.append(alias.c.id.label(f"{key}{NEST_SEPARATOR}id"))
        for sub_key in sub_fields:
            if sub_key == "id":
                continue
            sub_field = child.fields.get(sub_key)
            if sub_field is None or sub_field.schema is not None:
                continue
            self.columns.append(
                alias.c[humps.decamelize(sub_key)].label(f"{key}{NEST_SEPARATOR}{sub_key}")
            )

    def add(self, fields: Mapping) -> "Projection":
        for key, sub in fields.items():
            if key == "id":
                continue
            field = self.schema.fields.get(key)
            if field is None:
                # Columns outside the schema, e.g. a parent foreign key ("postId")
                column_name = humps.decamelize(key)
                if column_name in self.base.c:
                    self.columns.append(self.base.c[column_name].label(key))
                continue
            if field.is_schema_list:
                continue
            if field.is_schema:
                self._add_relation(key, sub if isinstance(sub, Mapping) else {})
            else:
                self.columns.append(self.base.c[humps.decamelize(key)].label(key))
        return self

    def __call__(self) -> Select:
        from_clause = self.base
        for key, alias in self._joins.items():
            fk_column = self.base.c[f"{humps.decamelize(key)}_id"]
            from_clause = from_clause.outerjoin(alias, alias.c.id == fk_column)
        return select(*self.columns).select_from(from_clause)


def select_by(schema: Schema, fields: Mapping, prefix: str = "", table_name: Optional[str] = None) -> Projection:
    return Projection(schema, prefix, table_name).add(fields or {})


def _prune_empty(node: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    for key, value in list(node.items()):
        if isinstance(value, dict):
            node[key] = _prune_empty(value)
    if all(value is None for value in node.values()):
        return None
    return node


def nest_row(row: Mapping) -> Dict[str, Any]:
    node: Dict[str, Any] = {}
    for label, value in row.items():
        parts = label.split(NEST_SEPARATOR)
        target = node
        for part in parts[:-1]:
            target = target.setdefault(part, {})
        target[parts[-1]] = value
    for key, value in list(node.items()):
        if isinstance(value, dict):
            node[key] = _prune_empty(value)
    return node


def nest_rows(rows: Iterable[Mapping]) -> List[Dict[str, Any]]:
    return [nest_row(row) for row in rows]


def ordered_for(rows: Iterable[Mapping], ids: Sequence[Any], field: str, single: bool):
    """Group ``rows`` by ``field`` and return them in the order of ``ids``.

    Keys are compared as strings so GraphQL ``ID`` arguments match integer
    columns.
    """
    grouped: Dict[str, List[Mapping]] = defaultdict(list)
    for row in rows:
        grouped[str(row[field])].append(row)
    result = []
    for element in ids:
        matches = grouped.get(str(element))
        if single:
            result.append(matches[0] if matches else None)
        else:
            result.append(list(matches) if matches else [])
    return result
