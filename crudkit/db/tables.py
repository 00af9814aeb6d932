"""SQLAlchemy tables derived from schema descriptors."""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

import humps
from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)

from .schema import Schema

metadata = MetaData()

_SCALAR_TYPES = {
    str: lambda: String(255),
    int: Integer,
    float: Float,
    bool: Boolean,
    datetime: lambda: DateTime(timezone=True),
    date: Date,
}


def _column_type(py_type):
    factory = _SCALAR_TYPES.get(py_type)
    return factory() if factory is not None else Text()


def table_for(schema: Schema, prefix: str = "", table_name: Optional[str] = None) -> Table:
    """Return the table for ``schema`` under ``prefix``, building it on first use.

    ``table_name`` overrides the schema's own table name.
    """
    name = f"{prefix}{table_name or schema.table_name}"
    existing = metadata.tables.get(name)
    if existing is not None:
        return existing

    columns = [Column("id", Integer, primary_key=True, autoincrement=True)]
    for key, field in schema.fields.items():
        if key == "id" or field.is_schema_list:
            continue
        column_name = humps.decamelize(key)
        if field.is_schema:
            target = f"{prefix}{field.schema.table_name}"
            columns.append(Column(f"{column_name}_id", Integer, ForeignKey(f"{target}.id"), nullable=True))
        else:
            columns.append(Column(column_name, _column_type(field.type), nullable=field.optional))
    if "rank" not in schema.fields:
        columns.append(Column("rank", Integer, nullable=True))
    for parent in schema.parents:
        target = f"{prefix}{parent.table_name}"
        columns.append(
            Column(
                humps.decamelize(parent.foreign_key),
                Integer,
                ForeignKey(f"{target}.id", ondelete="CASCADE"),
                nullable=True,
                index=True,
            )
        )
    return Table(name, metadata, *columns)
