"""
Generic single-table CRUD driven by GraphQL field selections.

A ``Crud`` subclass declares its ``schema``; instances are bound to one
SQLAlchemy session. Queries project only the requested fields and resolve
to-one relations with outer joins. Mutations return their payload or an
``{"errors": [...]}`` mapping instead of raising. Nested one-to-many writes
are dispatched to sibling instances from the request context and are not
wrapped in a transaction with the parent write.
"""
from __future__ import annotations

import functools
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import humps
from sqlalchemy import case, delete, distinct, func, insert, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from crudkit.utils.settings import get_settings

from .arguments import ListArgs, PageInfo
from .errors import FieldError
from .fields import parse_fields, sub_selection
from .helpers import nest_row, nest_rows, ordered_for, select_by
from .schema import Schema
from .tables import table_for

logger = logging.getLogger(__name__)


def _capture_errors(operation: str):
    """Return mutation failures inline as ``{"errors": [...]}``."""

    def decorator(method):
        @functools.wraps(method)
        def wrapper(self, *args, **kwargs):
            try:
                return method(self, *args, **kwargs)
            except FieldError as e:
                logger.info("%s_%s_failed: errors=%s", self.get_table_name(), operation, e.errors)
                return {"errors": e.errors}
            except SQLAlchemyError:
                logger.exception("%s_%s_db_error", self.get_table_name(), operation)
                self.db.rollback()
                return {
                    "errors": [
                        {"field": operation, "message": "Database error. Please try again later."}
                    ]
                }
            except (KeyError, ValueError, TypeError):
                # Malformed arguments, e.g. a filter without an id
                logger.exception("%s_%s_invalid_input", self.get_table_name(), operation)
                self.db.rollback()
                return {
                    "errors": [
                        {"field": operation, "message": "Invalid input. Please check the request."}
                    ]
                }

        return wrapper

    return decorator


class Crud:
    schema: Optional[Schema] = None
    # None falls back to the configured CRUDKIT_TABLE_PREFIX
    prefix: Optional[str] = None
    # None falls back to the schema's table name
    table_name: Optional[str] = None

    def __init__(self, db: Session):
        if self.schema is None:
            raise TypeError(f"{type(self).__name__} must declare a schema")
        self.db = db
        self._prefix = self.table_prefix()

    @classmethod
    def table_prefix(cls) -> str:
        return cls.prefix if cls.prefix is not None else get_settings().table_prefix

    @classmethod
    def define_table(cls):
        """Build (once) and return the table backing this CRUD class."""
        return table_for(cls.schema, cls.table_prefix(), cls.table_name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(table={self.get_prefix()}{self.get_table_name()})"

    def get_prefix(self) -> str:
        return self._prefix

    def get_table_name(self) -> str:
        return self.table_name or self.schema.table_name

    def get_schema(self) -> Schema:
        return self.schema

    @property
    def table(self):
        return table_for(self.schema, self._prefix, self.get_table_name())

    def _where(self, where: Mapping[str, Any]):
        if not where:
            raise FieldError().set_error("where", "A filter is required.")
        table = self.table
        return [table.c[humps.decamelize(key)] == value for key, value in where.items()]

    # Queries

    def _get_list(self, args: Mapping[str, Any], fields: Mapping[str, Any]) -> List[Dict[str, Any]]:
        params = ListArgs.model_validate(dict(args or {}))
        projection = select_by(self.schema, fields, self._prefix, self.get_table_name())
        base = projection.base

        direction = "asc"
        if params.order_by is not None and params.order_by.column:
            column = params.order_by.column
            direction = params.order_by.order
            field = self.schema.fields.get(column)
            if field is not None and field.is_schema:
                alias = projection.join(column)
                sort_column = alias.c[humps.decamelize(field.schema.sort_key())]
            else:
                column_name = humps.decamelize(column)
                if column_name not in base.c:
                    raise ValueError(f"Cannot order {self.get_table_name()} by unknown column {column!r}")
                sort_column = base.c[column_name]
        else:
            sort_column = base.c.id

        query = projection()
        query = query.order_by(sort_column.desc() if direction == "desc" else sort_column.asc())

        search_text = params.filter.search_text if params.filter is not None else None
        if search_text:
            conditions = [
                base.c[humps.decamelize(key)].like(f"%{search_text}%")
                for key in self.schema.search_fields()
            ]
            if conditions:
                query = query.where(or_(*conditions))

        if params.limit:
            query = query.limit(params.limit)
        if params.offset:
            query = query.offset(params.offset)

        return nest_rows(self.db.execute(query).mappings().all())

    def get_list(self, args: Mapping[str, Any], info) -> List[Dict[str, Any]]:
        return self._get_list(args, parse_fields(info))

    def get_paginated(self, args: Mapping[str, Any], info) -> Dict[str, Any]:
        edges = self._get_list(args, sub_selection(parse_fields(info), "edges"))
        total = self.get_total()
        # Approximation: a full page is assumed to have a successor
        page_info = PageInfo(
            total_count=total["count"],
            has_next_page=len(edges) == (args or {}).get("limit"),
        )
        return {"edges": edges, "pageInfo": page_info.model_dump(by_alias=True)}

    def get_total(self) -> Dict[str, int]:
        table = self.table
        count = self.db.execute(select(func.count(distinct(table.c.id)).label("count"))).scalar_one()
        return {"count": count}

    def _get(self, args: Mapping[str, Any], fields: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        node_id = args["where"]["id"]
        projection = select_by(self.schema, fields, self._prefix, self.get_table_name())
        row = self.db.execute(projection().where(projection.base.c.id == node_id)).mappings().first()
        return nest_row(row) if row is not None else None

    def get(self, args: Mapping[str, Any], info) -> Dict[str, Any]:
        node = self._get(args, sub_selection(parse_fields(info), "node"))
        return {"node": node}

    # Mutations

    def _extract_nested(self, data: Dict[str, Any]) -> List[Tuple[str, Mapping[str, Any]]]:
        """Pop array-of-schema entries out of ``data``."""
        nested = []
        for key in self.schema.nested_fields():
            if data.get(key):
                nested.append((key, data.pop(key)))
            else:
                data.pop(key, None)
        return nested

    def _dispatch_nested(self, ctx: Mapping[str, "Crud"], nested, parent_id) -> None:
        """Run nested create/update/delete entries in payload order.

        Each child statement commits on its own; the first failure stops the
        remaining entries and is reported without undoing earlier writes.
        """
        foreign_key = self.schema.foreign_key
        for key, entry in nested:
            child_name = self.schema[key].schema.name
            if child_name not in ctx:
                logger.error("%s_nested_unregistered: key=%s type=%s", self.get_table_name(), key, child_name)
                raise FieldError().set_error(key, f"No handler registered for nested {key} entries.")
            child = ctx[child_name]
            operations = [("create", item) for item in entry.get("create") or []]
            operations += [("update", item) for item in entry.get("update") or []]
            operations += [("delete", item) for item in entry.get("delete") or []]
            for operation, item in operations:
                logger.debug("%s_nested_%s: key=%s", self.get_table_name(), operation, key)
                try:
                    if operation == "create":
                        child._create({**item, foreign_key: parent_id})
                    elif operation == "update":
                        child._update(item)
                    else:
                        child._delete({"where": item})
                except SQLAlchemyError:
                    logger.exception("%s_nested_%s_failed: key=%s", self.get_table_name(), operation, key)
                    child.db.rollback()
                    raise FieldError().set_error(
                        key, f"Could not {operation} nested {key} entry. Please try again later."
                    ) from None

    def _create(self, data: Mapping[str, Any]):
        result = self.db.execute(insert(self.table).values(**humps.decamelize(dict(data))))
        self.db.commit()
        return result.inserted_primary_key[0]

    @_capture_errors("create")
    def create(self, args: Mapping[str, Any], ctx: Mapping[str, "Crud"], info) -> Dict[str, Any]:
        e = FieldError()
        e.throw_if()

        data = dict(args["data"])
        nested = self._extract_nested(data)
        new_id = self._create(data)
        self._dispatch_nested(ctx, nested, new_id)
        return self.get({"where": {"id": new_id}}, info)

    def _update(self, args: Mapping[str, Any]) -> int:
        data = humps.decamelize(dict(args["data"]))
        result = self.db.execute(update(self.table).where(*self._where(args["where"])).values(**data))
        self.db.commit()
        return result.rowcount

    @_capture_errors("update")
    def update(self, args: Mapping[str, Any], ctx: Mapping[str, "Crud"], info) -> Dict[str, Any]:
        e = FieldError()
        e.throw_if()

        if self._get(args, {}) is None:
            e.set_error("update", "Node does not exist.")
            e.throw_if()

        data = dict(args["data"])
        nested = self._extract_nested(data)
        if data:
            self._update({"data": data, "where": args["where"]})
        self._dispatch_nested(ctx, nested, args["where"]["id"])
        return self.get(args, info)

    def _delete(self, args: Mapping[str, Any]) -> int:
        result = self.db.execute(delete(self.table).where(*self._where(args["where"])))
        self.db.commit()
        return result.rowcount

    @_capture_errors("delete")
    def delete(self, args: Mapping[str, Any], info) -> Dict[str, Any]:
        e = FieldError()

        node = self.get(args, info)
        if node["node"] is None:
            e.set_error("delete", "Node does not exist.")
            e.throw_if()

        if self._delete(args):
            return node
        e.set_error("delete", "Could not delete Node. Please try again later.")
        e.throw_if()

    def _sort(self, args: Mapping[str, Any]) -> int:
        first_id, second_id, first_rank, second_rank = args["data"]
        table = self.table
        stmt = (
            update(table)
            .where(table.c.id.in_([first_id, second_id]))
            .values(rank=case((table.c.id == first_id, first_rank), else_=second_rank))
        )
        result = self.db.execute(stmt)
        self.db.commit()
        return result.rowcount

    @_capture_errors("sort")
    def sort(self, args: Mapping[str, Any]) -> Dict[str, Any]:
        e = FieldError()
        e.throw_if()

        count = self._sort(args)
        if count > 0:
            return {"count": count}
        e.set_error("sort", "Could not sort Node. Please try again later.")
        e.throw_if()

    @_capture_errors("update")
    def update_many(self, args: Mapping[str, Any]) -> Dict[str, Any]:
        logger.warning("%s_update_many_not_implemented: args=%s", self.get_table_name(), args)
        e = FieldError()
        e.set_error("update", "Not yet implemented. Please try again later.")
        e.throw_if()

    def _delete_many(self, args: Mapping[str, Any]) -> int:
        ids = list(args["where"]["id_in"] or [])
        if not ids:
            return 0
        result = self.db.execute(delete(self.table).where(self.table.c.id.in_(ids)))
        self.db.commit()
        return result.rowcount

    @_capture_errors("delete")
    def delete_many(self, args: Mapping[str, Any]) -> Dict[str, Any]:
        e = FieldError()

        count = self._delete_many(args)
        if count > 0:
            return {"count": count}
        e.set_error("delete", "Could not delete any of selected Node. Please try again later.")
        e.throw_if()

    def get_by_ids(self, ids: Sequence[Any], by: str, obj: "Crud", info) -> List[List[Dict[str, Any]]]:
        """Batch-load rows of ``obj`` whose ``<by>_id`` is in ``ids``, in input order."""
        fields = parse_fields(info)
        fields[f"{by}Id"] = True
        projection = select_by(obj.get_schema(), fields, obj.get_prefix(), obj.get_table_name())
        column = projection.base.c[f"{humps.decamelize(by)}_id"]
        query = projection().where(column.in_(list(ids))).order_by(projection.base.c.id)
        rows = nest_rows(self.db.execute(query).mappings().all())
        return ordered_for(rows, ids, f"{by}Id", False)
