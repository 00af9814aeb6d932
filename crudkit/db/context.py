"""Per-request registry of sibling CRUD instances keyed by type name."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Iterable, Iterator, Optional, Type

import humps
from sqlalchemy.orm import Session

from .crud import Crud


class CrudContext(Mapping):
    """Read-only mapping of ``TypeName -> Crud`` sharing one session.

    ``extras`` carries additional context values contributed by feature
    modules; CRUD instances win on name clashes.
    """

    def __init__(
        self,
        db: Session,
        cruds: Iterable[Type[Crud]] = (),
        extras: Optional[Dict[str, Any]] = None,
    ):
        self.db = db
        self._values: Dict[str, Any] = {"db": db}
        self._values.update(extras or {})
        for crud_cls in cruds:
            self._values[crud_cls.schema.name] = crud_cls(db)

    def __getitem__(self, name: str):
        if name in self._values:
            return self._values[name]
        pascal = humps.pascalize(name)
        if pascal in self._values:
            return self._values[pascal]
        raise KeyError(f"No CRUD registered for type {name!r}")

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)
