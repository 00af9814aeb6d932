"""Accumulated per-call field errors returned inline by CRUD mutations."""
from __future__ import annotations

from typing import Dict, List


class FieldError(Exception):
    """Bag of ``{field, message}`` entries raised once populated."""

    def __init__(self, errors: List[Dict[str, str]] | None = None):
        super().__init__()
        self._errors: List[Dict[str, str]] = list(errors or [])

    def __str__(self) -> str:
        return "; ".join(f"{e['field']}: {e['message']}" for e in self._errors)

    @property
    def errors(self) -> List[Dict[str, str]]:
        return list(self._errors)

    @property
    def has_errors(self) -> bool:
        return bool(self._errors)

    def set_error(self, field: str, message: str) -> "FieldError":
        self._errors.append({"field": field, "message": message})
        return self

    def throw_if(self) -> None:
        if self._errors:
            raise self
