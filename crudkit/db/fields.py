"""
Field-selection parsing.

Turns a resolver's ``GraphQLResolveInfo`` into a nested projection dict, the
shape the query helpers consume: ``{"id": True, "author": {"name": True}}``.
"""
from __future__ import annotations

from collections.abc import Mapping
from copy import deepcopy
from typing import Any, Dict, Optional

from graphql.language import FieldNode, FragmentSpreadNode, InlineFragmentNode, SelectionSetNode


def _merge(target: Dict[str, Any], source: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in source.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            _merge(current, value)
        else:
            target[key] = value
    return target


def _parse_selection_set(selection_set: Optional[SelectionSetNode], fragments) -> Dict[str, Any]:
    fields: Dict[str, Any] = {}
    if selection_set is None:
        return fields
    for selection in selection_set.selections:
        if isinstance(selection, FieldNode):
            name = selection.name.value
            if name == "__typename":
                continue
            if selection.selection_set is not None:
                _merge(fields, {name: _parse_selection_set(selection.selection_set, fragments)})
            else:
                fields.setdefault(name, True)
        elif isinstance(selection, FragmentSpreadNode):
            fragment = fragments.get(selection.name.value)
            if fragment is not None:
                _merge(fields, _parse_selection_set(fragment.selection_set, fragments))
        elif isinstance(selection, InlineFragmentNode):
            _merge(fields, _parse_selection_set(selection.selection_set, fragments))
    return fields


def parse_fields(info: Any) -> Dict[str, Any]:
    """Return the sub-selection requested for the resolved field.

    A mapping passed in place of an info object is treated as an explicit
    projection and returned as a copy.
    """
    if info is None:
        return {}
    if isinstance(info, Mapping):
        return deepcopy(dict(info))
    fragments = getattr(info, "fragments", None) or {}
    fields: Dict[str, Any] = {}
    for node in info.field_nodes:
        _merge(fields, _parse_selection_set(node.selection_set, fragments))
    return fields


def sub_selection(fields: Mapping, key: str) -> Dict[str, Any]:
    """Return ``fields[key]`` as a projection dict (empty when not requested)."""
    value = fields.get(key)
    return dict(value) if isinstance(value, Mapping) else {}
