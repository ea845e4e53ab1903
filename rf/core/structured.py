"""Narrowing for decoded TOML/JSON.

rf.toml, manifests, Jira responses and `gh api` output all decode to plain
`object`. Parsers read them through these accessors, which return None for
anything of the wrong shape instead of raising.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

StrDict = dict[str, object]
ObjList = list[object]


def as_str_dict(obj: object) -> StrDict | None:
    """`obj` if it is a dict whose keys are all strings."""
    if isinstance(obj, dict) and all(isinstance(k, str) for k in cast(dict[object, object], obj)):
        return cast(StrDict, obj)
    return None


def as_obj_list(obj: object) -> ObjList | None:
    return cast(ObjList, obj) if isinstance(obj, list) else None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Stripped string at `key`; blank strings count as missing."""
    value = table.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    return as_str_dict(table.get(key))


def get_list(table: Mapping[str, object], key: str) -> ObjList | None:
    return as_obj_list(table.get(key))


def get_str_list(table: Mapping[str, object], key: str) -> list[str] | None:
    """Stripped strings at `key`, or None if any item is blank or not a string."""
    items = get_list(table, key)
    if items is None:
        return None
    strings = [get_str({"item": item}, "item") for item in items]
    if any(s is None for s in strings):
        return None
    return [s for s in strings if s is not None]
