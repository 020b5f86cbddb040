"""Narrowing helpers for the untyped tables ``tomllib`` returns."""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

StrDict = dict[str, object]


def as_str_dict(obj: object) -> StrDict | None:
    """``obj`` as a string-keyed table, or None if it is anything else."""
    if not isinstance(obj, dict):
        return None
    table = cast(dict[object, object], obj)
    if any(not isinstance(key, str) for key in table):
        return None
    return cast(StrDict, table)


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Non-empty stripped string at ``key``; None when missing or blank."""
    value = table.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    return as_str_dict(table.get(key))
