"""Helpers for reading numbers out of parsed configuration values."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

__all__ = ["get_double", "get_field_double", "get_member_double"]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def get_double(value: Any) -> float:
    """Return an integer or floating-point value as a float."""
    if not _is_number(value):
        raise TypeError(f"expected an int or a double, got {value!r}")
    return float(value)


def get_field_double(value: Any, field: Any) -> float:
    """Return ``value[field]`` as a float; it must be an int or a double."""
    item = value[field]
    if not _is_number(item):
        raise TypeError(f"field {field!r} is not an int or a double: {item!r}")
    return float(item)


def get_member_double(value: Mapping, field: str, default_value: float) -> float:
    """Return ``value[field]`` as a float, or ``default_value`` if it is absent."""
    if field in value:
        return get_field_double(value, field)
    return default_value