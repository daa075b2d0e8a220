"""Small predicates shared by the serializer and the request pipeline."""

from __future__ import annotations

from typing import Any, Mapping


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_object(value: Any) -> bool:
    return isinstance(value, Mapping) and not is_array(value)


def is_defined(value: Any) -> bool:
    return value is not None


def is_function(value: Any) -> bool:
    return callable(value)


def is_string(value: Any) -> bool:
    return isinstance(value, str)
