"""Classification of decoded JSON values.

Documents are plain Python values as produced by `json.loads`. The matcher
does not branch on Python types directly; it asks `kind_of` for the tag and
dispatches on that.
"""
from enum import Enum
from typing import Any, Mapping


class ValueKind(Enum):
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    TEXT = "text"
    SEQUENCE = "sequence"
    KEYED = "keyed"

    @property
    def is_primitive(self) -> bool:
        return self not in (ValueKind.SEQUENCE, ValueKind.KEYED)


def kind_of(value: Any) -> ValueKind:
    if value is None:
        return ValueKind.NULL
    # bool is a subclass of int; it must be tested first
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.TEXT
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    if isinstance(value, Mapping):
        return ValueKind.KEYED
    raise TypeError(f"Unsupported document value type: {type(value).__name__}")


def strict_equal(a: Any, b: Any) -> bool:
    """Equality that never crosses kinds (``True`` is not ``1``)."""
    ka, kb = kind_of(a), kind_of(b)
    if ka is not kb or not ka.is_primitive:
        return False
    return a == b


def contains_strict(seq, value: Any) -> bool:
    return any(strict_equal(item, value) for item in seq)


def check_json_value(value: Any) -> Any:
    """Return `value` unchanged if every nested value has a ValueKind.

    Raises ValueError naming the first unsupported type.
    """
    stack = [value]
    while stack:
        item = stack.pop()
        try:
            kind = kind_of(item)
        except TypeError as e:
            raise ValueError(str(e)) from e
        if kind is ValueKind.SEQUENCE:
            stack.extend(item)
        elif kind is ValueKind.KEYED:
            stack.extend(item.values())
    return value
