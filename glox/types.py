"""Runtime value helpers for glox.

glox values map directly onto Python objects:

    Number   -> float
    String   -> str
    Boolean  -> bool
    Nil      -> None
    Callable -> glox.functions.Callable

Python treats `bool` as a subclass of `int` and happily compares
`True == 1.0`, so every helper here checks types explicitly instead of
relying on host coercions.
"""

from __future__ import annotations

import math
from typing import Any


def is_number(value: Any) -> bool:
    return isinstance(value, float) and not isinstance(value, bool)


def is_truthy(value: Any) -> bool:
    """`nil` and `false` are falsy; everything else, including 0 and "", is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def values_equal(a: Any, b: Any) -> bool:
    """Structural equality used by `==` and `!=`. Never raises."""
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    if type(a) is not type(b):
        return False
    return a == b


def type_name(value: Any) -> str:
    """Return the glox type name of a runtime value."""
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, float):
        return 'number'
    if isinstance(value, str):
        return 'string'
    return 'function'


def number_to_string(value: float) -> str:
    if value != value:
        return 'nan'
    if value in (float('inf'), float('-inf')):
        return 'inf' if value > 0 else '-inf'
    if value == 0.0 and math.copysign(1.0, value) < 0:
        return '-0'
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def to_string(value: Any) -> str:
    """Convert a glox value to the text `print` writes."""
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        return number_to_string(value)
    if isinstance(value, str):
        return value
    return str(value)
