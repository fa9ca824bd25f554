"""Runtime values for Lox.

A Lox value is one of nil, a boolean, a number or a string. Booleans,
numbers and strings map onto Python's `bool`, `float` and `str`; nil is the
`NIL` singleton. Every number is a float, including integral ones.

Python treats `bool` as a subclass of `int` and compares `True == 1.0`, so
the helpers here always check the exact type before comparing values.
"""

from __future__ import annotations

import math
from typing import Any, Union


class NilVal:
    """Marker type for the Lox `nil` value."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'nil'

    def __bool__(self) -> bool:
        return False


NIL = NilVal()

Value = Union[NilVal, bool, float, str]


def is_number(value: Any) -> bool:
    return type(value) is float


def is_string(value: Any) -> bool:
    return type(value) is str


def is_truthy(value: Any) -> bool:
    """Only nil and false are falsey; 0 and the empty string are truthy."""
    if value is NIL:
        return False
    if type(value) is bool:
        return value
    return True


def is_equal(a: Any, b: Any) -> bool:
    if a is NIL and b is NIL:
        return True
    if a is NIL or b is NIL:
        return False
    # no coercion across types: "1" != 1 and 0 != false
    if type(a) is not type(b):
        return False
    if type(a) is float:
        return _same_number(a, b)
    return a == b


def _same_number(a: float, b: float) -> bool:
    # value identity rather than IEEE comparison: nan equals nan, -0 differs from 0
    if math.isnan(a) or math.isnan(b):
        return math.isnan(a) and math.isnan(b)
    return a == b and math.copysign(1.0, a) == math.copysign(1.0, b)


def stringify(value: Any) -> str:
    """Convert a Lox value to the text `print` shows for it."""
    if value is NIL:
        return 'nil'
    if type(value) is bool:
        return 'true' if value else 'false'
    if type(value) is float:
        text = repr(value)
        if text.endswith('.0'):
            text = text[:-2]
        return text
    return str(value)


def type_name(value: Any) -> str:
    if value is NIL:
        return 'nil'
    if type(value) is bool:
        return 'boolean'
    if type(value) is float:
        return 'number'
    if type(value) is str:
        return 'string'
    return type(value).__name__
