"""Runtime values for Lox.

Lox values map onto Python objects: `nil` is the `NIL` marker, booleans
are `bool`, numbers are `float` and strings are `str`. Callables are
`BuiltinFunction` and `FunctionValue` instances, which compare by
identity only. The helpers below implement truthiness, equality and the
two textual renderings (display for `print`, debug for the REPL).
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any

from .builtin_function import BuiltinFunction
from .function_value import FunctionValue


class NilVal:
    """Marker object for the Lox `nil` value."""
    def __repr__(self) -> str:
        return 'nil'

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, NilVal)

    def __hash__(self) -> int:
        return hash(NilVal)


NIL = NilVal()


def is_callable(value: Any) -> bool:
    return isinstance(value, (BuiltinFunction, FunctionValue))


def type_name(value: Any) -> str:
    if isinstance(value, NilVal):
        return 'nil'
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, float):
        return 'number'
    if isinstance(value, str):
        return 'string'
    if is_callable(value):
        return 'function'
    return type(value).__name__


def is_truthy(value: Any) -> bool:
    # Only false and nil are falsy; 0 and "" are truthy.
    if isinstance(value, NilVal):
        return False
    if isinstance(value, bool):
        return value
    return True


def values_equal(a: Any, b: Any) -> bool:
    """Equality without coercion. Functions compare by identity."""
    if isinstance(a, NilVal) or isinstance(b, NilVal):
        return isinstance(a, NilVal) and isinstance(b, NilVal)
    # bool is a subclass of int in Python, so check it before numbers
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, float) and isinstance(b, float):
        return a == b
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    return a is b


def format_number(value: float) -> str:
    """Render a number the way `print` shows it.

    Integral values drop the fractional part and no value is ever shown
    in exponent notation: 3.0 -> '3', 1e-07 -> '0.0000001'.
    """
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'inf' if value > 0 else '-inf'
    if value == 0:
        return '-0' if math.copysign(1.0, value) < 0 else '0'
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), 'f')


def to_string(value: Any) -> str:
    """Display rendering used by `print`."""
    if isinstance(value, NilVal):
        return 'nil'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, str):
        return value
    if isinstance(value, BuiltinFunction):
        return '<native fn>'
    if isinstance(value, FunctionValue):
        return '<fn>'
    return str(value)


def to_repr(value: Any) -> str:
    """Debug rendering used when the REPL echoes a value."""
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, FunctionValue):
        return '<function>'
    return to_string(value)
