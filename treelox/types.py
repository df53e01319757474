"""Runtime value domain for treelox.

Values are plain Python objects rather than wrapper classes:

* ``str`` is a Lox string,
* ``float`` is a Lox number, always rounded to the nearest 32-bit float,
* ``bool`` is a Lox boolean,
* the ``NIL`` singleton is Lox ``nil``.

This module holds the helpers that give those objects Lox semantics:
equality with a small absolute tolerance for numbers, display formatting,
type names for diagnostics, and the checked coercions operators use.
"""

from __future__ import annotations

import math
import struct
from decimal import Decimal
from typing import Any, Optional

from .errors import LoxTypeError

# Absolute tolerance used when comparing two numbers for equality.
EPSILON = 1e-4


class NilVal:
    """Marker object for the Lox `nil` value."""
    def __repr__(self) -> str:
        return 'nil'

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NilVal)

    def __hash__(self) -> int:
        return hash(NilVal)


NIL = NilVal()


def to_f32(x: float) -> float:
    """Round a Python float to the nearest IEEE-754 single precision value."""
    try:
        return struct.unpack('<f', struct.pack('<f', x))[0]
    except OverflowError:
        return math.copysign(math.inf, x)


def is_number(value: Any) -> bool:
    # bool is an int subclass, never a float, but be explicit about it
    return isinstance(value, float) and not isinstance(value, bool)


def values_equal(a: Any, b: Any) -> bool:
    """Lox equality: exact for strings, booleans and nil, tolerant for numbers.

    Values of different types are never equal, and comparing them is never
    an error.
    """
    if isinstance(a, NilVal) or isinstance(b, NilVal):
        return isinstance(a, NilVal) and isinstance(b, NilVal)
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if is_number(a) and is_number(b):
        return a == b or abs(a - b) <= EPSILON
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    return False


def format_number(n: float) -> str:
    """Shortest positional decimal text that reads back as the same 32-bit float."""
    if math.isnan(n):
        return 'NaN'
    if math.isinf(n):
        return 'inf' if n > 0 else '-inf'
    text = repr(n)
    for digits in range(1, 10):
        candidate = f"{n:.{digits}g}"
        if to_f32(float(candidate)) == n:
            text = candidate
            break
    out = format(Decimal(text), 'f')
    if '.' in out:
        out = out.rstrip('0').rstrip('.')
    return out


def to_string(value: Any) -> str:
    """Display form of a value, as written by `print`."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if is_number(value):
        return format_number(value)
    if isinstance(value, str):
        return value
    if isinstance(value, NilVal):
        return 'nil'
    return str(value)


def type_name(value: Any) -> str:
    """Return the Lox type name of a runtime value."""
    if isinstance(value, bool):
        return 'boolean'
    if is_number(value):
        return 'number'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, NilVal):
        return 'nil'
    return type(value).__name__


def as_number(value: Any, line: Optional[int] = None) -> float:
    if is_number(value):
        return value
    raise LoxTypeError('number', type_name(value), line)


def as_string(value: Any, line: Optional[int] = None) -> str:
    if isinstance(value, str):
        return value
    raise LoxTypeError('string', type_name(value), line)


def as_bool(value: Any, line: Optional[int] = None) -> bool:
    """Only booleans and nil can be used where a boolean is required."""
    if isinstance(value, bool):
        return value
    if isinstance(value, NilVal):
        return False
    raise LoxTypeError('boolean', type_name(value), line)
