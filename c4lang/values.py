"""Runtime values.

Every value the interpreter handles is a :class:`Value`: a :class:`Kind` tag
plus a Python payload.

====== ========================= =====================================
Kind   Payload                   Notes
====== ========================= =====================================
INT    ``int``                   wrapped to signed 32 bits
CHAR   ``int``                   code point, 0..255
BOOL   ``bool``
STR    ``str``
ARRAY  ``list[Value]``           fixed length, mutated in place
POINTER ``int``                  ``slot * 1000``, 0 is null
VOID   ``None``
====== ========================= =====================================

Values are shared freely while an expression is evaluated. Binding a value
to a variable always stores a :meth:`Value.copy`, so no two slots ever share
an array.


File: values.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from c4lang.ctype import CType, POINTER_SIZE, PRIMITIVE_SIZES


class Kind(str, Enum):
    """
    Runtime value variants.
    """
    INT = "int"
    CHAR = "char"
    BOOL = "bool"
    STR = "str"
    ARRAY = "array"
    POINTER = "pointer"
    VOID = "void"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.value


NUMERIC_KINDS = frozenset({Kind.INT, Kind.CHAR, Kind.BOOL, Kind.POINTER})


@dataclass(frozen=True)
class Value:
    kind: Kind
    data: Any = None

    def copy(self) -> Value:
        """
        Return a copy that shares no mutable state with this value.
        """
        if self.kind is Kind.ARRAY:
            return Value(Kind.ARRAY, [item.copy() for item in self.data])
        return self

    @property
    def is_numeric(self) -> bool:
        return self.kind in NUMERIC_KINDS

    def as_int(self) -> int:
        """
        Return the numeric payload of an Int, Char, Bool or Pointer.
        """
        return int(self.data)

    def __str__(self) -> str:
        return format_value(self)


VOID = Value(Kind.VOID)


def wrap32(n: int) -> int:
    """
    Wrap an integer to the signed 32-bit range.
    """
    n &= 0xFFFFFFFF
    return n - 0x100000000 if n & 0x80000000 else n


def int_value(n: int) -> Value:
    return Value(Kind.INT, wrap32(n))


def char_value(code: int) -> Value:
    return Value(Kind.CHAR, code & 0xFF)


def bool_value(flag: bool) -> Value:
    return Value(Kind.BOOL, bool(flag))


def str_value(text: str) -> Value:
    return Value(Kind.STR, text)


def array_value(items: list[Value]) -> Value:
    return Value(Kind.ARRAY, items)


def pointer_value(address: int) -> Value:
    return Value(Kind.POINTER, address)


def default_for(ctype: CType | None) -> Value:
    """
    Return the value an uninitialized declaration of ``ctype`` holds.
    """
    if ctype is None:
        return int_value(0)
    if ctype.is_array:
        length = ctype.dims[0] or 0
        return array_value([default_for(ctype.element()) for _ in range(length)])
    if ctype.pointer:
        return pointer_value(0)
    match ctype.base:
        case "char":
            return char_value(0)
        case "bool":
            return bool_value(False)
        case "str":
            return str_value("")
        case "void":
            return VOID
    return int_value(0)


def size_of(value: Value) -> int:
    """
    Return the ``sizeof`` a runtime value.
    """
    match value.kind:
        case Kind.ARRAY:
            return sum(size_of(item) for item in value.data)
        case Kind.POINTER | Kind.STR:
            return POINTER_SIZE
        case _:
            return PRIMITIVE_SIZES[value.kind.value]


def format_value(value: Value, nested: bool = False) -> str:
    """
    Format a value the way ``print`` writes it.

    Strings nested inside arrays are quoted; top-level strings are written
    as-is.
    """
    match value.kind:
        case Kind.INT | Kind.POINTER:
            return str(value.data)
        case Kind.CHAR:
            text = chr(value.data)
            return repr(text) if nested else text
        case Kind.BOOL:
            return "true" if value.data else "false"
        case Kind.STR:
            return f'"{value.data}"' if nested else value.data
        case Kind.ARRAY:
            return "[" + ", ".join(format_value(item, True) for item in value.data) + "]"
    return "void"
