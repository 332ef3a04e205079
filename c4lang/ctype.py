"""Static types named in C4 source.

Types appear in typed declarations, casts, ``sizeof`` and function
signatures. A :class:`CType` is a primitive base plus a pointer depth plus
zero or more array dimensions, e.g. ``int *`` or ``char[4][2]``.


File: ctype.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from __future__ import annotations

from dataclasses import dataclass


PRIMITIVE_SIZES = {
    "int": 4,
    "char": 1,
    "bool": 1,
    "str": 8,
    "void": 0,
}

POINTER_SIZE = 8


@dataclass(frozen=True)
class CType:
    base: str
    pointer: int = 0
    dims: tuple[int | None, ...] = ()

    @property
    def is_array(self) -> bool:
        return bool(self.dims)

    def element(self) -> CType:
        """
        Return the type of one element of an array type.
        """
        return CType(self.base, self.pointer, self.dims[1:])

    def size(self) -> int:
        """
        Return the size in bytes, as reported by ``sizeof``.
        """
        if self.dims:
            length = self.dims[0]
            if length is None:
                return POINTER_SIZE
            return self.element().size() * length
        if self.pointer:
            return POINTER_SIZE
        return PRIMITIVE_SIZES[self.base]

    def __str__(self) -> str:
        text = self.base + "*" * self.pointer
        for dim in self.dims:
            text += f"[{'' if dim is None else dim}]"
        return text


INT = CType("int")
