"""Shared definitions for AST operation identifiers.

This module centralizes the string constants used by the parser and
interpreter to label operator nodes in the abstract syntax tree. Keeping them
in one place prevents the two components from drifting apart when new
operations are added or existing ones are renamed.


File: operations.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from enum import Enum


class Op(str, Enum):
    """
    Enumeration of supported AST operation names.
    """

    # Arithmetic
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    MOD = "mod"

    # Bitwise
    AND_BITS = "and_bits"
    OR_BITS = "or_bits"
    XOR_BITS = "xor_bits"
    SHL = "shl"
    SHR = "shr"

    # Comparison
    EQ = "eq"
    NE = "ne"
    GT = "gt"
    LT = "lt"
    GE = "ge"
    LE = "le"

    # Unary
    NOT_BITS = "not_bits"
    NOT = "not"
    INC = "inc"
    DEC = "dec"

    # Boolean
    AND = "and"
    OR = "or"

    def __str__(self) -> str:  # pragma: no cover - trivial
        """
        Return the underlying string value for nicer debug output.
        """
        return self.value


# Source spelling of each operator, used in error messages.
SYMBOLS = {
    Op.ADD: "+",
    Op.SUB: "-",
    Op.MUL: "*",
    Op.DIV: "/",
    Op.MOD: "%",
    Op.AND_BITS: "&",
    Op.OR_BITS: "|",
    Op.XOR_BITS: "^",
    Op.SHL: "<<",
    Op.SHR: ">>",
    Op.EQ: "==",
    Op.NE: "!=",
    Op.GT: ">",
    Op.LT: "<",
    Op.GE: ">=",
    Op.LE: "<=",
    Op.NOT_BITS: "~",
    Op.NOT: "!",
    Op.INC: "++",
    Op.DEC: "--",
    Op.AND: "&&",
    Op.OR: "||",
}

BINARY_OPS = frozenset({
    Op.ADD, Op.SUB, Op.MUL, Op.DIV, Op.MOD,
    Op.AND_BITS, Op.OR_BITS, Op.XOR_BITS, Op.SHL, Op.SHR,
    Op.EQ, Op.NE, Op.GT, Op.LT, Op.GE, Op.LE,
    Op.AND, Op.OR,
})


__all__ = ["Op", "SYMBOLS", "BINARY_OPS"]
