"""Errors.

Every failure the interpreter can report derives from :class:`C4Error`.
Lexing and parsing errors carry a line and column; runtime errors carry the
line of the AST node that failed. None of them can be caught from inside a
C4 program.


File: exceptions.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""


def _where(line=None, col=None, file=None) -> str:
    """
    Build the location suffix appended to error messages.
    """
    suffix = ""
    if line is not None:
        suffix += f" on line {line}"
        if col is not None:
            suffix += f", column {col}"
    if file is not None:
        suffix += f" in {file}"
    return suffix


class C4Error(Exception):
    """
    Base class for all C4 errors.
    """


class LexError(C4Error):
    """
    Error for source text that matches no token rule.
    """
    def __init__(self, message, line, col, char=None, file=None):
        self.line = line
        self.col = col
        self.char = char
        super().__init__(f"{message}{_where(line, col, file)}")


class ParseError(C4Error):
    """
    Error for token sequences that do not fit the grammar.
    """
    def __init__(self, expected, found, line, col, file=None):
        self.expected = expected
        self.found = found
        self.line = line
        self.col = col
        super().__init__(
            f"Expected {expected} but found {found}{_where(line, col, file)}"
        )


class C4RuntimeError(C4Error):
    """
    Base class for errors raised while evaluating a program.
    """
    def __init__(self, message, line=None, file=None):
        self.line = line
        super().__init__(f"{message}{_where(line, file=file)}")


class DivisionByZeroException(C4RuntimeError):
    """
    Error for '/' or '%' with a zero divisor.
    """
    def __init__(self, op, line=None, file=None):
        self.op = op
        super().__init__(f"Division by zero in '{op}'", line, file)


class UndefinedVariableException(C4RuntimeError):
    """
    Error for undefined variables.
    """
    def __init__(self, varname, line=None, file=None):
        self.varname = varname
        super().__init__(f"Undefined variable '{varname}'", line, file)


class UndefinedFunctionException(C4RuntimeError):
    """
    Error for calls to functions that were never declared.
    """
    def __init__(self, name, line=None, file=None):
        self.name = name
        super().__init__(f"Undefined function '{name}'", line, file)


class ArityMismatchException(C4RuntimeError):
    """
    Error for calls with the wrong number of arguments.
    """
    def __init__(self, name, expected, got, line=None, file=None):
        self.name = name
        self.expected = expected
        self.got = got
        super().__init__(
            f"Function '{name}' expects {expected} arguments, got {got}", line, file
        )


class IndexOutOfBoundsException(C4RuntimeError):
    """
    Error for array or string indexes outside ``0 <= i < length``.
    """
    def __init__(self, index, length, line=None, file=None):
        self.index = index
        self.length = length
        super().__init__(
            f"Index {index} out of bounds for length {length}", line, file
        )


class InvalidPointerException(C4RuntimeError):
    """
    Error for dereferencing an address that names no live slot.
    """
    def __init__(self, address, line=None, file=None):
        self.address = address
        super().__init__(f"Invalid pointer {address}", line, file)


class TypeMismatchException(C4RuntimeError):
    """
    Error for operands or casts of the wrong kind.
    """


class UnknownOpException(C4RuntimeError):
    """
    Error for unknown operations.
    """
    def __init__(self, op, line=None, file=None):
        self.op = op
        super().__init__(f"Unknown operation '{op}'", line, file)


class RecursionDepthException(C4RuntimeError):
    """
    Error for call chains or expressions nested deeper than the host
    interpreter can follow. ``name`` is the function being called, if any.
    """
    def __init__(self, name=None, line=None, file=None):
        self.name = name
        message = "Maximum recursion depth exceeded"
        if name is not None:
            message += f" calling '{name}'"
        super().__init__(message, line, file)
