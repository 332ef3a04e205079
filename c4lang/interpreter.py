"""Interpreter.

This is a tree-walk interpreter for the AST produced by the parser. It supports
integer, character, boolean and string values, fixed-length arrays, simulated
pointers, enums, function definitions and calls (including recursion and
redefinition), conditionals, loops and the ``print`` built-in.

1. Execution Model
The interpreter evaluates the AST in a top-down, recursive manner. Statements
are executed via `execute()`, which returns a `ControlSignal` telling the
caller whether a ``return`` is in flight. Expressions are evaluated with
`evaluate()`. Both operate over tuples whose first element names the node and
whose last element is the source line.

2. Environment and Memory
Variables live in slots. `memory` maps a slot index to the `Value` stored
there, and each scope on the `scopes` stack maps a name to its slot. Slot
indices are handed out in increasing order starting at 1 and are never
reused, so the simulated address ``slot * 1000`` of a variable is stable for
its whole lifetime and address 0 is the null pointer. Leaving a block or
function frees the slots of the scope it created, after which pointers to
them are invalid. Each slot also records the type it was declared with, and
every later write to the slot, to one of its elements or through a pointer to
it converts to that type. Untyped bindings accept any value.

Function calls temporarily replace the scope stack with the global scope plus
a fresh scope for the parameters, and restore it after the call completes.

3. Expression Evaluation
Int, Char and Bool operands promote to Int and arithmetic wraps to 32 bits.
Division truncates toward zero. Only identifiers, dereferences and indexes
into those can be assigned, and function results are copies, so a write always
lands in the storage the target names. The operand of ``sizeof`` is evaluated
against a throwaway copy of the interpreter state, so its side effects do not
persist. Typed errors from `c4lang.exceptions` are raised with the line of the
failing node.

4. Control Flow
- `if`/`else`: executes a branch based on the truthiness of the condition.
- `while`: re-checks its condition before every iteration.
- `block`: executes a nested sequence of statements in its own scope.
- `return`: unwinds through blocks and loops to the enclosing call, or ends
  the program when used at the top level.


File: interpreter.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import contextlib
import io

from c4lang.ctype import CType
from c4lang.exceptions import (
    ArityMismatchException,
    DivisionByZeroException,
    IndexOutOfBoundsException,
    InvalidPointerException,
    RecursionDepthException,
    TypeMismatchException,
    UndefinedFunctionException,
    UndefinedVariableException,
    UnknownOpException,
)
from c4lang.operations import BINARY_OPS, SYMBOLS, Op
from c4lang.values import (
    VOID,
    Kind,
    Value,
    array_value,
    bool_value,
    char_value,
    default_for,
    format_value,
    int_value,
    pointer_value,
    size_of,
    str_value,
)

# Distance between the simulated addresses of consecutive slots.
ADDRESS_SCALE = 1000

BUILTINS = frozenset({"print"})


class ControlSignal:
    """Outcome of executing one statement."""

    __slots__ = ("returning", "value")

    def __init__(self, returning: bool = False, value: Value = VOID):
        self.returning = returning
        self.value = value

    def __repr__(self) -> str:
        if self.returning:
            return f"ControlSignal(return {self.value!r})"
        return "ControlSignal(continue)"


CONTINUE = ControlSignal()


class Function:
    """Runtime representation of a declared function."""

    def __init__(self, name, params, body, return_type):
        self.name = name
        # List of (name, CType or None).
        self.params = params
        self.body = body
        self.return_type = return_type


class Interpreter:
    """Tree-walk interpreter for C4."""

    def __init__(self, file: str = "<input>"):
        """Initialize the interpreter."""
        self.file = file
        self.scopes: list[dict[str, int]] = [{}]
        self.memory: dict[int, Value] = {}
        # Declared type of each live slot, None for untyped bindings.
        self.slot_types: dict[int, CType | None] = {}
        self.next_slot = 1
        self.functions: dict[str, Function] = {}
        self.enums: dict[str, int] = {}
        self.last_value = VOID

    # ------------------------------------------------------------------
    # Scopes and slots
    # ------------------------------------------------------------------

    def push_scope(self) -> None:
        self.scopes.append({})

    def pop_scope(self) -> None:
        """
        Drop the innermost scope and free every slot it owns.
        """
        scope = self.scopes.pop()
        for slot in scope.values():
            del self.memory[slot]
            del self.slot_types[slot]

    def lookup_slot(self, name: str) -> int | None:
        """
        Return the slot of the nearest visible binding of ``name``.
        """
        for scope in reversed(self.scopes):
            if name in scope:
                return scope[name]
        return None

    def declare(self, name: str, value: Value, ctype: CType | None = None) -> int:
        """
        Bind ``name`` in the innermost scope, reusing its slot if already bound there.

        ``ctype`` is the declared type later assignments to the slot convert to.
        """
        scope = self.scopes[-1]
        if name in scope:
            slot = scope[name]
        else:
            slot = self.next_slot
            self.next_slot += 1
            scope[name] = slot
        self.memory[slot] = value
        self.slot_types[slot] = ctype
        return slot

    def read_variable(self, name: str, line=None) -> Value:
        slot = self.lookup_slot(name)
        if slot is not None:
            return self.memory[slot]
        if name in self.enums:
            return int_value(self.enums[name])
        raise UndefinedVariableException(name, line, self.file)

    def address_of_slot(self, slot: int) -> int:
        return slot * ADDRESS_SCALE

    def slot_at(self, value: Value, line=None) -> int:
        """
        Resolve a pointer value to the live slot it addresses.

        Raises:
            InvalidPointerException: If the value is not the address of a live slot.
        """
        if not value.is_numeric:
            raise InvalidPointerException(format_value(value), line, self.file)
        address = value.as_int()
        slot, rem = divmod(address, ADDRESS_SCALE)
        if rem or slot not in self.memory:
            raise InvalidPointerException(address, line, self.file)
        return slot

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _format_expr(self, node) -> str:
        """
        Convert AST back to a readable string for error messages.

        Args:
            node (tuple): An expression node, structured as a tuple.

        Returns:
            str: A C-like rendering of the expression.
        """
        op = node[0]
        match op:
            case 'ident':
                return node[1]
            case 'number':
                return str(node[1])
            case 'bool':
                return 'true' if node[1] else 'false'
            case 'char':
                return repr(chr(node[1]))
            case 'string':
                return f'"{node[1]}"'
            case 'array':
                return '[' + ', '.join(self._format_expr(e) for e in node[1]) + ']'
            case 'index':
                return f"{self._format_expr(node[1])}[{self._format_expr(node[2])}]"
            case 'func_call':
                return f"{node[1]}({', '.join(self._format_expr(a) for a in node[2])})"
            case 'addr':
                return f"&{self._format_expr(node[1])}"
            case 'deref':
                return f"*{self._format_expr(node[1])}"
            case 'cast':
                return f"({node[1]}){self._format_expr(node[2])}"
            case 'unary':
                return f"{SYMBOLS[node[1]]}{self._format_expr(node[2])}"
            case 'assign':
                return f"{self._format_expr(node[1])} = {self._format_expr(node[2])}"
            case _ if op in BINARY_OPS:
                return (
                    f"({self._format_expr(node[1])} {SYMBOLS[op]} "
                    f"{self._format_expr(node[2])})"
                )
            case _:
                return f"<expr {op}>"

    def truthy(self, value: Value, line=None) -> bool:
        """
        Interpret a value as a condition; zero and false are falsy.

        Raises:
            TypeMismatchException: For strings, arrays and void.
        """
        if not value.is_numeric:
            raise TypeMismatchException(
                f"Condition must be an int, char, bool or pointer, got {value.kind}",
                line, self.file,
            )
        return value.as_int() != 0

    def cast(self, value: Value, ctype: CType, line=None) -> Value:
        """
        Convert a value to ``ctype`` the way an explicit C cast does.

        Raises:
            TypeMismatchException: If the value cannot be converted.
        """
        if ctype.is_array:
            raise TypeMismatchException(f"Cannot cast to array type {ctype}", line, self.file)
        if ctype.base == "void" and not ctype.pointer:
            return VOID
        if value.is_numeric:
            if ctype.pointer:
                return pointer_value(value.as_int())
            match ctype.base:
                case "int":
                    return int_value(value.as_int())
                case "char":
                    return char_value(value.as_int())
                case "bool":
                    return bool_value(value.as_int() != 0)
        elif value.kind is Kind.STR:
            if ctype.base == "str" and not ctype.pointer:
                return value
            if ctype.base in ("int", "char") and not ctype.pointer:
                return int_value(0) if ctype.base == "int" else char_value(0)
        raise TypeMismatchException(
            f"Cannot cast {value.kind} to {ctype}", line, self.file
        )

    def coerce(self, value: Value, ctype: CType | None, line=None) -> Value:
        """
        Convert a value to a declared type.

        Numeric values convert to a scalar type the way a cast does. An array
        type checks the value is an array no longer than the declared length,
        pads it with default elements up to that length and converts each
        element. Anything else is left as-is.

        Raises:
            TypeMismatchException: If an array type receives a non-array or
                too many elements.
        """
        if ctype is None:
            return value
        if ctype.is_array:
            if value.kind is Kind.STR and ctype.base == "char" and not ctype.pointer:
                # A string fills a char array, followed by a terminating '\0'
                items = [char_value(ord(ch)) for ch in value.data] + [char_value(0)]
            elif value.kind is Kind.ARRAY:
                items = list(value.data)
            else:
                raise TypeMismatchException(
                    f"Cannot initialize {ctype} from {value.kind}", line, self.file
                )
            length = ctype.dims[0]
            if length is not None:
                if len(items) > length:
                    raise TypeMismatchException(
                        f"Too many elements for {ctype}: got {len(items)}", line, self.file
                    )
                items += [default_for(ctype.element()) for _ in range(length - len(items))]
            element = ctype.element()
            return array_value([self.coerce(item, element, line) for item in items])
        if not value.is_numeric:
            return value
        if ctype.base in ("str", "void") and not ctype.pointer:
            return value
        return self.cast(value, ctype, line)

    # ------------------------------------------------------------------
    # Lvalues
    # ------------------------------------------------------------------

    def _element_ref(self, node, line) -> tuple:
        """
        Resolve an index expression to the array payload and position it names,
        plus the declared element type (None when the array is untyped).
        """
        _, array_node, index_node, _ = node
        container, key, ctype = self._locate(array_node, line)
        target = container[key]
        index = self.evaluate(index_node)
        if target.kind is not Kind.ARRAY:
            raise TypeMismatchException(
                f"{self._format_expr(array_node)} is not an assignable array",
                line, self.file,
            )
        position = self._index_of(index, line)
        if not 0 <= position < len(target.data):
            raise IndexOutOfBoundsException(position, len(target.data), line, self.file)
        element = ctype.element() if ctype is not None and ctype.is_array else None
        return target.data, position, element

    def _locate(self, target, line) -> tuple:
        """
        Resolve an lvalue once to ``(container, key, ctype)``.

        ``container[key]`` is the stored value itself, so writes land in the
        variable or element the expression names. ``ctype`` is its declared
        type, or None. Only identifiers, dereferences and index expressions
        rooted in one of those name storage; anything else is rejected.
        Identifiers resolve to a memory slot, so an unbound name is an error
        here rather than an implicit declaration.
        """
        kind = target[0]
        if kind == 'ident':
            slot = self.lookup_slot(target[1])
            if slot is None:
                if target[1] in self.enums:
                    raise TypeMismatchException(
                        f"Cannot modify enum constant '{target[1]}'", line, self.file
                    )
                raise UndefinedVariableException(target[1], line, self.file)
            return self.memory, slot, self.slot_types[slot]
        if kind == 'deref':
            slot = self.slot_at(self.evaluate(target[1]), line)
            return self.memory, slot, self.slot_types[slot]
        if kind == 'index':
            return self._element_ref(target, line)
        raise TypeMismatchException(
            f"Cannot assign to {self._format_expr(target)}", line, self.file
        )

    def store(self, target, value: Value, line=None) -> Value:
        """
        Write a copy of ``value`` to an identifier, array element or dereferenced pointer.

        Assigning to an unbound identifier declares it in the current scope.
        Otherwise the value converts to the target's declared type.
        """
        value = value.copy()
        if target[0] == 'ident' and self.lookup_slot(target[1]) is None:
            self.declare(target[1], value)
            return value
        container, key, ctype = self._locate(target, line)
        value = self.coerce(value, ctype, line)
        container[key] = value
        return value

    def _index_of(self, index: Value, line) -> int:
        if index.kind not in (Kind.INT, Kind.CHAR, Kind.BOOL):
            raise TypeMismatchException(
                f"Index must be an integer, got {index.kind}", line, self.file
            )
        return index.as_int()

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def evaluate(self, node) -> Value:
        """
        Recursively evaluate an expression node and return its computed value.

        Parameters:
            node (tuple): An expression node, structured as a tuple.
                        The first element is the node kind (e.g. 'ident', Op.ADD),
                        followed by operands and the line number for error reporting.

        Returns:
            Value: The evaluated result of the expression.

        Raises:
            C4RuntimeError: A subclass describing the failed operation.
        """
        op = node[0]
        line = node[-1]

        # Literals
        if op == 'number':
            return int_value(node[1])
        elif op == 'char':
            return char_value(node[1])
        elif op == 'string':
            return str_value(node[1])
        elif op == 'bool':
            return bool_value(node[1])
        elif op == 'array':
            return array_value([self.evaluate(elem).copy() for elem in node[1]])

        # Variables
        elif op == 'ident':
            return self.read_variable(node[1], line)

        elif op == 'assign':
            _, target, value_node, _ = node
            return self.store(target, self.evaluate(value_node), line)

        # Binary operations
        elif op in BINARY_OPS:
            lhs = self.evaluate(node[1])
            if op == Op.AND:
                if not self.truthy(lhs, line):
                    return int_value(0)
                return int_value(self.truthy(self.evaluate(node[2]), line))
            if op == Op.OR:
                if self.truthy(lhs, line):
                    return int_value(1)
                return int_value(self.truthy(self.evaluate(node[2]), line))
            rhs = self.evaluate(node[2])
            return self._binary(op, lhs, rhs, line)

        elif op == 'unary':
            return self._unary(node[1], self.evaluate(node[2]), line)

        elif op == 'incdec':
            _, operator, prefix, target, _ = node
            container, key, ctype = self._locate(target, line)
            old = container[key]
            if not old.is_numeric:
                raise TypeMismatchException(
                    f"'{SYMBOLS[operator]}' requires a numeric operand, got {old.kind}",
                    line, self.file,
                )
            step = 1 if operator == Op.INC else -1
            if old.kind is Kind.POINTER:
                new = pointer_value(old.as_int() + step)
            elif old.kind is Kind.CHAR:
                new = char_value(old.as_int() + step)
            else:
                new = int_value(old.as_int() + step)
            new = self.coerce(new, ctype, line)
            container[key] = new
            return new if prefix else old

        elif op == 'ternary':
            _, cond, then_node, else_node, _ = node
            if self.truthy(self.evaluate(cond), line):
                return self.evaluate(then_node)
            return self.evaluate(else_node)

        # Indexes
        elif op == 'index':
            _, target_node, index_node, _ = node
            target = self.evaluate(target_node)
            index = self._index_of(self.evaluate(index_node), line)
            if target.kind is Kind.ARRAY:
                if not 0 <= index < len(target.data):
                    raise IndexOutOfBoundsException(index, len(target.data), line, self.file)
                return target.data[index]
            if target.kind is Kind.STR:
                if not 0 <= index < len(target.data):
                    raise IndexOutOfBoundsException(index, len(target.data), line, self.file)
                return char_value(ord(target.data[index]))
            raise TypeMismatchException(
                f"{self._format_expr(target_node)} is not indexable", line, self.file
            )

        # Pointers
        elif op == 'addr':
            operand = node[1]
            if operand[0] == 'ident':
                slot = self.lookup_slot(operand[1])
                if slot is None:
                    if operand[1] in self.enums:
                        raise TypeMismatchException(
                            f"Cannot take the address of enum constant '{operand[1]}'",
                            line, self.file,
                        )
                    raise UndefinedVariableException(operand[1], line, self.file)
                return pointer_value(self.address_of_slot(slot))
            if operand[0] == 'deref':
                pointer = self.evaluate(operand[1])
                return pointer_value(self.address_of_slot(self.slot_at(pointer, line)))
            raise TypeMismatchException(
                f"Cannot take the address of {self._format_expr(operand)}", line, self.file
            )

        elif op == 'deref':
            return self.memory[self.slot_at(self.evaluate(node[1]), line)]

        elif op == 'cast':
            _, ctype, operand, _ = node
            return self.cast(self.evaluate(operand), ctype, line)

        elif op == 'sizeof':
            _, ctype, operand, _ = node
            if ctype is not None:
                return int_value(ctype.size())
            return int_value(size_of(self._evaluate_detached(operand)))

        # Function calls
        elif op == 'func_call':
            _, name, args_nodes, _ = node
            if name in BUILTINS:
                return self._call_builtin(name, [self.evaluate(arg) for arg in args_nodes])
            if name not in self.functions:
                raise UndefinedFunctionException(name, line, self.file)
            function = self.functions[name]
            args = [self.evaluate(arg) for arg in args_nodes]
            return self.call(function, args, line)

        raise UnknownOpException(op, line, self.file)

    def _evaluate_detached(self, node) -> Value:
        """
        Evaluate ``node`` for its value alone, as the operand of ``sizeof``.

        The expression runs against copies of the scopes, memory, slot types,
        function and enum tables, with ``print`` output discarded. The
        originals are put back afterwards, so assignments, increments and
        calls inside the operand leave no trace.
        """
        saved = (
            self.scopes, self.memory, self.slot_types,
            self.functions, self.enums, self.last_value,
        )
        self.scopes = [dict(scope) for scope in self.scopes]
        self.memory = {slot: value.copy() for slot, value in self.memory.items()}
        self.slot_types = dict(self.slot_types)
        self.functions = dict(self.functions)
        self.enums = dict(self.enums)
        try:
            with contextlib.redirect_stdout(io.StringIO()):
                return self.evaluate(node)
        finally:
            (
                self.scopes, self.memory, self.slot_types,
                self.functions, self.enums, self.last_value,
            ) = saved

    def _unary(self, operator, operand: Value, line) -> Value:
        if operator == Op.NOT:
            return int_value(not self.truthy(operand, line))
        if not operand.is_numeric:
            raise TypeMismatchException(
                f"Unary '{SYMBOLS[operator]}' requires a numeric operand, got {operand.kind}",
                line, self.file,
            )
        n = operand.as_int()
        match operator:
            case Op.SUB:
                return int_value(-n)
            case Op.ADD:
                return int_value(n)
            case Op.NOT_BITS:
                return int_value(~n)
        raise UnknownOpException(operator, line, self.file)

    def _binary(self, op, lhs: Value, rhs: Value, line) -> Value:
        symbol = SYMBOLS[op]

        if lhs.kind is Kind.STR and rhs.kind is Kind.STR:
            match op:
                case Op.ADD:
                    return str_value(lhs.data + rhs.data)
                case Op.EQ:
                    return int_value(lhs.data == rhs.data)
                case Op.NE:
                    return int_value(lhs.data != rhs.data)

        if not (lhs.is_numeric and rhs.is_numeric):
            raise TypeMismatchException(
                f"Unsupported operand kinds for '{symbol}': {lhs.kind} and {rhs.kind}",
                line, self.file,
            )

        a = lhs.as_int()
        b = rhs.as_int()
        lhs_ptr = lhs.kind is Kind.POINTER
        rhs_ptr = rhs.kind is Kind.POINTER

        match op:
            # Arithmetic
            case Op.ADD:
                if lhs_ptr or rhs_ptr:
                    return pointer_value(a + b)
                return int_value(a + b)
            case Op.SUB:
                if lhs_ptr and rhs_ptr:
                    return int_value(a - b)
                if lhs_ptr:
                    return pointer_value(a - b)
                return int_value(a - b)
            case Op.MUL:
                return int_value(a * b)
            case Op.DIV | Op.MOD:
                if b == 0:
                    raise DivisionByZeroException(symbol, line, self.file)
                quotient = abs(a) // abs(b)
                if (a < 0) != (b < 0):
                    quotient = -quotient
                if op == Op.DIV:
                    return int_value(quotient)
                return int_value(a - b * quotient)
            # Bitwise
            case Op.AND_BITS:
                return int_value(a & b)
            case Op.OR_BITS:
                return int_value(a | b)
            case Op.XOR_BITS:
                return int_value(a ^ b)
            case Op.SHL | Op.SHR:
                if b < 0:
                    raise TypeMismatchException(
                        f"Negative shift count {b} for '{symbol}'", line, self.file
                    )
                if op == Op.SHL:
                    return int_value(a << min(b, 64))
                return int_value(a >> b)
            # Comparison
            case Op.EQ:
                return int_value(a == b)
            case Op.NE:
                return int_value(a != b)
            case Op.GT:
                return int_value(a > b)
            case Op.LT:
                return int_value(a < b)
            case Op.GE:
                return int_value(a >= b)
            case Op.LE:
                return int_value(a <= b)
        raise UnknownOpException(op, line, self.file)

    def _call_builtin(self, name: str, args: list[Value]) -> Value:
        if name == "print":
            print(" ".join(format_value(arg) for arg in args))
        return VOID

    def call(self, function: Function, args: list[Value], line=None) -> Value:
        """
        Invoke a user-defined function with already-evaluated arguments.

        The callee sees the global scope plus a fresh scope holding its
        parameters. The caller's scope stack is restored afterwards, even when
        the body raises.

        Raises:
            ArityMismatchException: If the argument count differs from the parameter count.
            RecursionDepthException: If the host interpreter runs out of stack.
        """
        if len(args) != len(function.params):
            raise ArityMismatchException(
                function.name, len(function.params), len(args), line, self.file
            )

        saved_scopes = self.scopes
        self.scopes = [saved_scopes[0]]
        self.push_scope()
        try:
            for (param, ctype), arg in zip(function.params, args):
                self.declare(param, self.coerce(arg.copy(), ctype, line), ctype)
            signal = self.execute(function.body)
        except RecursionError:
            raise RecursionDepthException(function.name, line, self.file) from None
        finally:
            while len(self.scopes) > 1:
                self.pop_scope()
            self.scopes = saved_scopes

        return_type = function.return_type
        if return_type.base == "void" and not return_type.pointer:
            return VOID
        if not signal.returning:
            return VOID
        # The returned value may be the one stored in a live slot
        return self.coerce(signal.value.copy(), return_type, line)

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def execute(self, stmt) -> ControlSignal:
        """
        Execute one statement.

        Parameters:
            stmt (tuple):
                A ('let' | 'expr_stmt' | 'if' | 'while' | 'return' | 'block' |
                'func_def' | 'enum', ...) tuple.

        Returns:
            ControlSignal: `CONTINUE`, or a returning signal carrying the value.

        Raises:
            UnknownOpException: For unknown statement types.
        """
        kind = stmt[0]
        line = stmt[-1]

        if kind == 'let':
            for name, ctype, init in stmt[1]:
                if init is None:
                    value = default_for(ctype)
                else:
                    value = self.coerce(self.evaluate(init).copy(), ctype, line)
                self.declare(name, value, ctype)

        elif kind == 'expr_stmt':
            self.last_value = self.evaluate(stmt[1])

        elif kind == 'if':
            _, cond_node, then_branch, else_branch, _ = stmt
            if self.truthy(self.evaluate(cond_node), line):
                return self.execute(then_branch)
            if else_branch is not None:
                return self.execute(else_branch)

        elif kind == 'while':
            _, cond_node, body, _ = stmt
            while self.truthy(self.evaluate(cond_node), line):
                signal = self.execute(body)
                if signal.returning:
                    return signal

        elif kind == 'return':
            expr_node = stmt[1]
            value = VOID if expr_node is None else self.evaluate(expr_node)
            return ControlSignal(True, value)

        elif kind == 'block':
            self.push_scope()
            try:
                for child in stmt[1]:
                    signal = self.execute(child)
                    if signal.returning:
                        return signal
            finally:
                self.pop_scope()

        elif kind == 'func_def':
            _, name, params, body, return_type, _ = stmt
            self.functions[name] = Function(name, params, body, return_type)

        elif kind == 'enum':
            for name, value in stmt[1]:
                self.enums[name] = value

        else:
            raise UnknownOpException(kind, line, self.file)

        return CONTINUE

    def run(self, statements: list) -> Value:
        """
        Execute top-level statements in order and return the program result.

        A top-level ``return`` ends the program with its value. Otherwise the
        result is the value of the last top-level expression statement, or
        void when there is none.

        Raises:
            RecursionDepthException: If a statement nests deeper than the host
                interpreter can follow, outside any function call.
        """
        result = VOID
        for stmt in statements:
            signal = self.execute_checked(stmt)
            if signal.returning:
                return signal.value
            if stmt[0] == 'expr_stmt':
                result = self.last_value
        return result

    def execute_checked(self, stmt) -> ControlSignal:
        """
        Execute one top-level statement, reporting host stack exhaustion as a C4 error.
        """
        try:
            return self.execute(stmt)
        except RecursionError:
            while len(self.scopes) > 1:
                self.pop_scope()
            raise RecursionDepthException(None, stmt[-1], self.file) from None
