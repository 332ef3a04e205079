"""
Tests for function definitions, calls, recursion and redefinition.
"""
import sys

import pytest

from c4lang.exceptions import (
    ArityMismatchException,
    RecursionDepthException,
    UndefinedFunctionException,
)
from c4lang.values import Kind
from c4lang.tests.utils import run, run_source


def test_simple_call():
    assert run("int square(x) { return x * x; } return square(6);") == 36


def test_recursive_factorial():
    source = """
    int factorial(int n) {
        if (n <= 1) return 1;
        return n * factorial(n - 1);
    }
    return factorial(5);
    """
    assert run(source) == 120


def test_recursive_power():
    source = """
    int power(base, exp) {
        if (exp == 0) return 1;
        return base * power(base, exp - 1);
    }
    return power(2, 3);
    """
    assert run(source) == 8


def test_untyped_main():
    assert run("main() { return 7; } return main();") == 7


def test_redefinition_replaces_function():
    source = """
    int f() { return 1; }
    int f() { return 2; }
    return f();
    """
    assert run(source) == 2


def test_prototype_then_definition():
    source = """
    int twice(int n);
    int main() { return twice(21); }
    int twice(int n) { return n * 2; }
    return main();
    """
    assert run(source) == 42


def test_print_from_main(capsys):
    source = """
    int main() {
        print("inside");
        return 42;
    }
    return main();
    """
    assert run(source) == 42
    assert capsys.readouterr().out == "inside\n"


def test_void_function_returns_void():
    _, result = run_source("void f() { return; } return f();")
    assert result.kind is Kind.VOID


def test_falling_off_the_end_returns_void():
    _, result = run_source("int f() { let a = 1; } return f();")
    assert result.kind is Kind.VOID


def test_return_value_is_coerced_to_return_type():
    _, result = run_source("char f() { return 65; } return f();")
    assert result.kind is Kind.CHAR
    assert result.data == 65


def test_arguments_evaluated_left_to_right():
    source = """
    let log = 0;
    int mark(n) { log = log * 10 + n; return n; }
    int add(a, b) { return a + b; }
    add(mark(1), mark(2));
    return log;
    """
    assert run(source) == 12


def test_arguments_are_copied():
    source = """
    int clobber(arr) { arr[0] = 99; return arr[0]; }
    let a = [1, 2];
    let seen = clobber(a);
    return seen * 10 + a[0];
    """
    assert run(source) == 991


def test_undefined_function():
    with pytest.raises(UndefinedFunctionException) as exc:
        run("return nope(1);")
    assert exc.value.name == "nope"


def test_arity_mismatch():
    with pytest.raises(ArityMismatchException) as exc:
        run("int f(a) { return a; } return f(1, 2);")
    assert (exc.value.expected, exc.value.got) == (1, 2)


def test_runaway_recursion_is_reported():
    limit = sys.getrecursionlimit()
    sys.setrecursionlimit(1000)
    try:
        with pytest.raises(RecursionDepthException) as exc:
            run("int f(n) { return f(n + 1); } return f(0);")
    finally:
        sys.setrecursionlimit(limit)
    assert exc.value.name == "f"
