"""
Tests for arithmetic, bitwise, comparison and logical operators.
"""
import pytest

from c4lang.exceptions import (
    DivisionByZeroException,
    TypeMismatchException,
    UndefinedVariableException,
)
from c4lang.tests.utils import run, run_source


def test_precedence():
    assert run("return 2 + 3 * 4;") == 14
    assert run("return (2 + 3) * 4;") == 20
    assert run("return (2 + 3) * 4 == 20;") == 1
    assert run("return 10 - 2 - 3;") == 5
    assert run("return 100 / 10 / 5;") == 2


def test_division_truncates_toward_zero():
    assert run("return 7 / 2;") == 3
    assert run("return -7 / 2;") == -3
    assert run("return -7 % 2;") == -1
    assert run("return 7 % -2;") == 1
    assert run("return 10 % 3;") == 1


def test_division_by_zero():
    with pytest.raises(DivisionByZeroException) as exc:
        run("let x = 0;\nreturn 5 / x;")
    assert exc.value.line == 2
    assert "'/'" in str(exc.value)
    with pytest.raises(DivisionByZeroException):
        run("return 5 % 0;")


def test_bitwise_operators():
    source = """
    let a = 12;
    let b = 10;
    let and = a & b;
    let or = a | b;
    let xor = a ^ b;
    let shl = 1 << 3;
    let shr = 16 >> 2;
    return and + or + xor + shl + shr - ~0 - 11;
    """
    # 8 + 14 + 6 + 8 + 4 + 1 - 11
    assert run(source) == 30


def test_integer_overflow_wraps():
    assert run("return 2147483647 + 1;") == -2147483648
    assert run("return -2147483647 - 2;") == 2147483647


def test_comparisons_yield_one_or_zero():
    assert run("return 3 < 4;") == 1
    assert run("return 3 >= 4;") == 0
    assert run("return 2 == 2;") == 1
    assert run("return 2 != 2;") == 0


def test_logical_operators_short_circuit():
    assert run("return 0 || 3;") == 1
    assert run("return 2 && 0;") == 0
    assert run("return 0 && 1 / 0;") == 0
    assert run("return 1 || 1 / 0;") == 1


def test_unary_operators():
    assert run("return -5 + +2;") == -3
    assert run("return ~1;") == -2
    assert run("return !0;") == 1
    assert run("return !7;") == 0


def test_increment_and_decrement():
    assert run("let x = 5; let y = x++; return x * 10 + y;") == 65
    assert run("let x = 5; let y = ++x; return x * 10 + y;") == 66
    assert run("let x = 5; let y = x--; let z = --x; return y * 100 + z * 10 + x;") == 533


def test_chars_and_bools_promote_to_int():
    assert run("return 'a' + 1;") == 98
    assert run("return true + true;") == 2


def test_string_concatenation_and_equality():
    _, result = run_source('let s = "Hello, " + "World!"; s;')
    assert result.data == "Hello, World!"
    assert run('return "a" == "a";') == 1
    assert run('return "a" != "b";') == 1


def test_mixed_string_arithmetic_is_rejected():
    with pytest.raises(TypeMismatchException):
        run('return "a" - 1;')
    with pytest.raises(TypeMismatchException):
        run('return "a" + 1;')


def test_increment_requires_bound_numeric_target():
    with pytest.raises(UndefinedVariableException):
        run("y++;")
    with pytest.raises(TypeMismatchException):
        run('let s = "a"; s++;')
    with pytest.raises(TypeMismatchException):
        run("5++;")
