"""
Tests for enum declarations.
"""
import pytest

from c4lang.exceptions import TypeMismatchException
from c4lang.tests.utils import run, run_source


def test_implicit_values_continue_from_previous():
    interpreter, _ = run_source("enum { A = 1, B, C = 10, D };")
    assert interpreter.enums == {'A': 1, 'B': 2, 'C': 10, 'D': 11}


def test_values_start_at_zero():
    assert run("enum Color { RED, GREEN, BLUE }; return BLUE;") == 2


def test_enum_constants_in_expressions():
    source = """
    enum { SMALL = 2, LARGE = 30 };
    return SMALL + LARGE;
    """
    assert run(source) == 32


def test_enum_refers_to_earlier_member():
    assert run("enum { BASE = 'A', NEXT, SAME = BASE }; return NEXT + SAME;") == 131


def test_enum_visible_inside_functions():
    source = """
    enum { LOW = 1, HIGH = 3 };
    int top() { return HIGH; }
    return top();
    """
    assert run(source) == 3


def test_variables_shadow_enum_constants():
    assert run("enum { A = 1 }; let A = 5; return A;") == 5


def test_enum_constant_has_no_address():
    with pytest.raises(TypeMismatchException):
        run("enum { A = 1 }; return &A;")
