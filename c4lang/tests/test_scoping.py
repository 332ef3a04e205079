"""
Tests for lexical scoping, implicit declarations and slot lifetimes.
"""
import pytest

from c4lang.exceptions import UndefinedVariableException
from c4lang.tests.utils import parse_source, run, run_source


def test_inner_let_shadows_without_mutating_outer():
    source = """
    let x = 1;
    { let x = 2; }
    let a = x;
    { x = 3; }
    return a * 10 + x;
    """
    assert run(source) == 13


def test_shadowed_value_visible_inside_block():
    assert run("let x = 1; { let x = 10; return x; }") == 10


def test_global_shadowed_in_function(capsys):
    source = """
    let value = 42;
    int show() {
        let value = 7;
        return value;
    }
    let inner = show();
    print(value);
    return inner;
    """
    assert run(source) == 7
    assert capsys.readouterr().out == "42\n"


def test_implicit_declaration_by_assignment():
    assert run("x = 7; y = x + 3; return y;") == 10


def test_implicit_declaration_is_block_local():
    with pytest.raises(UndefinedVariableException) as exc:
        run("{ z = 5; } return z;")
    assert exc.value.varname == "z"


def test_redeclaration_reuses_slot():
    assert run("let x = 1; let p = &x; let x = 2; return *p;") == 2


def test_function_modifies_global():
    source = """
    let total = 10;
    void add(n) { total = total + n; }
    add(5);
    return total;
    """
    assert run(source) == 15


def test_function_locals_do_not_leak():
    with pytest.raises(UndefinedVariableException):
        run("int f() { let t = 1; return t; } f(); return t;")


def test_callee_cannot_see_caller_locals():
    source = """
    int g() { return local; }
    int h() { let local = 5; return g(); }
    return h();
    """
    with pytest.raises(UndefinedVariableException):
        run(source)


def test_comma_separated_let():
    assert run("let a = 1, b = 2; return a + b;") == 3


def test_untyped_let_defaults_to_zero():
    assert run("let x; return x;") == 0


def test_scopes_and_memory_are_released_after_calls():
    interpreter, _ = run_source("int f(a) { let b = a; return b; } let r = f(3);")
    assert len(interpreter.scopes) == 1
    assert list(interpreter.memory) == [interpreter.lookup_slot("r")]
    assert interpreter.memory[interpreter.lookup_slot("r")].data == 3


def test_scopes_are_released_after_errors():
    interpreter, _ = run_source("let ok = 1;")
    with pytest.raises(UndefinedVariableException):
        interpreter.run(parse_source("int f() { return missing; } f();"))
    assert len(interpreter.scopes) == 1
