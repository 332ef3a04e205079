"""
Tests for explicit casts, declared-type coercion and sizeof.
"""
import pytest

from c4lang.exceptions import TypeMismatchException
from c4lang.values import Kind
from c4lang.tests.utils import run, run_source


def test_casts_between_scalars():
    assert run("return (int)'a';") == 97
    assert run("return (int)true + (int)false;") == 1
    _, result = run_source("return (char)300;")
    assert (result.kind, result.data) == (Kind.CHAR, 44)
    _, result = run_source("return (bool)5;")
    assert (result.kind, result.data) == (Kind.BOOL, True)


def test_cast_string_to_int_is_zero():
    assert run('return (int)"hello";') == 0


def test_cast_to_pointer():
    _, result = run_source("return (int*)2000;")
    assert (result.kind, result.data) == (Kind.POINTER, 2000)


def test_invalid_cast():
    with pytest.raises(TypeMismatchException):
        run("return (int)[1];")
    with pytest.raises(TypeMismatchException):
        run('return (bool)"yes";')


def test_declared_type_coerces_initializer(capsys):
    run("char c = 65; print(c);")
    assert capsys.readouterr().out == "A\n"


def test_sizeof_types():
    assert run("return sizeof(int);") == 4
    assert run("return sizeof(char);") == 1
    assert run("return sizeof(bool);") == 1
    assert run("return sizeof(str);") == 8
    assert run("return sizeof(void);") == 0
    assert run("return sizeof(int*);") == 8
    assert run("return sizeof(int[3]);") == 12
    assert run("return sizeof(int[3][2]);") == 24


def test_sizeof_expressions():
    assert run("let a = [1, 2, 3]; return sizeof(a);") == 12
    assert run("return sizeof('c');") == 1
    assert run("let x = 1; return sizeof(&x);") == 8
    assert run('return sizeof("hello");') == 8


def test_assignment_converts_to_declared_type():
    _, result = run_source("char c = 'a'; c = 300; return c;")
    assert (result.kind, result.data) == (Kind.CHAR, 44)
    _, result = run_source("bool b = false; b = 5; return b;")
    assert (result.kind, result.data) == (Kind.BOOL, True)
    _, result = run_source("bool b = true; b++; return b;")
    assert (result.kind, result.data) == (Kind.BOOL, True)


def test_element_and_pointer_writes_convert_to_declared_type():
    _, result = run_source("char s[2]; s[0] = 321; return s[0];")
    assert (result.kind, result.data) == (Kind.CHAR, 65)
    _, result = run_source("char c = 'a'; let p = &c; *p = 322; return c;")
    assert (result.kind, result.data) == (Kind.CHAR, 66)


def test_untyped_bindings_stay_dynamic():
    _, result = run_source("let x = 'a'; x = 300; return x;")
    assert (result.kind, result.data) == (Kind.INT, 300)


def test_sizeof_does_not_run_its_operand(capsys):
    assert run("let x = 1; let n = sizeof(x++); return x * 10 + n;") == 14
    assert run("let a = [1, 2]; let n = sizeof(a = [1, 2, 3]); return sizeof(a) + n;") == 20
    assert run('int f() { print("side"); return 1; } return sizeof(f());') == 4
    assert capsys.readouterr().out == ""
