"""
Tests for the print built-in.
"""
from c4lang.values import Kind
from c4lang.tests.utils import run_source


def test_print_scalars(capsys):
    run_source("print(42); print(\"hi\"); print('c'); print(true); print(-3);")
    assert capsys.readouterr().out == "42\nhi\nc\ntrue\n-3\n"


def test_print_multiple_arguments(capsys):
    run_source("print(1, \"two\", 3);")
    assert capsys.readouterr().out == "1 two 3\n"


def test_print_without_arguments(capsys):
    run_source("print();")
    assert capsys.readouterr().out == "\n"


def test_print_nested_values(capsys):
    run_source("print([1, \"a\", 'b', [false]]);")
    assert capsys.readouterr().out == "[1, \"a\", 'b', [false]]\n"


def test_print_returns_void(capsys):
    _, result = run_source("return print(1);")
    assert result.kind is Kind.VOID
    assert capsys.readouterr().out == "1\n"


def test_output_interleaves_with_execution(capsys):
    run_source("let i = 0; while (i < 3) { print(i); i++; }")
    assert capsys.readouterr().out == "0\n1\n2\n"
