"""
Tests for the c4 command-line driver.
"""
import subprocess
import sys

import pytest

import c4
from c4lang.tests.utils import PROJECT_ROOT


@pytest.fixture(autouse=True)
def keep_recursion_limit(monkeypatch):
    """Stop main() from raising the recursion limit for the rest of the session."""
    monkeypatch.setenv("C4_RECURSION_LIMIT", "0")
    monkeypatch.delenv("C4DEBUG", raising=False)


def write_script(tmp_path, source: str):
    path = tmp_path / "prog.c4"
    path.write_text(source, encoding="utf-8")
    return str(path)


def test_runs_script_and_reports_result(tmp_path, capsys):
    script = write_script(tmp_path, 'int main() { print("hi"); return 42; }\nreturn main();\n')
    assert c4.main(["c4", script]) == 0
    assert capsys.readouterr().out == "hi\nProgram finished. Final result = 42\n"


def test_string_result_is_quoted(tmp_path, capsys):
    script = write_script(tmp_path, 'return "done";')
    assert c4.main(["c4", script]) == 0
    assert capsys.readouterr().out == 'Program finished. Final result = "done"\n'


def test_runtime_error_exits_non_zero(tmp_path, capsys):
    script = write_script(tmp_path, "let x = 0;\nreturn 1 / x;\n")
    assert c4.main(["c4", script]) == 1
    captured = capsys.readouterr()
    assert "Program finished" not in captured.out
    assert captured.err.startswith("DivisionByZeroException:")
    assert "line 2" in captured.err
    assert script in captured.err


def test_parse_error_exits_before_running(tmp_path, capsys):
    script = write_script(tmp_path, 'print("never");\nlet = 3;\n')
    assert c4.main(["c4", script]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("ParseError:")


def test_lex_error_exits_non_zero(tmp_path, capsys):
    script = write_script(tmp_path, "let x = 1 @ 2;")
    assert c4.main(["c4", script]) == 1
    assert capsys.readouterr().err.startswith("LexError:")


def test_debug_dump(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("C4DEBUG", "1")
    script = write_script(tmp_path, "return 1;")
    assert c4.main(["c4", script]) == 0
    out = capsys.readouterr().out
    assert "Tokens:" in out
    assert "AST:" in out


def test_help(capsys):
    assert c4.main(["c4", "--help"]) == 0
    assert "Usage:" in capsys.readouterr().out


def test_too_many_arguments(capsys):
    assert c4.main(["c4", "a.c4", "b.c4"]) == 2
    assert "Usage:" in capsys.readouterr().out


def test_invalid_recursion_limit_is_ignored(monkeypatch, capsys):
    monkeypatch.setenv("C4_RECURSION_LIMIT", "lots")
    limit = sys.getrecursionlimit()
    c4.apply_recursion_limit()
    assert sys.getrecursionlimit() == limit
    assert "C4_RECURSION_LIMIT" in capsys.readouterr().err


def test_script_entry_point(tmp_path):
    """Run the driver as a separate process."""
    script = write_script(tmp_path, "int fact(n) { if (n < 2) return 1; return n * fact(n - 1); }\nreturn fact(5);\n")
    result = subprocess.run(
        [sys.executable, "c4.py", script],
        cwd=PROJECT_ROOT,
        capture_output=True,
        text=True,
        check=False,
    )
    assert result.returncode == 0
    assert result.stdout.strip() == "Program finished. Final result = 120"


def test_repl_session(monkeypatch, capsys):
    lines = iter([
        "let x = 2;",
        "x * 21;",
        "int f(n) {",
        "    return n + 1;",
        "}",
        "f(x);",
        "1 / 0;",
        "x;",
        "quit",
    ])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
    c4.run_repl()
    out = capsys.readouterr().out.splitlines()
    assert out[:2] == ["C4 Interpreter - REPL", "Type `exit` or `quit` to leave."]
    assert out[2:4] == ["42", "3"]
    assert out[4].startswith("DivisionByZeroException:")
    assert out[5] == "2"


def test_repl_exits_on_eof(monkeypatch, capsys):
    def no_input(prompt=""):
        raise EOFError
    monkeypatch.setattr("builtins.input", no_input)
    c4.run_repl()
    assert capsys.readouterr().out.endswith("\n\n")


def test_missing_script(tmp_path, capsys):
    missing = str(tmp_path / "absent.c4")
    assert c4.main(["c4", missing]) == 1
    assert capsys.readouterr().err.startswith(f"Cannot read {missing}")


def test_deep_expression_reports_c4_error(tmp_path, capsys):
    terms = " + ".join(["1"] * 30000)
    script = write_script(tmp_path, f"return {terms};\n")
    assert c4.main(["c4", script]) == 1
    err = capsys.readouterr().err
    assert err.startswith("RecursionDepthException:")
    assert "Traceback" not in err


def test_repl_keeps_enum_constants(monkeypatch, capsys):
    lines = iter(["enum { A = 5 };", "enum { B = A };", "B;", "quit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
    c4.run_repl()
    out = capsys.readouterr().out.splitlines()
    assert out[2:] == ["5"]
