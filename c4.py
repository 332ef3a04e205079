"""
C4 Interpreter

This is the main entry point for the C4 interpreter.

Workflow:
1. The source script is read from the file specified on the command line.
2. The Lexer tokenizes the source code on demand.
3. The Parser pulls tokens and builds an AST following the language grammar.
4. The Interpreter walks the AST, evaluating expressions and executing statements.
5. The final program result is printed.

Environment:
    C4DEBUG             When set, print the tokens and AST before running.
    C4_RECURSION_LIMIT  Python recursion limit used while running (default 20000).


File: c4.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""
import os
import sys

from c4lang.exceptions import C4Error, ParseError
from c4lang.interpreter import Interpreter
from c4lang.lexer import Lexer, tokenize
from c4lang.parser import Parser
from c4lang.parser.parser import END_OF_INPUT
from c4lang.values import VOID, Kind, format_value

DEFAULT_RECURSION_LIMIT = 20000


def print_usage():
    """
    Print usage.
    """
    print()
    print("C4 Interpreter")
    print()
    print("Usage:")
    print("    c4 <script.c4>")
    print()
    print("Arguments:")
    print("    <script.c4>")
    print("        Path to a C4 source file to execute.")
    print()
    print("Example:")
    print("    c4 factorial.c4")
    print()
    print("Or run with no arguments to enter interactive mode (REPL).")
    print()
    print("Options:")
    print("    -h, --help")
    print("        Show this help message and exit.")


def debug_print_tokens_ast(tokens, ast):
    """
    Print tokenized source and AST
    """
    print("\nTokens:\n")
    print(tokens)
    print("\nAST:\n")
    print(ast)
    print(" ")


def format_result(value) -> str:
    """
    Format the final program value; strings are quoted.
    """
    if value.kind is Kind.STR:
        return f'"{value.data}"'
    return format_value(value)


def apply_recursion_limit():
    """
    Raise Python's recursion limit so deeply recursive C4 programs can run.
    """
    limit = os.environ.get('C4_RECURSION_LIMIT', DEFAULT_RECURSION_LIMIT)
    try:
        limit = int(limit)
    except ValueError:
        print(f"Ignoring invalid C4_RECURSION_LIMIT '{limit}'", file=sys.stderr)
        return
    sys.setrecursionlimit(max(limit, sys.getrecursionlimit()))


def run_script(script_name: str) -> int:
    """
    Run a C4 script and return the process exit code.
    """
    try:
        with open(script_name, "r", encoding="utf-8") as f:
            code = f.read()
    except OSError as e:
        print(f"Cannot read {script_name}: {e.strerror}", file=sys.stderr)
        return 1

    try:
        parser = Parser(Lexer(code, script_name))
        ast = parser.parse()

        if os.environ.get('C4DEBUG'):
            debug_print_tokens_ast(tokenize(code, script_name), ast)

        interpreter = Interpreter(script_name)
        result = interpreter.run(ast)
    except C4Error as e:
        print(f"{type(e).__name__}: {e}", file=sys.stderr)
        return 1

    print(f"Program finished. Final result = {format_result(result)}")
    return 0


def run_repl():
    """
    Run the interactive REPL
    """
    print("C4 Interpreter - REPL")
    print("Type `exit` or `quit` to leave.")
    interpreter = Interpreter("<stdin>")
    enum_constants: dict[str, int] = {}
    buffer: list[str] = []
    while True:
        try:
            prompt = ">>> " if not buffer else "... "
            line = input(prompt)
            if line.strip() in {"exit", "quit"}:
                break
            buffer.append(line)
            source = "\n".join(buffer)
            try:
                ast = Parser(Lexer(source, "<stdin>"), enum_constants=enum_constants).parse()
                buffer.clear()
                for stmt in ast:
                    signal = interpreter.execute_checked(stmt)
                    if signal.returning:
                        print(format_result(signal.value))
                    elif stmt[0] == 'expr_stmt' and interpreter.last_value != VOID:
                        print(format_result(interpreter.last_value))
            except ParseError as e:
                # A statement cut off at end of input keeps reading lines
                if e.found == END_OF_INPUT:
                    continue
                print(f"{type(e).__name__}: {e}")
                buffer.clear()
            except C4Error as e:
                print(f"{type(e).__name__}: {e}")
                buffer.clear()
        except KeyboardInterrupt:
            print("\nInterrupted.")
            break
        except EOFError:
            print()
            break


def main(argv: list[str]) -> int:
    """
    Entry point for the CLI.

    Behaviour:
    - No arguments: enter the REPL.
    - One argument equal to ``-h`` or ``--help``: print usage and exit.
    - One argument that is not an option: treat it as the path to a script and run it.
    - Any other pattern: print usage and return a non-zero exit code.
    """
    args = argv[1:]
    apply_recursion_limit()
    if not args:
        run_repl()
        return 0
    if len(args) == 1 and args[0] in ('-h', '--help'):
        print_usage()
        return 0
    if len(args) == 1:
        return run_script(args[0])
    print_usage()
    return 2


def cli() -> None:
    """
    Console-script entry point.
    """
    sys.exit(main(sys.argv))


if __name__ == "__main__":
    cli()
