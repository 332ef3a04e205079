"""
Utility functions shared across C4 tests.
"""
from pathlib import Path
import sys

from c4lang.lexer import Lexer
from c4lang.parser import Parser
from c4lang.interpreter import Interpreter

# Ensure the project root is on the Python path
PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))


def parse_source(source: str):
    """
    Parse source code and return the AST.
    """
    parser = Parser(Lexer(source, "<test>"))
    return parser.parse()


def run_source(source: str):
    """
    Run source code and return the interpreter and the program result.
    """
    interpreter = Interpreter("<test>")
    result = interpreter.run(parse_source(source))
    return interpreter, result


def run(source: str):
    """
    Run source code and return the program result's payload.
    """
    return run_source(source)[1].data
