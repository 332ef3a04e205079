"""
Main parser entry point for C4.

This module defines the `Parser` class, which coordinates the recursive
descent parsing process. The actual parsing routines are split across
`c4lang.parser.expressions` and `c4lang.parser.statements`.

Tokens are pulled from the lexer on demand into a small look-ahead buffer.
Most decisions need only the current token; telling a cast from a grouped
expression, or a function declaration from a call, peeks a few tokens ahead.


File: parser.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from c4lang.exceptions import ParseError
from c4lang.lexer import Lexer, Token

from . import expressions as _expr
from . import statements as _stmt


TOKEN_SPELLING = {
    'EQ': '==', 'NE': '!=', 'LE': '<=', 'GE': '>=', 'AND': '&&', 'OR': '||',
    'LSHIFT': '<<', 'RSHIFT': '>>', 'INC': '++', 'DEC': '--',
    'PLUS': '+', 'MINUS': '-', 'MUL': '*', 'DIV': '/', 'MOD': '%',
    'ASSIGN': '=', 'LT': '<', 'GT': '>', 'NOT': '!', 'AMP': '&',
    'PIPE': '|', 'CARET': '^', 'TILDE': '~', 'QUESTION': '?', 'COLON': ':',
    'LPAREN': '(', 'RPAREN': ')', 'LBRACE': '{', 'RBRACE': '}',
    'LBRACKET': '[', 'RBRACKET': ']', 'SEMI': ';', 'COMMA': ',',
}

END_OF_INPUT = "end of input"


def describe(tok: Token) -> str:
    """
    Describe a token for an error message.
    """
    if tok.type == 'EOF':
        return END_OF_INPUT
    if tok.type == 'STRING':
        return f'string "{tok.value}"'
    if tok.type == 'CHAR_LIT':
        return f"character {chr(tok.value)!r}"
    return f"'{tok.value}'"


class Parser:
    """C4 parser."""

    def __init__(self, lexer: Lexer, file: str | None = None,
                 enum_constants: dict[str, int] | None = None):
        """
        Initialize the parser over a lexer.

        Parameters:
            lexer (Lexer): Source of tokens, read on demand.
            file (str): The name of the script, used in error messages.
            enum_constants (dict): Enum constants declared by earlier input,
                updated in place as new enums are parsed.
        """
        self.lexer = lexer
        self.source_file = file if file is not None else lexer.file
        self._lookahead: list[Token] = []
        self.last_token: Token | None = None
        # Enum constants resolved so far; explicit enum values may name them.
        self.enum_constants: dict[str, int] = (
            enum_constants if enum_constants is not None else {}
        )

    @property
    def curr_token(self) -> Token:
        return self.peek(0)

    def peek(self, offset: int = 1) -> Token:
        """
        Return the token ``offset`` positions past the current one.
        """
        while len(self._lookahead) <= offset:
            self._lookahead.append(self.lexer.next_token())
        return self._lookahead[offset]

    def advance(self) -> Token:
        """
        Consume and return the current token.
        """
        tok = self.peek(0)
        if tok.type != 'EOF':
            self._lookahead.pop(0)
        self.last_token = tok
        return tok

    def error(self, expected: str, tok: Token | None = None) -> ParseError:
        """
        Build a ParseError for the current (or given) token.
        """
        tok = tok if tok is not None else self.curr_token
        return ParseError(expected, describe(tok), tok.line, tok.col, self.source_file)

    def eat(self, token_type: str, expected: str | None = None) -> Token:
        """
        Consume the current token if it matches the expected type.

        Parameters:
            token_type (str): The expected token type.
            expected (str): What to report as missing, defaults to the token spelling.

        Returns:
            Token: The consumed token.

        Raises:
            ParseError: If the token does not match the expected type.
        """
        if self.curr_token.type == token_type:
            return self.advance()
        if expected is None:
            spelling = TOKEN_SPELLING.get(token_type)
            expected = f"'{spelling}'" if spelling else token_type.lower()
        raise self.error(expected)


    # Expression wrappers
    def primary(self) -> tuple:
        """
        Parse a literal, identifier, grouped expression, array literal or sizeof.
        """
        return _expr.parse_primary(self)

    def postfix(self) -> tuple:
        """
        Parse calls, indexing and postfix increments on a primary.
        """
        return _expr.parse_postfix(self)

    def unary(self) -> tuple:
        """
        Parse prefix operators and casts.
        """
        return _expr.parse_unary(self)

    def multiplicative(self) -> tuple:
        """
        Parse multiplication, division and modulus.
        """
        return _expr.parse_multiplicative(self)

    def additive(self) -> tuple:
        """
        Parse addition and subtraction.
        """
        return _expr.parse_additive(self)

    def shift(self) -> tuple:
        """
        Parse a bit-shift expression using left or right shift operators.
        """
        return _expr.parse_shift(self)

    def relational(self) -> tuple:
        """
        Parse ordering comparisons.
        """
        return _expr.parse_relational(self)

    def equality(self) -> tuple:
        """
        Parse equality comparisons.
        """
        return _expr.parse_equality(self)

    def bitwise_and(self) -> tuple:
        """
        Parse a bitwise AND expression.
        """
        return _expr.parse_bitwise_and(self)

    def bitwise_xor(self) -> tuple:
        """
        Parse a bitwise XOR expression.
        """
        return _expr.parse_bitwise_xor(self)

    def bitwise_or(self) -> tuple:
        """
        Parse a bitwise OR expression.
        """
        return _expr.parse_bitwise_or(self)

    def logical_and(self) -> tuple:
        """
        Parse a logical AND expression.
        """
        return _expr.parse_logical_and(self)

    def logical_or(self) -> tuple:
        """
        Parse a logical OR expression.
        """
        return _expr.parse_logical_or(self)

    def ternary(self) -> tuple:
        """
        Parse a conditional expression.
        """
        return _expr.parse_ternary(self)

    def assignment(self) -> tuple:
        """
        Parse an assignment expression.
        """
        return _expr.parse_assignment(self)

    def expr(self) -> tuple:
        """
        Parse a full expression starting from the lowest precedence.
        """
        return _expr.parse_expr(self)


    # Statement wrappers
    def block(self) -> tuple:
        """
        Parse a block of statements enclosed in braces.
        """
        return _stmt.parse_block(self)

    def statement(self) -> tuple:
        """
        Parse a single statement.
        """
        return _stmt.parse_statement(self)

    def parse_let(self) -> tuple:
        """
        Parse a 'let' declaration.
        """
        return _stmt.parse_let(self)

    def parse_declaration(self) -> tuple:
        """
        Parse a typed variable declaration.
        """
        return _stmt.parse_declaration(self)

    def parse_if(self) -> tuple:
        """
        Parse an 'if' conditional statement.
        """
        return _stmt.parse_if(self)

    def parse_while(self) -> tuple:
        """
        Parse a 'while' loop.
        """
        return _stmt.parse_while(self)

    def parse_return(self) -> tuple:
        """
        Parse a 'return' statement from within a function.
        """
        return _stmt.parse_return(self)

    def parse_func_def(self, typed: bool = True) -> tuple:
        """
        Parse a function definition statement.
        """
        return _stmt.parse_func_def(self, typed)

    def parse_enum(self) -> tuple:
        """
        Parse an enum declaration.
        """
        return _stmt.parse_enum(self)


    def parse(self) -> list:
        """
        Parse the full input into a list of statements.

        Raises:
            ParseError: If the input does not fit the grammar, or nests
                deeper than the host interpreter can follow.
        """
        statements = []
        while self.curr_token.type != 'EOF':
            try:
                statements.append(self.statement())
            except RecursionError:
                # Report from a token already read; the lexer may not resume here
                tok = self._lookahead[0] if self._lookahead else self.last_token
                raise self.error("less deeply nested input", tok) from None
        return statements
