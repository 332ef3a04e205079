"""Lexer for C4.

The lexer scans source code with a combined regular expression of named
groups. Matching is lazy: :meth:`Lexer.next_token` resumes the scan only when
the parser asks for another token, so a syntax error late in a file is never
reached before earlier tokens are consumed. Each :class:`Token` carries its
type, value, and 1-based line and column.

Tokens cover literals (decimal integers, character and string literals,
booleans), keywords (``let``, ``while``, ``sizeof`` …), operators and
punctuation. ``//`` line comments and ``/* … */`` block comments are skipped
while keeping line numbers accurate. Multi-character operators are listed
before their single-character prefixes so the longest match always wins.


File: lexer.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import re
from typing import Iterator

from c4lang.exceptions import LexError


class Token:
    """
    Represents a lexical token with a type and value.
    """
    __slots__ = ("type", "value", "line", "col")

    def __init__(self, type_, value, line, col):
        """
        Initialize a new token.

        Parameters:
            type_ (str): The token type.
            value (Any): The token value.
            line (int): Line the token starts on.
            col (int): Column the token starts at.
        """
        self.type = type_
        self.value = value
        self.line = line
        self.col = col

    def __repr__(self) -> str:
        """
        Return a string representation of the token.
        """
        return f"Token({self.type}, {self.value!r}, line={self.line}, col={self.col})"


KEYWORDS = {
    "let": "LET",
    "int": "INT",
    "char": "CHAR",
    "bool": "BOOL",
    "void": "VOID",
    "str": "STR",
    "if": "IF",
    "else": "ELSE",
    "while": "WHILE",
    "return": "RETURN",
    "enum": "ENUM",
    "sizeof": "SIZEOF",
    "print": "PRINT",
    "true": "TRUE",
    "false": "FALSE",
}

TYPE_KEYWORDS = frozenset({"INT", "CHAR", "BOOL", "VOID", "STR"})

ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
    "\\": "\\",
    "'": "'",
    '"': '"',
}

token_specification = [
    # Comments
    ('LINE_COMMENT',  r'//[^\n]*'),
    ('BLOCK_COMMENT', r'/\*[\s\S]*?\*/'),
    ('OPEN_COMMENT',  r'/\*'),

    # Literals
    ('NUMBER',        r'\d+'),
    ('CHAR_LIT',      r"'(?:[^'\\\n]|\\.)*'"),
    ('STRING',        r'"(?:[^"\\\n]|\\.)*"'),
    ('OPEN_QUOTE',    r'[\'"]'),

    # Identifiers and keywords
    ('ID',            r'[A-Za-z_][A-Za-z0-9_]*'),

    # Two-character operators
    ('EQ',            r'=='),
    ('NE',            r'!='),
    ('LE',            r'<='),
    ('GE',            r'>='),
    ('AND',           r'&&'),
    ('OR',            r'\|\|'),
    ('LSHIFT',        r'<<'),
    ('RSHIFT',        r'>>'),
    ('INC',           r'\+\+'),
    ('DEC',           r'--'),

    # Single-character operators
    ('PLUS',          r'\+'),
    ('MINUS',         r'-'),
    ('MUL',           r'\*'),
    ('DIV',           r'/'),
    ('MOD',           r'%'),
    ('ASSIGN',        r'='),
    ('LT',            r'<'),
    ('GT',            r'>'),
    ('NOT',           r'!'),
    ('AMP',           r'&'),
    ('PIPE',          r'\|'),
    ('CARET',         r'\^'),
    ('TILDE',         r'~'),
    ('QUESTION',      r'\?'),
    ('COLON',         r':'),

    # Delimiters
    ('LPAREN',        r'\('),
    ('RPAREN',        r'\)'),
    ('LBRACE',        r'\{'),
    ('RBRACE',        r'\}'),
    ('LBRACKET',      r'\['),
    ('RBRACKET',      r'\]'),
    ('SEMI',          r';'),
    ('COMMA',         r','),

    # Miscellaneous
    ('NEWLINE',       r'\n'),
    ('SKIP',          r'[ \t\r\f\v]+'),
    ('MISMATCH',      r'.'),
]

TOKEN_REGEX = re.compile(
    '|'.join(f'(?P<{name}>{pattern})' for name, pattern in token_specification)
)


class Lexer:
    """
    On-demand tokenizer over one source string.

    The token stream is forward-only: once exhausted, :meth:`next_token`
    keeps returning the ``EOF`` token. Scanning the same text again needs a
    new Lexer.
    """

    def __init__(self, source: str, file: str = "<input>"):
        self.source = source
        self.file = file
        self.line = 1
        self.col = 1
        self._tokens = self._scan()
        self._eof = None

    def next_token(self) -> Token:
        """
        Return the next token, or the ``EOF`` token at end of input.

        Raises:
            LexError: If the source contains text that matches no token rule.
        """
        if self._eof is not None:
            return self._eof
        tok = next(self._tokens)
        if tok.type == 'EOF':
            self._eof = tok
        return tok

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next_token()
            yield tok
            if tok.type == 'EOF':
                return

    def _error(self, message, line, col, char=None):
        return LexError(message, line, col, char, self.file)

    def _unescape(self, body: str, line: int, col: int) -> str:
        """
        Decode the backslash escapes inside a char or string literal body.
        """
        out = []
        chars = iter(body)
        for ch in chars:
            if ch != '\\':
                out.append(ch)
                continue
            esc = next(chars)
            if esc not in ESCAPES:
                raise self._error(f"Unknown escape sequence '\\{esc}'", line, col, esc)
            out.append(ESCAPES[esc])
        return ''.join(out)

    def _scan(self) -> Iterator[Token]:
        line_start = 0
        for match_obj in TOKEN_REGEX.finditer(self.source):
            kind = match_obj.lastgroup
            value = match_obj.group()
            line = self.line
            col = match_obj.start() - line_start + 1
            self.col = col

            if kind == 'NEWLINE':
                self.line += 1
                line_start = match_obj.end()
                continue
            if kind in ('SKIP', 'LINE_COMMENT'):
                continue
            if kind == 'BLOCK_COMMENT':
                newlines = value.count('\n')
                if newlines:
                    self.line += newlines
                    line_start = match_obj.start() + value.rindex('\n') + 1
                continue
            if kind == 'OPEN_COMMENT':
                raise self._error("Unterminated block comment", line, col, value)
            if kind == 'OPEN_QUOTE':
                raise self._error("Unterminated literal", line, col, value)
            if kind == 'MISMATCH':
                raise self._error(f"Unexpected character '{value}'", line, col, value)

            if kind == 'NUMBER':
                yield Token('NUMBER', int(value), line, col)
            elif kind == 'CHAR_LIT':
                text = self._unescape(value[1:-1], line, col)
                if len(text) != 1:
                    raise self._error(
                        f"Character literal {value} must hold exactly one character",
                        line, col, value,
                    )
                yield Token('CHAR_LIT', ord(text), line, col)
            elif kind == 'STRING':
                yield Token('STRING', self._unescape(value[1:-1], line, col), line, col)
            elif kind == 'ID':
                yield Token(KEYWORDS.get(value, 'ID'), value, line, col)
            else:
                yield Token(kind, value, line, col)

        self.col = len(self.source) - line_start + 1
        yield Token('EOF', None, self.line, self.col)


def tokenize(code: str, file: str = "<input>") -> list[Token]:
    """
    Convert a string of source code into a list of tokens ending in ``EOF``.

    Parameters:
        code (str): The source code to tokenize.
        file (str): Name used in error messages.

    Returns:
        list[Token]: A list of Token instances.

    Raises:
        LexError: If an unexpected character is encountered.
    """
    return list(Lexer(code, file))
