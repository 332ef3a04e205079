"""Statement parsing utilities for C4.

These functions operate on a `c4lang.parser.parser.Parser` instance and
handle the various statement forms in the language such as declarations,
blocks, conditionals, loops, function definitions and enums.


File: statements.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from typing import TYPE_CHECKING

from c4lang.ctype import CType, INT
from c4lang.lexer import TYPE_KEYWORDS

from .expressions import parse_dims, parse_type

if TYPE_CHECKING:
    from c4lang.parser import Parser


def _parse_declarator(parser: 'Parser', base: str) -> tuple:
    """
    Parse the part of a typed declaration after the type keyword.

    Syntax:
        '*'* <identifier> ( '[' <number>? ']' )*

    Returns:
        tuple: (name, CType)
    """
    pointer = 0
    while parser.curr_token.type == 'MUL':
        parser.eat('MUL')
        pointer += 1
    name = parser.eat('ID', "identifier").value
    return name, CType(base, pointer, parse_dims(parser))


def _is_function_def(parser: 'Parser') -> bool:
    """
    Check whether the tokens ahead read ``<type> '*'* <name> '('``.
    """
    offset = 1
    while parser.peek(offset).type == 'MUL':
        offset += 1
    return parser.peek(offset).type == 'ID' and parser.peek(offset + 1).type == 'LPAREN'


def _is_untyped_function_def(parser: 'Parser') -> bool:
    """
    Check whether the tokens ahead read ``<name> '(' … ')' '{'``.
    """
    if parser.peek(1).type != 'LPAREN':
        return False
    depth = 0
    offset = 1
    while True:
        tok = parser.peek(offset)
        if tok.type == 'EOF':
            return False
        if tok.type == 'LPAREN':
            depth += 1
        elif tok.type == 'RPAREN':
            depth -= 1
            if depth == 0:
                return parser.peek(offset + 1).type == 'LBRACE'
        offset += 1


def parse_block(parser: 'Parser') -> tuple:
    """
    Parse a block of statements enclosed in braces.

    Syntax:
        { <statement>* }

    Args:
        parser: The parser instance.

    Returns:
        tuple: ('block', list_of_statements, line_number)
    """
    tok = parser.eat('LBRACE')
    statements = []
    while parser.curr_token.type != 'RBRACE':
        if parser.curr_token.type == 'EOF':
            raise parser.error("'}'")
        statements.append(parser.statement())
    parser.eat('RBRACE')
    return ('block', statements, tok.line)


def parse_statement(parser: 'Parser') -> tuple:
    """
    Parse a single statement.

    Args:
        parser: The parser instance.

    Returns:
        tuple: representing the AST node.
    """
    tok = parser.curr_token
    if tok.type == 'LET':
        return parser.parse_let()
    elif tok.type in TYPE_KEYWORDS:
        if _is_function_def(parser):
            return parser.parse_func_def()
        return parser.parse_declaration()
    elif tok.type == 'ID' and _is_untyped_function_def(parser):
        return parser.parse_func_def(typed=False)
    elif tok.type == 'IF':
        return parser.parse_if()
    elif tok.type == 'WHILE':
        return parser.parse_while()
    elif tok.type == 'RETURN':
        return parser.parse_return()
    elif tok.type == 'LBRACE':
        return parser.block()
    elif tok.type == 'ENUM':
        return parser.parse_enum()
    elif tok.type == 'SEMI':
        parser.eat('SEMI')
        return ('block', [], tok.line)

    expr_node = parser.expr()
    parser.eat('SEMI')
    return ('expr_stmt', expr_node, tok.line)


def parse_let(parser: 'Parser') -> tuple:
    """
    Parse a `let` declaration of one or more variables.

    Syntax:
        let <identifier> [: <type>] [= <expression>] (, ...)* ;

    Args:
        parser: The parser instance.

    Returns:
        tuple: ('let', [(name, ctype, init)], line)
    """
    tok = parser.eat('LET')
    bindings = []
    while True:
        name = parser.eat('ID', "identifier after 'let'").value
        ctype = None
        if parser.curr_token.type == 'COLON':
            parser.eat('COLON')
            ctype = parse_type(parser)
        init = None
        if parser.curr_token.type == 'ASSIGN':
            parser.eat('ASSIGN')
            init = parser.expr()
        bindings.append((name, ctype, init))
        if parser.curr_token.type != 'COMMA':
            break
        parser.eat('COMMA')
    parser.eat('SEMI')
    return ('let', bindings, tok.line)


def parse_declaration(parser: 'Parser') -> tuple:
    """
    Parse a C-style typed declaration.

    Syntax:
        <type> <declarator> [= <expression>] (, <declarator> [= <expression>])* ;

    Args:
        parser: The parser instance.

    Returns:
        tuple: ('let', [(name, ctype, init)], line)
    """
    tok = parser.advance()
    bindings = []
    while True:
        name, ctype = _parse_declarator(parser, tok.value)
        init = None
        if parser.curr_token.type == 'ASSIGN':
            parser.eat('ASSIGN')
            init = parser.expr()
        bindings.append((name, ctype, init))
        if parser.curr_token.type != 'COMMA':
            break
        parser.eat('COMMA')
    parser.eat('SEMI')
    return ('let', bindings, tok.line)


def parse_if(parser: 'Parser') -> tuple:
    """
    Parse a conditional 'if' statement with an optional else branch.

    ``else if`` needs no special handling: the else branch is simply another
    if statement.

    Syntax:
        if ( <condition> ) <statement> [else <statement>]

    Args:
        parser: The parser instance.

    Returns:
        tuple: ('if', condition, then_branch, else_branch, line)
    """
    tok = parser.eat('IF')
    parser.eat('LPAREN', "'(' after 'if'")
    condition = parser.expr()
    parser.eat('RPAREN', "')' after condition")
    then_branch = parser.statement()
    else_branch = None
    if parser.curr_token.type == 'ELSE':
        parser.eat('ELSE')
        else_branch = parser.statement()
    return ('if', condition, then_branch, else_branch, tok.line)


def parse_while(parser: 'Parser') -> tuple:
    """
    Parse a 'while' loop.

    Syntax:
        while ( <condition> ) <statement>

    Args:
        parser: The parser instance.

    Returns:
        tuple: ('while', condition, body, line)
    """
    tok = parser.eat('WHILE')
    parser.eat('LPAREN', "'(' after 'while'")
    condition = parser.expr()
    parser.eat('RPAREN', "')' after condition")
    body = parser.statement()
    return ('while', condition, body, tok.line)


def parse_return(parser: 'Parser') -> tuple:
    """
    Parse a 'return' statement.

    Syntax:
        return [<expression>] ;

    Args:
        parser: The parser instance.

    Returns:
        tuple: ('return', expression or None, line)
    """
    tok = parser.eat('RETURN')
    expr_node = None
    if parser.curr_token.type != 'SEMI':
        expr_node = parser.expr()
    parser.eat('SEMI', "';' after return")
    return ('return', expr_node, tok.line)


def parse_func_def(parser: 'Parser', typed: bool = True) -> tuple:
    """
    Parse a function definition.

    A definition without a return type (``main() { … }``) returns ``int``.
    A prototype ending in ``;`` declares nothing and parses to an empty block.

    Syntax:
        [<type> '*'*] <name> ( [<param> (, <param>)*] ) <block>
        <param> := <identifier> | <type> <declarator> | void

    Args:
        parser: The parser instance.

    Returns:
        tuple: ('func_def', name, params, body, return_type, line)
    """
    start_tok = parser.curr_token
    return_type = INT
    if typed:
        base = parser.advance().value
        pointer = 0
        while parser.curr_token.type == 'MUL':
            parser.eat('MUL')
            pointer += 1
        return_type = CType(base, pointer)
    func_name = parser.eat('ID', "function name").value
    parser.eat('LPAREN')

    params = []
    if parser.curr_token.type == 'VOID' and parser.peek(1).type == 'RPAREN':
        parser.eat('VOID')
    while parser.curr_token.type != 'RPAREN':
        if parser.curr_token.type in TYPE_KEYWORDS:
            base = parser.advance().value
            params.append(_parse_declarator(parser, base))
        else:
            params.append((parser.eat('ID', "parameter name").value, None))
        if parser.curr_token.type == 'COMMA':
            parser.eat('COMMA')
        elif parser.curr_token.type != 'RPAREN':
            raise parser.error("',' or ')' in parameter list")
    parser.eat('RPAREN')

    if parser.curr_token.type == 'SEMI':
        parser.eat('SEMI')
        return ('block', [], start_tok.line)

    body = parser.block()
    return ('func_def', func_name, params, body, return_type, start_tok.line)


def _parse_enum_value(parser: 'Parser') -> int:
    """
    Parse the explicit value of an enum member.

    Syntax:
        ['-'] <number> | <char> | <enum-constant>
    """
    tok = parser.curr_token
    if tok.type == 'MINUS':
        parser.eat('MINUS')
        return -parser.eat('NUMBER', "integer constant").value
    if tok.type == 'NUMBER':
        return parser.eat('NUMBER').value
    if tok.type == 'CHAR_LIT':
        return parser.eat('CHAR_LIT').value
    if tok.type == 'ID' and tok.value in parser.enum_constants:
        parser.eat('ID')
        return parser.enum_constants[tok.value]
    raise parser.error("integer constant in enum")


def parse_enum(parser: 'Parser') -> tuple:
    """
    Parse an enum declaration, resolving every member to an integer.

    Members without an explicit value take the previous member's value plus
    one, starting at 0.

    Syntax:
        enum [<tag>] { <name> [= <value>] (, <name> [= <value>])* [,] } ;

    Args:
        parser: The parser instance.

    Returns:
        tuple: ('enum', [(name, value)], line)
    """
    tok = parser.eat('ENUM')
    if parser.curr_token.type == 'ID':
        parser.eat('ID')
    parser.eat('LBRACE', "'{' after 'enum'")
    members = []
    value = 0
    while parser.curr_token.type != 'RBRACE':
        name = parser.eat('ID', "enum member name").value
        if parser.curr_token.type == 'ASSIGN':
            parser.eat('ASSIGN')
            value = _parse_enum_value(parser)
        members.append((name, value))
        parser.enum_constants[name] = value
        value += 1
        if parser.curr_token.type == 'COMMA':
            parser.eat('COMMA')
        elif parser.curr_token.type != 'RBRACE':
            raise parser.error("',' or '}' in enum declaration")
    parser.eat('RBRACE')
    parser.eat('SEMI', "';' after enum")
    return ('enum', members, tok.line)
