"""
Expression parsing utilities for C4.

These functions operate on a `c4lang.parser.parser.Parser` instance and
implement the recursive descent logic for expressions, one function per
precedence level. Each level delegates to the next tighter one and loops to
build left-associative chains; assignment and the ternary operator recurse
on themselves instead, which makes them right-associative.

    expression   -> assignment
    assignment   -> ternary ( '=' assignment )?
    ternary      -> logical_or ( '?' expression ':' ternary )?
    logical_or   -> logical_and ( '||' logical_and )*
    logical_and  -> bitwise_or ( '&&' bitwise_or )*
    bitwise_or   -> bitwise_xor ( '|' bitwise_xor )*
    bitwise_xor  -> bitwise_and ( '^' bitwise_and )*
    bitwise_and  -> equality ( '&' equality )*
    equality     -> relational ( ( '==' | '!=' ) relational )*
    relational   -> shift ( ( '<' | '>' | '<=' | '>=' ) shift )*
    shift        -> additive ( ( '<<' | '>>' ) additive )*
    additive     -> multiplicative ( ( '+' | '-' ) multiplicative )*
    multiplicative -> unary ( ( '*' | '/' | '%' ) unary )*
    unary        -> ( '!' | '-' | '+' | '~' | '++' | '--' | '&' | '*' | cast ) unary | postfix
    postfix      -> primary ( call | index | '++' | '--' )*
    primary      -> literal | identifier | '(' expression ')' | array | sizeof


File: expressions.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from typing import TYPE_CHECKING, Callable

from c4lang.ctype import CType
from c4lang.lexer import TYPE_KEYWORDS
from c4lang.operations import Op

if TYPE_CHECKING:
    from c4lang.parser import Parser


ASSIGNABLE = ('ident', 'index', 'deref')


def parse_type(parser: 'Parser') -> CType:
    """
    Parse an abstract type such as ``int``, ``char*`` or ``int[3][2]``.

    Syntax:
        <type-keyword> '*'* ( '[' <number>? ']' )*
    """
    tok = parser.curr_token
    if tok.type not in TYPE_KEYWORDS:
        raise parser.error("type name")
    parser.advance()
    pointer = 0
    while parser.curr_token.type == 'MUL':
        parser.eat('MUL')
        pointer += 1
    return CType(tok.value, pointer, parse_dims(parser))


def parse_dims(parser: 'Parser') -> tuple:
    """
    Parse zero or more array suffixes; an empty ``[]`` has unknown length.
    """
    dims = []
    while parser.curr_token.type == 'LBRACKET':
        parser.eat('LBRACKET')
        if parser.curr_token.type == 'NUMBER':
            dims.append(parser.eat('NUMBER').value)
        else:
            dims.append(None)
        parser.eat('RBRACKET')
    return tuple(dims)


def _parse_args(parser: 'Parser', close: str = 'RPAREN') -> list:
    """
    Parse a comma-separated expression list up to ``close`` (consumed).
    """
    args = []
    if parser.curr_token.type != close:
        args.append(parser.expr())
        while parser.curr_token.type == 'COMMA':
            parser.eat('COMMA')
            if parser.curr_token.type == close and close != 'RPAREN':
                break
            args.append(parser.expr())
    parser.eat(close)
    return args


def _left_assoc(parser: 'Parser', operand: Callable[[], tuple], op_map: dict) -> tuple:
    """
    Parse ``operand (op operand)*`` into a left-leaning chain of binary nodes.
    """
    result = operand()
    while parser.curr_token.type in op_map:
        op_tok = parser.advance()
        result = (op_map[op_tok.type], result, operand(), op_tok.line)
    return result


# ---- Highest precedence ----

def parse_primary(parser: 'Parser') -> tuple:
    """Parse a literal, identifier, parenthesized group, array literal or sizeof."""
    tok = parser.curr_token

    if tok.type == 'NUMBER':
        parser.eat('NUMBER')
        return ('number', tok.value, tok.line)

    if tok.type == 'CHAR_LIT':
        parser.eat('CHAR_LIT')
        return ('char', tok.value, tok.line)

    if tok.type == 'STRING':
        parser.eat('STRING')
        return ('string', tok.value, tok.line)

    if tok.type in ('TRUE', 'FALSE'):
        parser.advance()
        return ('bool', tok.type == 'TRUE', tok.line)

    if tok.type == 'ID':
        parser.eat('ID')
        return ('ident', tok.value, tok.line)

    if tok.type == 'PRINT':
        parser.eat('PRINT')
        parser.eat('LPAREN', "'(' after print")
        return ('func_call', 'print', _parse_args(parser), tok.line)

    if tok.type == 'LPAREN':
        parser.eat('LPAREN')
        node = parser.expr()
        parser.eat('RPAREN')
        return node

    if tok.type in ('LBRACKET', 'LBRACE'):
        parser.advance()
        close = 'RBRACKET' if tok.type == 'LBRACKET' else 'RBRACE'
        return ('array', _parse_args(parser, close), tok.line)

    if tok.type == 'SIZEOF':
        parser.eat('SIZEOF')
        if parser.curr_token.type == 'LPAREN' and parser.peek(1).type in TYPE_KEYWORDS:
            parser.eat('LPAREN')
            ctype = parse_type(parser)
            parser.eat('RPAREN')
            return ('sizeof', ctype, None, tok.line)
        if parser.curr_token.type in TYPE_KEYWORDS:
            return ('sizeof', parse_type(parser), None, tok.line)
        return ('sizeof', None, parser.unary(), tok.line)

    raise parser.error("expression")


def parse_postfix(parser: 'Parser') -> tuple:
    """Parse calls, index operations and postfix ++/-- applied to a primary."""
    result = parser.primary()
    while True:
        tok = parser.curr_token
        if tok.type == 'LPAREN':
            if result[0] != 'ident':
                raise parser.error("';'")
            parser.eat('LPAREN')
            result = ('func_call', result[1], _parse_args(parser), result[-1])
        elif tok.type == 'LBRACKET':
            parser.eat('LBRACKET')
            index_expr = parser.expr()
            parser.eat('RBRACKET')
            result = ('index', result, index_expr, tok.line)
        elif tok.type in ('INC', 'DEC'):
            parser.advance()
            op = Op.INC if tok.type == 'INC' else Op.DEC
            result = ('incdec', op, False, result, tok.line)
        else:
            return result


def parse_unary(parser: 'Parser') -> tuple:
    """Parse prefix operators, address-of, dereference and casts."""
    tok = parser.curr_token
    simple = {
        'NOT': Op.NOT,
        'MINUS': Op.SUB,
        'PLUS': Op.ADD,
        'TILDE': Op.NOT_BITS,
    }
    if tok.type in simple:
        parser.advance()
        return ('unary', simple[tok.type], parser.unary(), tok.line)

    if tok.type in ('INC', 'DEC'):
        parser.advance()
        op = Op.INC if tok.type == 'INC' else Op.DEC
        return ('incdec', op, True, parser.unary(), tok.line)

    if tok.type == 'AMP':
        parser.eat('AMP')
        return ('addr', parser.unary(), tok.line)

    if tok.type == 'MUL':
        parser.eat('MUL')
        return ('deref', parser.unary(), tok.line)

    if tok.type == 'LPAREN' and parser.peek(1).type in TYPE_KEYWORDS:
        parser.eat('LPAREN')
        ctype = parse_type(parser)
        parser.eat('RPAREN')
        return ('cast', ctype, parser.unary(), tok.line)

    return parser.postfix()


def parse_multiplicative(parser: 'Parser') -> tuple:
    """Parse multiplication, division, and modulus expressions."""
    return _left_assoc(parser, parser.unary, {
        'MUL': Op.MUL,
        'DIV': Op.DIV,
        'MOD': Op.MOD,
    })


def parse_additive(parser: 'Parser') -> tuple:
    """Parse addition and subtraction expressions."""
    return _left_assoc(parser, parser.multiplicative, {
        'PLUS': Op.ADD,
        'MINUS': Op.SUB,
    })


def parse_shift(parser: 'Parser') -> tuple:
    """Parse bitwise shift expressions using '<<' or '>>'."""
    return _left_assoc(parser, parser.additive, {
        'LSHIFT': Op.SHL,
        'RSHIFT': Op.SHR,
    })


def parse_relational(parser: 'Parser') -> tuple:
    """Parse ordering comparisons (<, >, <=, >=)."""
    return _left_assoc(parser, parser.shift, {
        'LT': Op.LT,
        'GT': Op.GT,
        'LE': Op.LE,
        'GE': Op.GE,
    })


def parse_equality(parser: 'Parser') -> tuple:
    """Parse equality comparisons (==, !=)."""
    return _left_assoc(parser, parser.relational, {
        'EQ': Op.EQ,
        'NE': Op.NE,
    })


def parse_bitwise_and(parser: 'Parser') -> tuple:
    """Parse bitwise AND expressions using '&'."""
    return _left_assoc(parser, parser.equality, {'AMP': Op.AND_BITS})


def parse_bitwise_xor(parser: 'Parser') -> tuple:
    """Parse bitwise XOR expressions using '^'."""
    return _left_assoc(parser, parser.bitwise_and, {'CARET': Op.XOR_BITS})


def parse_bitwise_or(parser: 'Parser') -> tuple:
    """Parse bitwise OR expressions using '|'."""
    return _left_assoc(parser, parser.bitwise_xor, {'PIPE': Op.OR_BITS})


def parse_logical_and(parser: 'Parser') -> tuple:
    """Parse logical AND expressions using '&&'."""
    return _left_assoc(parser, parser.bitwise_or, {'AND': Op.AND})


def parse_logical_or(parser: 'Parser') -> tuple:
    """Parse logical OR expressions using '||'."""
    return _left_assoc(parser, parser.logical_and, {'OR': Op.OR})


def parse_ternary(parser: 'Parser') -> tuple:
    """Parse the right-associative conditional operator."""
    condition = parser.logical_or()
    if parser.curr_token.type != 'QUESTION':
        return condition
    tok = parser.eat('QUESTION')
    then_branch = parser.expr()
    parser.eat('COLON', "':' in conditional expression")
    else_branch = parser.ternary()
    return ('ternary', condition, then_branch, else_branch, tok.line)


def parse_assignment(parser: 'Parser') -> tuple:
    """Parse a right-associative assignment to a variable, element or pointer target."""
    target = parser.ternary()
    if parser.curr_token.type != 'ASSIGN':
        return target
    tok = parser.curr_token
    if target[0] not in ASSIGNABLE:
        raise parser.error("assignable expression before '='", tok)
    parser.eat('ASSIGN')
    return ('assign', target, parser.assignment(), tok.line)


# ---- Entry point ----

def parse_expr(parser: 'Parser') -> tuple:
    """Parse an expression starting from the lowest-precedence operator."""
    return parser.assignment()
