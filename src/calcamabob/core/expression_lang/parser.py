"""
Pratt (top-down operator precedence) parser for the Calcamabob expression
language.

Binding powers (higher binds tighter):

    + -        10
    * /        20
    ^          50
    func(      99
    (         100
    )           0   never continues an expression
    -3         10   a negative literal after an operand reads as "+ -3"

There is no right-associativity override, so ``2^3^2`` climbs left to right
and parses as ``(2^3)^2``.

Null denotations (tokens that start an expression):

    NUMBER | CONSTANT           → NumberLiteral
    FUNCTION_CALL expr ")"      → UnaryCall
    "(" expr ")"                → Grouping
    "-" expr                    → -1 * expr, operand parsed at the "^" power
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from calcamabob.core.errors import ParseError, make_parse_error
from calcamabob.core.expression_lang.tokenizer import Token, TokenKind, tokenize
from calcamabob.core.ir.expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    Grouping,
    NumberLiteral,
    UnaryCall,
)

logger = logging.getLogger(__name__)

BINDING_POWER: dict[TokenKind, int] = {
    TokenKind.PLUS: 10,
    TokenKind.MINUS: 10,
    TokenKind.STAR: 20,
    TokenKind.SLASH: 20,
    TokenKind.CARET: 50,
    TokenKind.FUNCTION_CALL: 99,
    TokenKind.LPAREN: 100,
    TokenKind.RPAREN: 0,
}

_INFIX_OPS: dict[TokenKind, BinaryOp] = {
    TokenKind.PLUS: BinaryOp.ADD,
    TokenKind.MINUS: BinaryOp.SUB,
    TokenKind.STAR: BinaryOp.MUL,
    TokenKind.SLASH: BinaryOp.DIV,
    TokenKind.CARET: BinaryOp.POW,
}

# A prefix "-" binds like a negative literal: tighter than "^".
_PREFIX_MINUS_BP = BINDING_POWER[TokenKind.CARET]


def binding_power(tok: Token) -> int:
    """Left binding power of a token.

    A negative number in operator position continues the expression as an
    addition, like the "+" the tokenizer inserts after a number.
    """
    if _is_negative_number(tok):
        return BINDING_POWER[TokenKind.PLUS]
    return BINDING_POWER.get(tok.kind, 0)


def _is_negative_number(tok: Token) -> bool:
    return tok.kind == TokenKind.NUMBER and tok.lexeme.startswith("-")


class _Parser:
    """Pratt parser over a single cursor of tokens."""

    def __init__(self, tokens: Sequence[Token], source: str | None = None) -> None:
        if not tokens or tokens[-1].kind != TokenKind.EOF:
            end = len(source) if source is not None else 0
            tokens = [*tokens, Token(TokenKind.EOF, "", pos=end)]
        self.tokens = tokens
        self.source = source
        self.pos = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return tok

    def expect_close(self, opener: Token) -> Token:
        tok = self.current
        if tok.kind != TokenKind.RPAREN:
            raise self.error(
                f"expected closing parenthesis for {opener.lexeme!r}, got {_describe(tok)}",
                tok,
            )
        return self.advance()

    def error(self, message: str, tok: Token) -> ParseError:
        return make_parse_error(message, self.source, tok.pos)

    # -- Grammar --

    def parse(self) -> Expr:
        expr = self.expression(0)

        # Ensure all tokens consumed
        if self.current.kind != TokenKind.EOF:
            raise self.error(
                f"unexpected token after expression: {self.current.lexeme!r}",
                self.current,
            )
        return expr

    def expression(self, rbp: int) -> Expr:
        left = self.prefix()

        while binding_power(self.current) > rbp:
            if self.current.kind == TokenKind.RPAREN:
                break
            left = self.infix(left)

        return left

    def prefix(self) -> Expr:
        tok = self.current

        if tok.kind == TokenKind.FUNCTION_CALL:
            if not tok.lexeme:
                raise self.error("no slice to define function", tok)
            self.advance()
            operand = self.expression(0)
            self.expect_close(tok)
            return UnaryCall(name=tok.lexeme, operand=operand)

        if tok.kind == TokenKind.LPAREN:
            self.advance()
            inner = self.expression(0)
            self.expect_close(tok)
            return Grouping(inner=inner)

        if tok.kind == TokenKind.MINUS:
            self.advance()
            operand = self.expression(_PREFIX_MINUS_BP)
            return BinaryExpr(left=NumberLiteral(value=-1.0), op=BinaryOp.MUL, right=operand)

        return self.literal()

    def literal(self) -> NumberLiteral:
        tok = self.advance()
        if tok.kind == TokenKind.EOF:
            raise self.error("incomplete expression", tok)
        if tok.kind in (TokenKind.NUMBER, TokenKind.CONSTANT) and tok.number is not None:
            return NumberLiteral(value=tok.number)
        raise self.error(f"expecting literal, got {_describe(tok)}", tok)

    def infix(self, left: Expr) -> BinaryExpr:
        if _is_negative_number(self.current):
            # Leave the literal in place as the first token of the right side.
            right = self.expression(BINDING_POWER[TokenKind.PLUS])
            return BinaryExpr(left=left, op=BinaryOp.ADD, right=right)

        tok = self.advance()
        op = _INFIX_OPS.get(tok.kind)
        if op is None:
            raise self.error(f"expecting operator, got {_describe(tok)}", tok)
        right = self.expression(binding_power(tok))
        return BinaryExpr(left=left, op=op, right=right)


def _describe(tok: Token) -> str:
    if tok.kind == TokenKind.EOF:
        return "end of input"
    return repr(tok.lexeme)


def parse(tokens: Sequence[Token], source: str | None = None) -> Expr:
    """Parse a token sequence into an AST.

    Args:
        tokens: Output of :func:`tokenize`. A missing trailing EOF is added.
        source: Original text, used only to point error messages at a column.

    Returns:
        Root of the parsed expression tree.

    Raises:
        ParseError: If the tokens do not form exactly one expression, or
            brackets and calls nest deeper than the recursion limit allows.
    """
    try:
        expr = _Parser(tokens, source).parse()
    except RecursionError:
        raise ParseError("expression too deeply nested") from None
    logger.debug("Parsed %s", expr)
    return expr


def parse_expr(source: str, *, strict: bool = False) -> Expr:
    """Tokenize and parse an expression string into an AST.

    Args:
        source: Expression string (e.g., "2 + 5 * 2^2")
        strict: Reject unrecognized characters instead of dropping them.

    Returns:
        Parsed expression AST.

    Raises:
        ParseError: If the expression is invalid.
        TokenizeError: If ``strict`` is set and tokenization fails.
    """
    return parse(tokenize(source, strict=strict), source)
