"""
Tokenizer for the Calcamabob expression language.

Converts an expression string into a sequence of typed tokens, each carrying
the lexeme it was read from.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import StrEnum, auto

from calcamabob.core.errors import make_tokenize_error

logger = logging.getLogger(__name__)


class TokenKind(StrEnum):
    """Token types for the expression language."""

    # Literals
    NUMBER = auto()
    CONSTANT = auto()

    # Calls: the function name is the lexeme, e.g. "sin("
    FUNCTION_CALL = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    CARET = auto()
    EQUALS = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()

    # Unrecognized input, never returned from tokenize()
    INVALID = auto()

    # End of input
    EOF = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """A single token and the lexeme it was read from.

    ``number`` holds the value of NUMBER and CONSTANT tokens. ``pos`` is the
    offset of the lexeme in the source and does not take part in equality.
    """

    kind: TokenKind
    lexeme: str
    number: float | None = None
    pos: int = field(default=0, compare=False)

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.lexeme!r}, pos={self.pos})"


_CONSTANTS: dict[str, float] = {
    "pi": math.pi,
    "e": math.e,
}

# (kind, pattern, priority). The longest match wins; ties go to priority.
_RULES: list[tuple[TokenKind, re.Pattern[str], int]] = [
    # Letters, or letters then digits as in log10, directly followed by "("
    (TokenKind.FUNCTION_CALL, re.compile(r"[A-Za-z]+\(|[A-Za-z]*[0-9]+\("), 10),
    (TokenKind.LPAREN, re.compile(r"\("), 5),
    (TokenKind.PLUS, re.compile(r"\+"), 2),
    (TokenKind.MINUS, re.compile(r"-"), 2),
    (TokenKind.STAR, re.compile(r"\*"), 2),
    (TokenKind.SLASH, re.compile(r"/"), 2),
    (TokenKind.CARET, re.compile(r"\^"), 2),
    (TokenKind.RPAREN, re.compile(r"\)"), 2),
    (TokenKind.EQUALS, re.compile(r"="), 2),
    (TokenKind.CONSTANT, re.compile(r"pi|e"), 2),
    (TokenKind.NUMBER, re.compile(r"-?(?:[0-9]*\.)?[0-9]+"), 1),
]

_WHITESPACE_RE = re.compile(r"[ \t\n\f]+")


def tokenize(source: str, *, strict: bool = False) -> list[Token]:
    """Tokenize an expression string into a list of tokens ending in EOF.

    Whitespace is skipped. Unrecognized characters are dropped, or raise
    TokenizeError when ``strict`` is set.

    A negative number directly after another number gets a synthetic PLUS
    in front of it, so ``5 -3`` reads as ``5 + -3`` rather than two adjacent
    literals.
    """
    tokens: list[Token] = []
    previous: Token | None = None

    for tok in _scan(source):
        if tok.kind == TokenKind.INVALID:
            if strict:
                raise make_tokenize_error(
                    f"Unexpected character: {tok.lexeme!r}", source, tok.pos
                )
            logger.debug("Dropping unrecognized character %r at %d", tok.lexeme, tok.pos)
            continue

        if (
            previous is not None
            and previous.kind == TokenKind.NUMBER
            and tok.kind == TokenKind.NUMBER
            and tok.lexeme.startswith("-")
        ):
            logger.debug("Inserting '+' before %r at %d", tok.lexeme, tok.pos)
            tokens.append(Token(TokenKind.PLUS, "+", pos=tok.pos))

        tokens.append(tok)
        previous = tok

    tokens.append(Token(TokenKind.EOF, "", pos=len(source)))
    return tokens


def _scan(source: str) -> Iterator[Token]:
    """Yield raw tokens, INVALID ones included, in source order."""
    i = 0
    n = len(source)

    while i < n:
        ws = _WHITESPACE_RE.match(source, i)
        if ws:
            i = ws.end()
            continue

        best: tuple[int, int] | None = None
        best_kind = TokenKind.INVALID
        for kind, pattern, priority in _RULES:
            m = pattern.match(source, i)
            if m is None:
                continue
            rank = (m.end() - i, priority)
            if best is None or rank > best:
                best = rank
                best_kind = kind

        if best is None:
            yield Token(TokenKind.INVALID, source[i], pos=i)
            i += 1
            continue

        lexeme = source[i : i + best[0]]
        yield Token(best_kind, lexeme, _literal_value(best_kind, lexeme), pos=i)
        i += best[0]


def _literal_value(kind: TokenKind, lexeme: str) -> float | None:
    """Numeric value carried by NUMBER and CONSTANT tokens."""
    if kind == TokenKind.NUMBER:
        return float(lexeme)
    if kind == TokenKind.CONSTANT:
        return _CONSTANTS[lexeme]
    return None
