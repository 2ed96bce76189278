"""
Calcamabob expression language.

Tokenizer, Pratt parser, and evaluator for arithmetic expressions.

Usage:
    from calcamabob.core.expression_lang import calculate, parse_expr, evaluate

    expr = parse_expr("(2 + 5*2)^2")
    result = evaluate(expr)
    # result == 144.0

    calculate("-cos(pi)")
    # 1.0
"""

from calcamabob.core.expression_lang.evaluator import evaluate
from calcamabob.core.expression_lang.parser import parse, parse_expr
from calcamabob.core.expression_lang.tokenizer import Token, TokenKind, tokenize


def calculate(source: str, *, strict: bool = False) -> float:
    """Tokenize, parse, and evaluate ``source`` in one step.

    Raises:
        TokenizeError: In strict mode, on an unrecognized character.
        ParseError: If the text is not a single valid expression.
        EvaluationError: If the expression uses an unknown function.
    """
    return evaluate(parse_expr(source, strict=strict))


__all__ = ["Token", "TokenKind", "calculate", "evaluate", "parse", "parse_expr", "tokenize"]
