"""
Calcamabob - an arithmetic expression calculator.

Evaluates infix expressions with ``+ - * / ^``, parentheses, unary functions
such as ``sin(`` and ``log10(``, and the constants ``pi`` and ``e``.

    >>> from calcamabob import calculate
    >>> calculate("2+5*2^2")
    22.0
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.errors import CalcError, EvaluationError, ParseError, TokenizeError
from .core.expression_lang import calculate, evaluate, parse, parse_expr, tokenize

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "CalcError",
    "EvaluationError",
    "ParseError",
    "TokenizeError",
    "calculate",
    "evaluate",
    "parse",
    "parse_expr",
    "tokenize",
]
