"""
Expression types for the Calcamabob IR.

The parser builds a strict tree of these nodes and the evaluator reduces it
to a float. Nodes are frozen pydantic models, so two trees compare equal when
their structure and values match.

Supports:
- Numeric literals, including the folded constants pi and e: 2.5, pi
- Binary arithmetic: +, -, *, /, ^
- Unary function calls: sin(x), log10(x), degrees(x)
- Explicit grouping: (x)
"""

from __future__ import annotations

import math
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class BinaryOp(StrEnum):
    """Binary arithmetic operators."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"


class UnaryFunc(StrEnum):
    """Built-in unary functions, keyed by their call lexeme."""

    SQRT = "sqrt("
    ASIN = "asin("
    ACOS = "acos("
    ATAN = "atan("
    SIN = "sin("
    COS = "cos("
    TAN = "tan("
    SINH = "sinh("
    COSH = "cosh("
    TANH = "tanh("
    LN = "ln("
    LOG10 = "log10("
    LOG2 = "log2("
    ABS = "abs("
    ROUND = "round("
    TRUNC = "trunc("
    RADIAN = "radian("
    DEGREES = "degrees("

    @classmethod
    def from_lexeme(cls, lexeme: str) -> UnaryFunc | None:
        """Resolve a call lexeme such as ``"sin("``; None if unsupported."""
        try:
            return cls(lexeme)
        except ValueError:
            return None


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class NumberLiteral(BaseModel):
    """A numeric literal or a named constant resolved at lex time."""

    value: float = Field(description="The literal value")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        if self.value == math.pi:
            return "pi"
        if self.value == math.e:
            return "e"
        return repr(self.value)


class UnaryCall(BaseModel):
    """
    Application of a built-in function to one operand.

    ``name`` is the call lexeme including its opening parenthesis, e.g.
    ``"sin("``. ``func`` is always derived from it on construction and stays
    None for names the evaluator does not know. Passing a ``func`` that
    disagrees with ``name`` is a validation error.
    """

    name: str = Field(description="Call lexeme, e.g. 'sin('")
    func: UnaryFunc | None = Field(
        default=None, validate_default=True, description="Resolved function"
    )
    operand: Expr

    model_config = ConfigDict(frozen=True)

    @field_validator("func")
    @classmethod
    def resolve_func(cls, v: UnaryFunc | None, info: ValidationInfo) -> UnaryFunc | None:
        """Resolve the function from the call name."""
        name = info.data.get("name")
        resolved = UnaryFunc.from_lexeme(name) if isinstance(name, str) else None
        if v is not None and v != resolved:
            raise ValueError(f"function {v.value!r} does not match call name {name!r}")
        return resolved

    def __str__(self) -> str:
        return render(self)


class Grouping(BaseModel):
    """An explicitly parenthesized sub-expression."""

    inner: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return render(self)


class BinaryExpr(BaseModel):
    """Binary operation: left op right."""

    left: Expr
    op: BinaryOp
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return render(self)


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = NumberLiteral | UnaryCall | Grouping | BinaryExpr

# Rebuild models for recursive forward references
UnaryCall.model_rebuild()
Grouping.model_rebuild()
BinaryExpr.model_rebuild()


def render(expr: Expr) -> str:
    """Render a tree in fully parenthesized infix form.

    Walks the tree with an explicit stack, so long operator chains render
    without running into the interpreter's recursion limit.
    """
    parts: list[str] = []
    stack: list[Expr | str] = [expr]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, BinaryExpr):
            stack.extend([")", item.right, f" {item.op.value} ", item.left, "("])
        elif isinstance(item, Grouping):
            stack.extend([")", item.inner, "("])
        elif isinstance(item, UnaryCall):
            stack.extend([")", item.operand, item.name])
        else:
            parts.append(str(item))
    return "".join(parts)
