"""
Calcamabob Intermediate Representation (IR) types.

All types are re-exported from this package for convenience.
"""

from .expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    Grouping,
    NumberLiteral,
    UnaryCall,
    UnaryFunc,
    render,
)

__all__ = [
    "BinaryExpr",
    "BinaryOp",
    "Expr",
    "Grouping",
    "NumberLiteral",
    "UnaryCall",
    "UnaryFunc",
    "render",
]
