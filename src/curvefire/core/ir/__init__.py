"""
curvefire Intermediate Representation (IR) types.

Re-exports the compiled curve AST so callers can write
``from curvefire.core import ir`` and ``ir.Add``.
"""

from .functions import (
    Add,
    AdditiveOp,
    Call1,
    Call2,
    Const,
    Exp,
    Function,
    Mul,
    MultiplicativeOp,
    Neg,
    Var,
)

__all__ = [
    "Add",
    "AdditiveOp",
    "Call1",
    "Call2",
    "Const",
    "Exp",
    "Function",
    "Mul",
    "MultiplicativeOp",
    "Neg",
    "Var",
]
