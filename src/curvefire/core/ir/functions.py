"""
Compiled curve AST for curvefire.

A ``Function`` is one of the node models below. Trees are frozen and
strictly hierarchical: every child is owned by exactly one parent and
sequences are tuples, so a compiled curve cannot be changed after the builder
returns it.

Supports:
- The free parameter ``t`` and references to earlier ``where`` assignments
- Numeric literals and named constants (folded to ``Const``)
- Additive chains: +, -
- Multiplicative chains: *, /, // (Euclidean), % (Euclidean)
- Right-associative power chains: ^
- Negation
- Unary and binary named function calls
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from curvefire.core.registry import BinaryFn, UnaryFn

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class AdditiveOp(StrEnum):
    """Operators of an additive chain."""

    PLUS = "+"
    MINUS = "-"


class MultiplicativeOp(StrEnum):
    """Operators of a multiplicative chain."""

    TIMES = "*"
    DIVIDE = "/"
    FLOOR_DIVIDE = "//"
    MODULO = "%"


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class Var(BaseModel):
    """
    A variable reference.

    Examples:
        - Var(index=None) → the curve parameter t
        - Var(index=2) → the value of the third where-assignment
    """

    index: int | None = Field(default=None, ge=0, description="Assignment index, None for t")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        if self.index is None:
            return "t"
        return f"${self.index}"


class Const(BaseModel):
    """A numeric literal or named constant."""

    value: float = Field(description="The constant value")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return repr(self.value)


class Add(BaseModel):
    """
    Additive chain: the first term always carries PLUS.

    Example: a - b + c → Add(terms=((a, +), (b, -), (c, +)))
    """

    terms: tuple[tuple[Function, AdditiveOp], ...] = Field(min_length=2)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return _format_chain(self.terms)


class Mul(BaseModel):
    """Multiplicative chain: the first term always carries TIMES."""

    terms: tuple[tuple[Function, MultiplicativeOp], ...] = Field(min_length=2)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return _format_chain(self.terms)


class Exp(BaseModel):
    """Power chain in textual order: a ^ b ^ c → Exp(bases=(a, b, c))."""

    bases: tuple[Function, ...] = Field(min_length=2)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return "(" + " ^ ".join(str(b) for b in self.bases) + ")"


class Neg(BaseModel):
    """Arithmetic negation."""

    operand: Function

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"-{self.operand}"


class Call1(BaseModel):
    """Call of a unary registry function: sin t."""

    function: UnaryFn
    operand: Function

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.function.value}({self.operand})"


class Call2(BaseModel):
    """Call of a binary registry function: atan2 y x."""

    function: BinaryFn
    operands: tuple[Function, Function]

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        first, second = self.operands
        return f"{self.function.value}({first}, {second})"


def _format_chain(terms: tuple[tuple[Function, StrEnum], ...]) -> str:
    parts = [str(terms[0][0])]
    for operand, op in terms[1:]:
        parts.append(f"{op.value} {operand}")
    return "(" + " ".join(parts) + ")"


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Function = Var | Const | Add | Mul | Exp | Neg | Call1 | Call2

# Rebuild models for recursive forward references
Add.model_rebuild()
Mul.model_rebuild()
Exp.model_rebuild()
Neg.model_rebuild()
Call1.model_rebuild()
Call2.model_rebuild()
