"""
AST builder for curvefire curve expressions.

Walks the parse tree produced by the parser and constructs the compiled
``Function`` AST, resolving names against the named constants, the
function registries, and a ``VariableResolver`` that grows as the ``where``
clause is processed left to right.
"""

from __future__ import annotations

from curvefire.core.errors import (
    AssignToConstantError,
    DuplicateVariableError,
    UnknownFunctionError,
    UnknownVariableError,
    source_line,
)
from curvefire.core.expression_lang.parser import (
    PARAMETER_NAME,
    AddNode,
    AssignNode,
    Call1Node,
    Call2Node,
    ConstantNode,
    ExpNode,
    MulNode,
    NegNode,
    VariableNode,
    parse_assigns,
    parse_func,
)
from curvefire.core.expression_lang.tokenizer import Token
from curvefire.core.ir.functions import (
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
from curvefire.core.registry import lookup_binary, lookup_constant, lookup_unary

_ADDITIVE_OPS: dict[str, AdditiveOp] = {
    "+": AdditiveOp.PLUS,
    "-": AdditiveOp.MINUS,
}

_MULTIPLICATIVE_OPS: dict[str, MultiplicativeOp] = {
    "*": MultiplicativeOp.TIMES,
    "/": MultiplicativeOp.DIVIDE,
    "//": MultiplicativeOp.FLOOR_DIVIDE,
    "%": MultiplicativeOp.MODULO,
}


class VariableResolver:
    """
    Maps variable names to assignment indices.

    ``t`` is pre-seeded and maps to None. Every other name maps to the index
    of the where-assignment defining it. While an assignment's right-hand
    side is being built its own name is bound but not yet visible, so an
    assignment can only see ``t`` and the assignments before it.
    """

    def __init__(self) -> None:
        self._indices: dict[str, int | None] = {PARAMETER_NAME: None}
        self._pending: str | None = None
        self._count = 0

    def __contains__(self, name: str) -> bool:
        return name in self._indices and name != self._pending

    @property
    def names(self) -> list[str]:
        """User-defined names in definition order."""
        return [name for name, index in self._indices.items() if index is not None]

    def index_of(self, name: str) -> int | None:
        return self._indices[name]

    def is_bound(self, name: str) -> bool:
        """True if ``name`` was ever inserted, visible or not."""
        return name in self._indices

    def define(self, name: str) -> int:
        """Bind ``name`` to the next index and hide it until ``settle``."""
        index = self._count
        self._indices[name] = index
        self._pending = name
        self._count += 1
        return index

    def settle(self) -> None:
        self._pending = None


class _Builder:
    """Structural recursion from parse tree to ``Function``."""

    def __init__(self, resolver: VariableResolver, source: str) -> None:
        self.resolver = resolver
        self.source = source

    def _snippet(self, tok: Token) -> str | None:
        return source_line(self.source, tok.line)

    def build(self, node: object) -> Function:
        """Dispatch construction to the appropriate handler."""
        if isinstance(node, AddNode):
            return self._build_add(node)
        if isinstance(node, MulNode):
            return self._build_mul(node)
        if isinstance(node, NegNode):
            return self._build_neg(node)
        if isinstance(node, ExpNode):
            return self._build_exp(node)
        if isinstance(node, Call1Node):
            return self._build_call1(node)
        if isinstance(node, Call2Node):
            return self._build_call2(node)
        if isinstance(node, VariableNode):
            return self._build_variable(node)
        if isinstance(node, ConstantNode):
            return Const(value=float(node.token.value))

        raise TypeError(f"Unknown parse tree node: {type(node).__name__}")

    def _build_add(self, node: AddNode) -> Function:
        if len(node.operands) == 1:
            return self.build(node.operands[0])
        ops = [AdditiveOp.PLUS] + [_ADDITIVE_OPS[tok.value] for tok in node.operators]
        return Add(terms=tuple((self.build(o), op) for o, op in zip(node.operands, ops)))

    def _build_mul(self, node: MulNode) -> Function:
        if len(node.operands) == 1:
            return self.build(node.operands[0])
        ops = [MultiplicativeOp.TIMES] + [_MULTIPLICATIVE_OPS[tok.value] for tok in node.operators]
        return Mul(terms=tuple((self.build(o), op) for o, op in zip(node.operands, ops)))

    def _build_neg(self, node: NegNode) -> Function:
        inner = self.build(node.operand)
        if node.negated:
            return Neg(operand=inner)
        return inner

    def _build_exp(self, node: ExpNode) -> Function:
        if len(node.operands) == 1:
            return self.build(node.operands[0])
        return Exp(bases=tuple(self.build(o) for o in node.operands))

    def _build_call1(self, node: Call1Node) -> Function:
        fn = lookup_unary(node.name.value)
        if fn is None:
            raise UnknownFunctionError(
                node.name.value, 1, node.name.line, node.name.column, self._snippet(node.name)
            )
        return Call1(function=fn, operand=self.build(node.argument))

    def _build_call2(self, node: Call2Node) -> Function:
        fn = lookup_binary(node.name.value)
        if fn is None:
            raise UnknownFunctionError(
                node.name.value, 2, node.name.line, node.name.column, self._snippet(node.name)
            )
        first, second = node.arguments
        return Call2(function=fn, operands=(self.build(first), self.build(second)))

    def _build_variable(self, node: VariableNode) -> Function:
        tok = node.token
        constant = lookup_constant(tok.value)
        if constant is not None:
            return Const(value=constant)
        if tok.value not in self.resolver:
            raise UnknownVariableError(tok.value, tok.line, tok.column, self._snippet(tok))
        return Var(index=self.resolver.index_of(tok.value))

    def build_assign(self, node: AssignNode) -> Function:
        target = node.target
        name = target.value
        if self.resolver.is_bound(name):
            raise DuplicateVariableError(name, target.line, target.column, self._snippet(target))
        if lookup_constant(name) is not None:
            raise AssignToConstantError(name, target.line, target.column, self._snippet(target))

        self.resolver.define(name)
        try:
            return self.build(node.value)
        finally:
            self.resolver.settle()


def build_assigns(source: str) -> tuple[tuple[Function, ...], VariableResolver]:
    """Compile a where clause.

    Returns:
        The assignment list in definition order and the resolver holding
        every defined name, for compiling the curve expressions.

    Raises:
        ExpressionSyntaxError: If the clause does not parse.
        SemanticError: On unknown names, duplicates, or constant targets.
    """
    nodes = parse_assigns(source)
    resolver = VariableResolver()
    builder = _Builder(resolver, source)
    assigns = tuple(builder.build_assign(node) for node in nodes)
    return assigns, resolver


def build_function(
    source: str,
    resolver: VariableResolver | None = None,
    axis: str | None = None,
) -> Function:
    """Compile one curve expression against the names in ``resolver``.

    Args:
        source: Expression string, optionally prefixed with ``x(t) =``.
        resolver: Names defined by the where clause; only ``t`` if omitted.
        axis: Name the optional header must use.

    Raises:
        ExpressionSyntaxError: If the expression does not parse.
        SemanticError: On unknown variables or functions.
    """
    tree = parse_func(source, axis)
    return _Builder(resolver or VariableResolver(), source).build(tree)
