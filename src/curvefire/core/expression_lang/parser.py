"""
Recursive descent parser for curvefire curve expressions.

Produces a parse tree that mirrors the grammar one node per rule; the builder
turns it into the compiled ``Function`` AST. The whole source is parsed
before any name is resolved, so a syntax error always wins over a semantic
one.

Grammar (precedence low to high):
    assigns     → "where"? sep* (assign (sep+ assign)*)? sep* EOF
    assign      → IDENT "=" expr
    func        → header? expr EOF
    header      → IDENT "(" "t" ")" "="
    expr        → add
    add         → mul (("+" | "-") mul)*
    mul         → neg (("*" | "/" | "//" | "%") neg)*
    neg         → "-"? exp
    exp         → call ("^" call)*
    call        → IDENT primary primary | IDENT primary | primary
    primary     → "(" expr ")" | IDENT | NUMBER
    sep         → NEWLINE | ";"

Newlines separate assignments. They are ordinary whitespace inside
parentheses and everywhere in a single-expression source.
Parentheses nest at most MAX_NESTING deep.
"""

from __future__ import annotations

from dataclasses import dataclass

from curvefire.core.errors import ExpressionSyntaxError, source_line
from curvefire.core.expression_lang.tokenizer import Token, TokenKind, tokenize

# ---------------------------------------------------------------------------
# Parse tree
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ConstantNode:
    token: Token


@dataclass(frozen=True)
class VariableNode:
    token: Token


@dataclass(frozen=True)
class Call1Node:
    name: Token
    argument: PrimaryNode


@dataclass(frozen=True)
class Call2Node:
    name: Token
    arguments: tuple[PrimaryNode, PrimaryNode]


@dataclass(frozen=True)
class ExpNode:
    operands: tuple[CallNode, ...]


@dataclass(frozen=True)
class NegNode:
    negated: bool
    operand: ExpNode


@dataclass(frozen=True)
class MulNode:
    """``operators[i]`` sits between ``operands[i]`` and ``operands[i + 1]``."""

    operands: tuple[NegNode, ...]
    operators: tuple[Token, ...]


@dataclass(frozen=True)
class AddNode:
    operands: tuple[MulNode, ...]
    operators: tuple[Token, ...]


@dataclass(frozen=True)
class AssignNode:
    target: Token
    value: AddNode


PrimaryNode = AddNode | VariableNode | ConstantNode
CallNode = Call1Node | Call2Node | PrimaryNode

_PRIMARY_START = (TokenKind.LPAREN, TokenKind.IDENT, TokenKind.NUMBER)
_ADDITIVE = (TokenKind.PLUS, TokenKind.MINUS)
_MULTIPLICATIVE = (
    TokenKind.STAR,
    TokenKind.SLASH,
    TokenKind.DOUBLE_SLASH,
    TokenKind.PERCENT,
)
_SEPARATORS = (TokenKind.NEWLINE, TokenKind.SEMICOLON)

WHERE_KEYWORD = "where"
PARAMETER_NAME = "t"

# Deepest parenthesis nesting accepted. Parser, builder and evaluator each
# recurse per level, so this bounds their stack use.
MAX_NESTING = 32


class _Parser:
    """Recursive descent parser over a token list."""

    def __init__(self, tokens: list[Token], source: str, newlines_separate: bool) -> None:
        self.tokens = tokens
        self.source = source
        self.newlines_separate = newlines_separate
        self.pos = 0
        self.depth = 0

    @property
    def current(self) -> Token:
        self._skip_insignificant()
        return self.tokens[self.pos]

    def _skip_insignificant(self) -> None:
        while self.tokens[self.pos].kind == TokenKind.NEWLINE and (
            not self.newlines_separate or self.depth > 0
        ):
            self.pos += 1

    def peek(self, offset: int) -> Token:
        """Look past the current token, ignoring newlines."""
        self._skip_insignificant()
        idx = self.pos
        while offset > 0 and idx < len(self.tokens) - 1:
            idx += 1
            if self.tokens[idx].kind != TokenKind.NEWLINE:
                offset -= 1
        return self.tokens[idx]

    def advance(self) -> Token:
        tok = self.current
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return tok

    def expect(self, kind: TokenKind) -> Token:
        tok = self.current
        if tok.kind != kind:
            raise self.error(tok, f"Expected {kind}, got {tok.kind} ({tok.value!r})")
        return self.advance()

    def match(self, *kinds: TokenKind) -> Token | None:
        if self.current.kind in kinds:
            return self.advance()
        return None

    def error(self, tok: Token, detail: str) -> ExpressionSyntaxError:
        return ExpressionSyntaxError(
            tok.line,
            tok.column,
            detail=detail,
            snippet=source_line(self.source, tok.line),
        )

    # -- Top-level rules --

    def parse_assigns(self) -> list[AssignNode]:
        """'where'? sep* (assign (sep+ assign)*)? sep* EOF"""
        first = self.current
        if (
            first.kind == TokenKind.IDENT
            and first.value == WHERE_KEYWORD
            and self.peek(1).kind != TokenKind.EQUALS
        ):
            self.advance()

        assigns: list[AssignNode] = []
        self._skip_separators()
        while self.current.kind != TokenKind.EOF:
            assigns.append(self.parse_assign())
            if self.current.kind == TokenKind.EOF:
                break
            if self.current.kind not in _SEPARATORS:
                raise self.error(
                    self.current,
                    f"Expected end of assignment, got {self.current.value!r}",
                )
            self._skip_separators()
        return assigns

    def _skip_separators(self) -> None:
        while self.match(*_SEPARATORS):
            pass

    def parse_assign(self) -> AssignNode:
        """IDENT '=' expr"""
        target = self.expect(TokenKind.IDENT)
        self.expect(TokenKind.EQUALS)
        return AssignNode(target=target, value=self.parse_expr())

    def parse_func(self, axis: str | None = None) -> AddNode:
        """header? expr EOF"""
        if self._at_header():
            name = self.advance()
            if axis is not None and name.value != axis:
                raise self.error(name, f"Expected {axis}(t), got {name.value}(t)")
            for _ in range(4):
                self.advance()

        expr = self.parse_expr()
        if self.current.kind != TokenKind.EOF:
            raise self.error(
                self.current,
                f"Unexpected token after expression: {self.current.value!r}",
            )
        return expr

    def _at_header(self) -> bool:
        kinds = [self.peek(i) for i in range(5)]
        return (
            kinds[0].kind == TokenKind.IDENT
            and kinds[1].kind == TokenKind.LPAREN
            and kinds[2].kind == TokenKind.IDENT
            and kinds[2].value == PARAMETER_NAME
            and kinds[3].kind == TokenKind.RPAREN
            and kinds[4].kind == TokenKind.EQUALS
        )

    # -- Expression rules --

    def parse_expr(self) -> AddNode:
        return self.parse_add()

    def parse_add(self) -> AddNode:
        """mul (('+' | '-') mul)*"""
        operands = [self.parse_mul()]
        operators: list[Token] = []
        while self.current.kind in _ADDITIVE:
            operators.append(self.advance())
            operands.append(self.parse_mul())
        return AddNode(operands=tuple(operands), operators=tuple(operators))

    def parse_mul(self) -> MulNode:
        """neg (('*' | '/' | '//' | '%') neg)*"""
        operands = [self.parse_neg()]
        operators: list[Token] = []
        while self.current.kind in _MULTIPLICATIVE:
            operators.append(self.advance())
            operands.append(self.parse_neg())
        return MulNode(operands=tuple(operands), operators=tuple(operators))

    def parse_neg(self) -> NegNode:
        """'-'? exp"""
        negated = self.match(TokenKind.MINUS) is not None
        return NegNode(negated=negated, operand=self.parse_exp())

    def parse_exp(self) -> ExpNode:
        """call ('^' call)*"""
        operands = [self.parse_call()]
        while self.match(TokenKind.CARET):
            operands.append(self.parse_call())
        return ExpNode(operands=tuple(operands))

    def parse_call(self) -> CallNode:
        """IDENT primary primary | IDENT primary | primary"""
        tok = self.current
        if tok.kind != TokenKind.IDENT or self.peek(1).kind not in _PRIMARY_START:
            return self.parse_primary()

        # A newline after the name ends a where-assignment, so peek() alone
        # cannot tell; re-check once the name is consumed.
        name = self.advance()
        if self.current.kind not in _PRIMARY_START:
            return VariableNode(token=name)
        first = self.parse_primary()
        if self.current.kind in _PRIMARY_START:
            second = self.parse_primary()
            return Call2Node(name=name, arguments=(first, second))
        return Call1Node(name=name, argument=first)

    def parse_primary(self) -> PrimaryNode:
        """'(' expr ')' | IDENT | NUMBER"""
        tok = self.current

        if tok.kind == TokenKind.LPAREN:
            if self.depth >= MAX_NESTING:
                raise self.error(tok, f"Parentheses nested deeper than {MAX_NESTING}")
            self.advance()
            self.depth += 1
            expr = self.parse_expr()
            self.depth -= 1
            self.expect(TokenKind.RPAREN)
            return expr

        if tok.kind == TokenKind.IDENT:
            self.advance()
            return VariableNode(token=tok)

        if tok.kind == TokenKind.NUMBER:
            self.advance()
            return ConstantNode(token=tok)

        if tok.kind == TokenKind.EOF:
            raise self.error(tok, "Unexpected end of input")
        raise self.error(tok, f"Unexpected token: {tok.kind} ({tok.value!r})")


def parse_assigns(source: str) -> list[AssignNode]:
    """Parse a where clause into its assignments, in textual order.

    Raises:
        ExpressionSyntaxError: If the clause does not match the grammar.
    """
    parser = _Parser(tokenize(source), source, newlines_separate=True)
    return parser.parse_assigns()


def parse_func(source: str, axis: str | None = None) -> AddNode:
    """Parse a single curve expression, optionally written as ``x(t) = ...``.

    Args:
        source: Expression string (e.g., "2 * sin t")
        axis: Name the optional ``name(t) =`` header must use.

    Raises:
        ExpressionSyntaxError: If the expression is invalid.
    """
    parser = _Parser(tokenize(source), source, newlines_separate=False)
    return parser.parse_func(axis)
