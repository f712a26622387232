"""
curvefire curve expression language.

Tokenizer, parser, AST builder, and evaluator for parametric curves.

Usage:
    from curvefire.core.expression_lang import build_assigns, build_function, evaluate

    assigns, resolver = build_assigns("u = 2 * t")
    fx = build_function("u ^ 2", resolver)
    result = evaluate(fx, 0.5, assigns)
    # result == 1.0
"""

from curvefire.core.expression_lang.builder import (
    VariableResolver,
    build_assigns,
    build_function,
)
from curvefire.core.expression_lang.evaluator import evaluate, evaluate_many
from curvefire.core.expression_lang.parser import parse_assigns, parse_func

__all__ = [
    "VariableResolver",
    "build_assigns",
    "build_function",
    "evaluate",
    "evaluate_many",
    "parse_assigns",
    "parse_func",
]
