"""Core curvefire functionality: IR, expression compiler, evaluator, trajectories, configuration."""

from . import ir
from .compiler import QUICK_HELP, Parametric, Submission, compile_parametric, submit_functions
from .errors import (
    AssignToConstantError,
    CompileError,
    ConfigError,
    CurvefireError,
    DuplicateVariableError,
    ErrorContext,
    ExpressionSyntaxError,
    SemanticError,
    UnknownFunctionError,
    UnknownVariableError,
)
from .manifest import CurvefireConfig, load_config
from .trajectory import Trajectory, heading

__all__ = [
    "ir",
    "QUICK_HELP",
    "Parametric",
    "Submission",
    "compile_parametric",
    "submit_functions",
    "CurvefireError",
    "CompileError",
    "ConfigError",
    "ErrorContext",
    "ExpressionSyntaxError",
    "SemanticError",
    "UnknownVariableError",
    "UnknownFunctionError",
    "DuplicateVariableError",
    "AssignToConstantError",
    "CurvefireConfig",
    "load_config",
    "Trajectory",
    "heading",
]
