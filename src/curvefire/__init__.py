"""
curvefire - parametric curve compiler for trajectory games.

Players type ``x(t)``, ``y(t)`` and a ``where`` clause; curvefire compiles
them into an immutable AST and samples it every tick to move an object along
the curve.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.compiler import Parametric, Submission, compile_parametric, submit_functions
from .core.errors import CompileError, ConfigError, CurvefireError

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "CompileError",
    "ConfigError",
    "CurvefireError",
    "Parametric",
    "Submission",
    "compile_parametric",
    "submit_functions",
]
