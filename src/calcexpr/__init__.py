"""Arithmetic expression evaluator."""

from __future__ import annotations

from calcexpr.calculator import Calculator, LineResult, evaluate, evaluate_lines
from calcexpr.errors import ErrorKind, EvalError

__version__ = "0.1.0"

__all__ = [
    "Calculator",
    "ErrorKind",
    "EvalError",
    "LineResult",
    "evaluate",
    "evaluate_lines",
]
