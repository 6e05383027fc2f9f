"""Evaluation pipeline: tokenize, validate, build, calculate."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from calcexpr.ast import Node
from calcexpr.errors import ErrorKind, EvalError, UnknownSymbolError, ValidationError
from calcexpr.eval import calculate
from calcexpr.lexer import Lexer
from calcexpr.parser import build
from calcexpr.rules import arithmetic_lexer
from calcexpr.tokens import Token, token_span
from calcexpr.validator import validate

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LineResult:
    """Outcome of evaluating one line of a multi-line document."""

    line: int
    text: str
    value: float | None = None
    error: EvalError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Calculator:
    """Evaluate arithmetic expressions.

    The lexer rule table is immutable, so one Calculator can be shared;
    every call works on its own tokens, stacks and tree.
    """

    def __init__(self, lexer: Lexer | None = None) -> None:
        self._lexer = lexer if lexer is not None else arithmetic_lexer()

    def tokenize(self, source: str) -> list[Token]:
        """Tokenize ``source``, raising EvalError on an unknown symbol."""
        try:
            return self._lexer.tokenize(source)
        except UnknownSymbolError as exc:
            raise EvalError(
                ErrorKind.UNKNOWN_SYMBOL,
                exc.offset,
                exc.offset + len(exc.symbol),
                source,
                symbol=exc.symbol,
            ) from exc

    def parse(self, source: str) -> Node:
        """Tokenize, validate and build the expression tree for ``source``."""
        tokens = self.tokenize(source)
        try:
            validate(tokens)
        except ValidationError as exc:
            if exc.index == -1:
                raise EvalError(exc.kind, -1, -1, source) from exc
            start, end = token_span(tokens, exc.index)
            raise EvalError(exc.kind, start, end, source) from exc
        return build(tokens)

    def eval(self, source: str) -> float:
        """Return the value of ``source`` or raise EvalError."""
        result = calculate(self.parse(source))
        logger.debug("%r = %r", source, result)
        return result

    def eval_line(self, text: str, line: int = 1) -> LineResult:
        """Evaluate ``text``, capturing an EvalError instead of raising it."""
        try:
            value = self.eval(text)
        except EvalError as exc:
            return LineResult(line, text, error=exc)
        return LineResult(line, text, value=value)

    def eval_lines(self, source: str, comments: bool = True) -> list[LineResult]:
        """Evaluate every non-blank line of ``source`` independently.

        With ``comments`` enabled, lines whose first non-space character is
        '#' are skipped.
        """
        results: list[LineResult] = []
        for lineno, text in enumerate(source.splitlines(), start=1):
            stripped = text.strip()
            if not stripped or (comments and stripped.startswith("#")):
                continue
            results.append(self.eval_line(text, lineno))
        return results


_default = Calculator()


def evaluate(source: str) -> float:
    """Evaluate an arithmetic expression with the shared default calculator."""
    return _default.eval(source)


def evaluate_lines(source: str, comments: bool = True) -> list[LineResult]:
    """Evaluate each non-blank line of a document with the default calculator."""
    return _default.eval_lines(source, comments)
