"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from calcexpr.errors import EvalError
from calcexpr.rules import tokenize
from calcexpr.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source with the arithmetic rules."""

    def _lex(source: str) -> list[Token]:
        return tokenize(source)

    return _lex


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_texts(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token texts match the expected list."""
    actual = [t.text for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_error(exc: EvalError, kind, start: int, end: int) -> None:
    """Assert the kind and span of an EvalError."""
    assert exc.kind == kind, f"Expected {kind}, got {exc.kind}"
    assert (exc.start, exc.end) == (start, end), (
        f"Expected span ({start}, {end}), got ({exc.start}, {exc.end})"
    )
