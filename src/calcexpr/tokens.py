"""Token types, data structures, and span reconstruction helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    NUMBER = auto()  # 12, 1.5, 5.

    # Operators
    ADD = auto()  # +
    SUB = auto()  # -
    MUL = auto()  # *
    DIV = auto()  # /
    POW = auto()  # ^

    # Grouping
    LPAREN = auto()  # (
    RPAREN = auto()  # )

    # Whitespace run, kept in the stream so spans can be rebuilt
    SPACE = auto()


OPERATORS = frozenset(
    {TokenType.ADD, TokenType.SUB, TokenType.MUL, TokenType.DIV, TokenType.POW}
)


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token with its exact source text."""

    type: TokenType
    text: str

    @property
    def is_operator(self) -> bool:
        return self.type in OPERATORS

    @property
    def is_space(self) -> bool:
        return self.type == TokenType.SPACE


def token_span(tokens: list[Token], index: int) -> tuple[int, int]:
    """Return the (start, end) source offsets of ``tokens[index]``.

    Positions are not stored on tokens; they are rebuilt by summing the
    text lengths of every preceding token.
    """
    start = sum(len(tok.text) for tok in tokens[:index])
    return start, start + len(tokens[index].text)


def join_tokens(tokens: list[Token]) -> str:
    """Concatenate token texts back into source text."""
    return "".join(tok.text for tok in tokens)
