"""Matcher table for arithmetic expressions."""

from __future__ import annotations

from calcexpr.lexer import Cursor, Lexer, Matcher, char_run, one_char
from calcexpr.tokens import Token, TokenType

WHITESPACE = " \t\n\r"


def match_number(cursor: Cursor) -> Token | None:
    text = cursor.read_int_or_float()
    if text:
        return Token(TokenType.NUMBER, text)
    return None


# Order matters: the first rule that matches at a position wins.
ARITHMETIC_RULES: tuple[tuple[TokenType, Matcher], ...] = (
    (TokenType.NUMBER, match_number),
    (TokenType.ADD, one_char("+", TokenType.ADD)),
    (TokenType.SUB, one_char("-", TokenType.SUB)),
    (TokenType.MUL, one_char("*", TokenType.MUL)),
    (TokenType.DIV, one_char("/", TokenType.DIV)),
    (TokenType.POW, one_char("^", TokenType.POW)),
    (TokenType.LPAREN, one_char("(", TokenType.LPAREN)),
    (TokenType.RPAREN, one_char(")", TokenType.RPAREN)),
    (TokenType.SPACE, char_run(WHITESPACE, TokenType.SPACE)),
)


def arithmetic_lexer() -> Lexer:
    """Return a lexer for numbers, ``+ - * / ^``, parentheses and whitespace."""
    return Lexer(ARITHMETIC_RULES)


def tokenize(source: str) -> list[Token]:
    """Convenience function: tokenize an arithmetic expression."""
    return arithmetic_lexer().tokenize(source)
