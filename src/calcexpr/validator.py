"""Single-pass structural check of a token stream before it is parsed."""

from __future__ import annotations

import logging

from calcexpr.errors import ErrorKind, ValidationError
from calcexpr.tokens import Token, TokenType

logger = logging.getLogger(__name__)

# Tokens that close an operand: a number or a parenthesised group.
_OPERAND_END = frozenset({TokenType.NUMBER, TokenType.RPAREN})


def validate(tokens: list[Token]) -> None:
    """Reject structurally invalid token sequences.

    Raises ValidationError with the index of the offending token, or -1 when
    the problem is only visible at end of input. Space tokens are skipped
    but keep their index so spans can be rebuilt from the original list.
    """
    open_parens = 0
    prev: Token | None = None
    last_index = -1

    for i, tok in enumerate(tokens):
        if tok.is_space:
            continue

        if tok.type == TokenType.LPAREN:
            open_parens += 1

        if tok.type == TokenType.RPAREN:
            # case: "1+)"
            if prev is not None and prev.is_operator:
                raise ValidationError(ErrorKind.OPERATOR_BEFORE_CLOSE_PAREN, i)
            # case: "(3))"
            if open_parens == 0:
                raise ValidationError(ErrorKind.UNBALANCED_PARENS, i)
            open_parens -= 1

        if tok.is_operator:
            # case: "3/*4"
            if prev is not None and prev.is_operator:
                raise ValidationError(ErrorKind.ADJACENT_OPERATORS, i)
            # case: "3(+"
            if prev is not None and prev.type == TokenType.LPAREN:
                raise ValidationError(ErrorKind.OPERATOR_AFTER_OPEN_PAREN, i)
            # case: "*5"
            if prev is None:
                raise ValidationError(ErrorKind.LEADING_OPERATOR, i)

        _check_juxtaposition(prev, tok, i)

        prev = tok
        last_index = i

    # case: "(5+4"
    if open_parens != 0:
        raise ValidationError(ErrorKind.UNBALANCED_PARENS, -1)
    if prev is None:
        raise ValidationError(ErrorKind.EMPTY_EXPRESSION, -1)
    # case: "5+"
    if prev.is_operator:
        raise ValidationError(ErrorKind.TRAILING_OPERATOR, last_index)

    logger.debug("validated %d tokens", len(tokens))


def _check_juxtaposition(prev: Token | None, tok: Token, index: int) -> None:
    """Reject operands placed side by side without an operator.

    A number directly before "(" is allowed; the parser reads it as an
    implicit multiplication.
    """
    if prev is None:
        return
    # case: "()"
    if prev.type == TokenType.LPAREN and tok.type == TokenType.RPAREN:
        raise ValidationError(ErrorKind.EMPTY_PARENS, index)
    # case: "1 2", "(1)2", "(1)(2)"
    if prev.type in _OPERAND_END and tok.type == TokenType.NUMBER:
        raise ValidationError(ErrorKind.MISSING_OPERATOR, index)
    if prev.type == TokenType.RPAREN and tok.type == TokenType.LPAREN:
        raise ValidationError(ErrorKind.MISSING_OPERATOR, index)
