"""Expression builder: converts a validated token stream into a tree.

Classic shunting-yard: one stack of pending operator tokens and one stack of
finished nodes, filled by a single left-to-right scan.
"""

from __future__ import annotations

from calcexpr.ast import Add, BinaryNode, Div, Mul, Node, Number, Pow, Sub
from calcexpr.tokens import Token, TokenType

PRECEDENCE: dict[TokenType, int] = {
    TokenType.POW: 3,
    TokenType.MUL: 2,
    TokenType.DIV: 2,
    TokenType.ADD: 1,
    TokenType.SUB: 1,
}

_NODE_TYPES: dict[TokenType, type[BinaryNode]] = {
    TokenType.ADD: Add,
    TokenType.SUB: Sub,
    TokenType.MUL: Mul,
    TokenType.DIV: Div,
    TokenType.POW: Pow,
}

_IMPLICIT_MUL = Token(TokenType.MUL, "")


class Builder:
    """Shunting-yard tree builder. Expects tokens that already passed validate()."""

    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._operators: list[Token] = []
        self._nodes: list[Node] = []

    def build(self) -> Node:
        prev: Token | None = None
        for tok in self._tokens:
            if tok.is_space:
                continue
            if tok.type == TokenType.NUMBER:
                self._nodes.append(Number(float(tok.text)))
            elif tok.is_operator:
                self._push_operator(tok)
            elif tok.type == TokenType.LPAREN:
                # "2(3+4)" means "2*(3+4)"
                if prev is not None and prev.type == TokenType.NUMBER:
                    self._operators.append(_IMPLICIT_MUL)
                self._operators.append(tok)
            elif tok.type == TokenType.RPAREN:
                self._close_group()
            prev = tok

        while self._operators:
            self._reduce(self._operators.pop())
        return self._nodes.pop()

    def _push_operator(self, tok: Token) -> None:
        # Reduce while the stacked operator binds at least as tightly. Using >=
        # makes every operator left-associative, "^" included: 2^3^2 == (2^3)^2.
        while self._operators:
            top = self._operators[-1]
            if top.type == TokenType.LPAREN:
                break
            if PRECEDENCE[top.type] < PRECEDENCE[tok.type]:
                break
            self._reduce(self._operators.pop())
        self._operators.append(tok)

    def _close_group(self) -> None:
        while True:
            op = self._operators.pop()
            if op.type == TokenType.LPAREN:
                return
            self._reduce(op)

    def _reduce(self, op: Token) -> None:
        right = self._nodes.pop()
        left = self._nodes.pop()
        self._nodes.append(_NODE_TYPES[op.type](left, right))


def build(tokens: list[Token]) -> Node:
    """Convenience function: build the expression tree for validated tokens."""
    return Builder(tokens).build()
