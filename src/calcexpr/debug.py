"""--debug token and tree dumps to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from calcexpr.ast import Add, Div, Mul, Node, Number, Pow, Sub
from calcexpr.tokens import Token

_OP_NAMES: dict[type, str] = {
    Add: "Add",
    Sub: "Sub",
    Mul: "Mul",
    Div: "Div",
    Pow: "Pow",
}


def dump_tokens(tokens: list[Token], *, file: TextIO = sys.stderr) -> None:
    """Print one line per token: offset, type and text."""
    offset = 0
    for tok in tokens:
        file.write(f"{offset:>4} {tok.type.name:<7} {tok.text!r}\n")
        offset += len(tok.text)


def dump_tree(node: Node, *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable expression tree to *file*."""
    pending: list[tuple[Node, int]] = [(node, 0)]
    while pending:
        current, depth = pending.pop()
        if isinstance(current, Number):
            file.write(f"{_indent(depth)}Number({current.value!r})\n")
            continue
        file.write(f"{_indent(depth)}{_OP_NAMES[type(current)]}\n")
        pending.append((current.right, depth + 1))
        pending.append((current.left, depth + 1))


def _indent(depth: int) -> str:
    return "  " * depth
