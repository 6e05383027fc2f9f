"""Post-order evaluation of expression trees with IEEE-754 float semantics.

Python raises on float division by zero and on some pow() domain errors.
Here those cases produce inf, -inf or nan instead, the way hardware floats do.
"""

from __future__ import annotations

import math

from calcexpr.ast import Add, Div, Mul, Node, Number, Pow, Sub


def calculate(node: Node) -> float:
    """Return the value of the expression tree rooted at ``node``.

    Walks the tree post-order with an explicit stack, so tree depth is not
    bounded by the interpreter recursion limit.
    """
    values: list[float] = []
    pending: list[tuple[Node, bool]] = [(node, False)]
    while pending:
        current, children_done = pending.pop()
        if isinstance(current, Number):
            values.append(current.value)
            continue
        if not children_done:
            pending.append((current, True))
            pending.append((current.right, False))
            pending.append((current.left, False))
            continue
        right = values.pop()
        left = values.pop()
        values.append(_apply(current, left, right))
    return values.pop()


def _apply(node: Node, left: float, right: float) -> float:
    if isinstance(node, Add):
        return left + right
    if isinstance(node, Sub):
        return left - right
    if isinstance(node, Mul):
        return left * right
    if isinstance(node, Div):
        return divide(left, right)
    if isinstance(node, Pow):
        return power(left, right)

    raise TypeError(f"unknown expression node: {type(node).__name__}")


def divide(a: float, b: float) -> float:
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _is_odd_integer(x: float) -> bool:
    return math.isfinite(x) and x.is_integer() and x % 2 == 1


def power(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        # Zero to a negative power, or a negative base to a fractional power
        if base == 0:
            if _is_odd_integer(exponent):
                return math.copysign(math.inf, base)
            return math.inf
        return math.nan
