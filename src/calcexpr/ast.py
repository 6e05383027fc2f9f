"""Expression tree node types."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Number:
    """Numeric literal."""

    value: float


@dataclass(frozen=True, slots=True)
class Add:
    left: Node
    right: Node


@dataclass(frozen=True, slots=True)
class Sub:
    left: Node
    right: Node


@dataclass(frozen=True, slots=True)
class Mul:
    left: Node
    right: Node


@dataclass(frozen=True, slots=True)
class Div:
    left: Node
    right: Node


@dataclass(frozen=True, slots=True)
class Pow:
    """Exponentiation: left ^ right."""

    left: Node
    right: Node


BinaryNode = Add | Sub | Mul | Div | Pow
Node = Number | BinaryNode
