"""Syntax tree for compiled plural expressions.

Every node carries a value type. C has no boolean type, so comparisons and
logical operators yield ints there; here the tree keeps integers and booleans
apart and inserts explicit conversions where an operator expects the other
type (``x != 0`` for int to bool, ``x ? 1 : 0`` for bool to int).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class ValueType(str, Enum):
    """Type of the value a node evaluates to."""

    INTEGER = "integer"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class Literal:
    """Integer constant."""

    value: int

    @property
    def value_type(self) -> ValueType:
        return ValueType.INTEGER


@dataclass(frozen=True)
class Variable:
    """The free variable ``n``."""

    name: str = "n"

    @property
    def value_type(self) -> ValueType:
        return ValueType.INTEGER


@dataclass(frozen=True)
class Unary:
    """Unary operator applied to one operand."""

    operator: str
    operand: "Node"
    result_type: ValueType

    @property
    def value_type(self) -> ValueType:
        return self.result_type


@dataclass(frozen=True)
class Binary:
    """Binary operator applied to two operands."""

    operator: str
    left: "Node"
    right: "Node"
    result_type: ValueType

    @property
    def value_type(self) -> ValueType:
        return self.result_type


@dataclass(frozen=True)
class Ternary:
    """Conditional ``condition ? if_true : if_false``."""

    condition: "Node"
    if_true: "Node"
    if_false: "Node"

    @property
    def value_type(self) -> ValueType:
        return ValueType.INTEGER


Node = Union[Literal, Variable, Unary, Binary, Ternary]


def coerce(node: Node, target: ValueType) -> Node:
    """Wrap a node so it evaluates to the target type.

    Args:
        node: Node to convert.
        target: Expected type.

    Returns:
        The node itself if it already has the target type, otherwise a
        conversion node around it.
    """
    if node.value_type == target:
        return node

    if target == ValueType.BOOLEAN:
        return Binary("!=", node, Literal(0), ValueType.BOOLEAN)

    return Ternary(node, Literal(1), Literal(0))


def to_source(node: Node) -> str:
    """Render a node back to a fully parenthesized C expression."""
    if isinstance(node, Literal):
        return str(node.value)
    if isinstance(node, Variable):
        return node.name
    if isinstance(node, Unary):
        return f"{node.operator}({to_source(node.operand)})"
    if isinstance(node, Binary):
        return f"({to_source(node.left)} {node.operator} {to_source(node.right)})"
    return (
        f"({to_source(node.condition)} ? {to_source(node.if_true)}"
        f" : {to_source(node.if_false)})"
    )
