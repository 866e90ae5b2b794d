"""Operator table for plural expressions.

Precedence (higher binds tighter) follows C:

    !            7   unary, right-assoc
    * / %        6
    + -          5
    <= < >= >    4
    == !=        3
    &&           2
    ||           1
    ?:           0   ternary, right-assoc

The ternary operator is stored under ':' because the parser turns a pending
'?' into ':' once the colon has been seen, at which point it becomes an
ordinary 3-ary operator.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Callable

from gettext_catalog.plurals.ast import ValueType


_INT = ValueType.INTEGER
_BOOL = ValueType.BOOLEAN


def c_divide(left: int, right: int) -> int:
    """Integer division truncating toward zero, as in C."""
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def c_modulo(left: int, right: int) -> int:
    """Remainder with the sign of the dividend, as in C."""
    return left - right * c_divide(left, right)


@dataclass(frozen=True)
class Operation:
    """An operator with its precedence and operand types.

    Attributes:
        symbol: Operator token.
        precedence: Binding strength, higher binds tighter.
        operand_types: Expected type of each operand, in order.
        result_type: Type of the result.
        function: Python implementation operating on already coerced values.
        left_associative: Whether equal-precedence operators group to the left.
    """

    symbol: str
    precedence: int
    operand_types: tuple[ValueType, ...]
    result_type: ValueType
    function: Callable[..., int | bool]
    left_associative: bool = True

    @property
    def arity(self) -> int:
        return len(self.operand_types)

    def should_be_processed_before(self, other: "Operation") -> bool:
        """Check if ``other`` (on the stack) must be applied before pushing self."""
        return (
            self.left_associative and self.precedence <= other.precedence
        ) or self.precedence < other.precedence


def _binary(symbol: str, precedence: int, function, operand: ValueType, result: ValueType) -> Operation:
    return Operation(symbol, precedence, (operand, operand), result, function)


OPERATIONS: dict[str, Operation] = {
    op.symbol: op
    for op in (
        Operation("!", 7, (_BOOL,), _BOOL, operator.not_, left_associative=False),
        _binary("*", 6, operator.mul, _INT, _INT),
        _binary("/", 6, c_divide, _INT, _INT),
        _binary("%", 6, c_modulo, _INT, _INT),
        _binary("+", 5, operator.add, _INT, _INT),
        _binary("-", 5, operator.sub, _INT, _INT),
        _binary("<=", 4, operator.le, _INT, _BOOL),
        _binary("<", 4, operator.lt, _INT, _BOOL),
        _binary(">=", 4, operator.ge, _INT, _BOOL),
        _binary(">", 4, operator.gt, _INT, _BOOL),
        _binary("==", 3, operator.eq, _INT, _BOOL),
        _binary("!=", 3, operator.ne, _INT, _BOOL),
        _binary("&&", 2, lambda a, b: a and b, _BOOL, _BOOL),
        _binary("||", 1, lambda a, b: a or b, _BOOL, _BOOL),
        Operation(
            ":",
            0,
            (_BOOL, _INT, _INT),
            _INT,
            lambda c, a, b: a if c else b,
            left_associative=False,
        ),
    )
}


def get_operation(symbol: str) -> Operation:
    """Look up an operator by its token.

    Raises:
        KeyError: If the token is not an operator.
    """
    return OPERATIONS[symbol]
