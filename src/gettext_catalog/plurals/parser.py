"""Shunting-yard compiler for gettext plural formulas.

The grammar is the C subset used in ``Plural-Forms`` headers: the variable
``n``, integer literals, parentheses, the operators listed in
:mod:`gettext_catalog.plurals.operations` and the ternary ``?:``.

Parsing builds a typed syntax tree, which :func:`compile_node` turns into a
plain Python closure mapping ``n`` to a plural-form index.

See: https://www.gnu.org/software/gettext/manual/html_node/Plural-forms.html
"""

from __future__ import annotations

import re
from typing import Callable

from gettext_catalog.errors import (
    EmptyExpressionError,
    InvalidCharacterError,
    MalformedExpressionError,
    MissingQuestionMarkError,
)
from gettext_catalog.plurals.ast import (
    Binary,
    Literal,
    Node,
    Ternary,
    Unary,
    ValueType,
    Variable,
    coerce,
)
from gettext_catalog.plurals.operations import get_operation


_WHITESPACE = re.compile(r"\s+")
_NUMBER = re.compile(r"\d+", re.ASCII)
_OPERATOR = re.compile(r"==|!=|>=|<=|&&|\|\||[+\-*/<>%!]")

_OPEN_PAREN = "("
_QUESTION = "?"
_COLON = ":"


class PluralExpressionParser:
    """Parses a plural formula into a syntax tree.

    Example:
        tree = PluralExpressionParser("n != 1").parse()
        func = compile_node(tree)
        func(2)  # 1
    """

    def __init__(self, expression: str) -> None:
        self._expression = expression
        self._operands: list[Node] = []
        self._operators: list[str] = []
        self._position = 0

    def parse(self) -> Node:
        """Parse the expression.

        Returns:
            Root node; always of integer type.

        Raises:
            EmptyExpressionError: The expression is empty or blank.
            InvalidCharacterError: An unknown character was found.
            MissingQuestionMarkError: A ':' has no matching '?'.
            MalformedExpressionError: Operators and operands do not match up.
        """
        if not self._expression or self._expression.isspace():
            raise EmptyExpressionError(self._expression)

        self._operands.clear()
        self._operators.clear()
        self._position = 0

        while True:
            self._skip_whitespace()
            if self._position >= len(self._expression):
                break
            if not self._parse_next_token():
                raise InvalidCharacterError(
                    self._expression,
                    self._position,
                    self._expression[self._position],
                )

        while self._operators:
            self._apply(self._operators.pop())

        if len(self._operands) != 1:
            raise MalformedExpressionError(
                f"Expression leaves {len(self._operands)} operands instead of one",
                self._expression,
            )

        # A bare comparison such as "n != 1" still has to produce an index
        return coerce(self._operands.pop(), ValueType.INTEGER)

    # -------------------------------------------------------------------------
    # Tokens
    # -------------------------------------------------------------------------

    def _skip_whitespace(self) -> None:
        match = _WHITESPACE.match(self._expression, self._position)
        if match:
            self._position = match.end()

    def _parse_next_token(self) -> bool:
        return (
            self._parse_variable()
            or self._parse_number()
            or self._parse_operator()
            or self._parse_open_paren()
            or self._parse_close_paren()
            or self._parse_question_mark()
            or self._parse_colon()
        )

    def _parse_variable(self) -> bool:
        if self._expression[self._position] != "n":
            return False
        self._operands.append(Variable())
        self._position += 1
        return True

    def _parse_number(self) -> bool:
        match = _NUMBER.match(self._expression, self._position)
        if not match:
            return False
        self._operands.append(Literal(int(match.group())))
        self._position = match.end()
        return True

    def _parse_operator(self) -> bool:
        match = _OPERATOR.match(self._expression, self._position)
        if not match:
            return False

        symbol = match.group()
        current = get_operation(symbol)

        while self._operators:
            top = self._operators[-1]
            if top in (_OPEN_PAREN, _QUESTION):
                break
            if not current.should_be_processed_before(get_operation(top)):
                break
            self._apply(self._operators.pop())

        self._operators.append(symbol)
        self._position = match.end()
        return True

    def _parse_open_paren(self) -> bool:
        if self._expression[self._position] != _OPEN_PAREN:
            return False
        self._operators.append(_OPEN_PAREN)
        self._position += 1
        return True

    def _parse_close_paren(self) -> bool:
        if self._expression[self._position] != ")":
            return False

        while self._operators and self._operators[-1] != _OPEN_PAREN:
            self._apply(self._operators.pop())

        if not self._operators:
            raise MalformedExpressionError(
                f"Unbalanced ')' at position {self._position}",
                self._expression,
                self._position,
            )

        self._operators.pop()
        self._position += 1
        return True

    def _parse_question_mark(self) -> bool:
        if self._expression[self._position] != _QUESTION:
            return False

        while self._operators and self._operators[-1] not in (_OPEN_PAREN, _QUESTION, _COLON):
            self._apply(self._operators.pop())

        self._operators.append(_QUESTION)
        self._position += 1
        return True

    def _parse_colon(self) -> bool:
        if self._expression[self._position] != _COLON:
            return False

        # The topmost pending '?' becomes ':' in place; operators pushed after
        # it are set aside and restored on top afterwards.
        side_buffer: list[str] = []
        while self._operators and self._operators[-1] != _QUESTION:
            side_buffer.append(self._operators.pop())

        found = bool(self._operators)
        if found:
            self._operators[-1] = _COLON

        while side_buffer:
            self._operators.append(side_buffer.pop())

        if not found:
            raise MissingQuestionMarkError(self._expression, self._position)

        self._position += 1
        return True

    # -------------------------------------------------------------------------
    # Operator application
    # -------------------------------------------------------------------------

    def _apply(self, symbol: str) -> None:
        if symbol == _OPEN_PAREN:
            raise MalformedExpressionError("Unbalanced '('", self._expression)
        if symbol == _QUESTION:
            raise MalformedExpressionError("Found '?' without ':'", self._expression)

        operation = get_operation(symbol)
        if len(self._operands) < operation.arity:
            raise MalformedExpressionError(
                f"Missing operand for '{'?:' if symbol == _COLON else symbol}'",
                self._expression,
            )

        args = self._operands[-operation.arity:]
        del self._operands[-operation.arity:]
        args = [coerce(arg, t) for arg, t in zip(args, operation.operand_types)]

        if operation.arity == 1:
            node: Node = Unary(symbol, args[0], operation.result_type)
        elif operation.arity == 2:
            node = Binary(symbol, args[0], args[1], operation.result_type)
        else:
            node = Ternary(args[0], args[1], args[2])

        self._operands.append(node)


def compile_node(node: Node) -> Callable[[int], int | bool]:
    """Compile a syntax tree into a closure over ``n``.

    ``&&``, ``||`` and ``?:`` only evaluate the operands they need, so a
    branch such as ``n == 0 ? 0 : 10 / n`` never divides by zero.
    """
    if isinstance(node, Literal):
        value = node.value
        return lambda n: value

    if isinstance(node, Variable):
        return lambda n: n

    if isinstance(node, Unary):
        operand = compile_node(node.operand)
        unary = get_operation(node.operator).function
        return lambda n: unary(operand(n))

    if isinstance(node, Binary):
        left = compile_node(node.left)
        right = compile_node(node.right)
        if node.operator == "&&":
            return lambda n: bool(left(n)) and bool(right(n))
        if node.operator == "||":
            return lambda n: bool(left(n)) or bool(right(n))
        binary = get_operation(node.operator).function
        return lambda n: binary(left(n), right(n))

    if isinstance(node, Ternary):
        condition = compile_node(node.condition)
        if_true = compile_node(node.if_true)
        if_false = compile_node(node.if_false)
        return lambda n: if_true(n) if condition(n) else if_false(n)

    raise TypeError(f"Unknown node type: {type(node).__name__}")
