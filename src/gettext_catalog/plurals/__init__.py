"""Plural-form expression compiler.

Compiles the C-like formulas found in gettext ``Plural-Forms`` headers into
Python callables.

Example:
    from gettext_catalog.plurals import PluralExpression, parse_plural_forms

    expr = PluralExpression("n == 1 ? 0 : 1")
    expr.evaluate(1)  # 0

    nplurals, expr = parse_plural_forms("nplurals=3; plural=n==1 ? 0 : n==2 ? 1 : 2;")
"""

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
from gettext_catalog.plurals.expression import (
    DEFAULT_NUM_PLURALS,
    DEFAULT_PLURAL_EXPRESSION,
    PLURAL_FORMS_HEADER,
    PluralExpression,
    format_plural_forms,
    get_plural_expression,
    parse_plural_forms,
)
from gettext_catalog.plurals.operations import OPERATIONS, Operation, get_operation
from gettext_catalog.plurals.parser import PluralExpressionParser, compile_node

__all__ = [
    # AST
    "Binary",
    "Literal",
    "Node",
    "Ternary",
    "Unary",
    "ValueType",
    "Variable",
    "coerce",
    # Operations
    "OPERATIONS",
    "Operation",
    "get_operation",
    # Parser
    "PluralExpressionParser",
    "compile_node",
    # Expression
    "DEFAULT_NUM_PLURALS",
    "DEFAULT_PLURAL_EXPRESSION",
    "PLURAL_FORMS_HEADER",
    "PluralExpression",
    "format_plural_forms",
    "get_plural_expression",
    "parse_plural_forms",
]
