"""Compiled plural expressions and the ``Plural-Forms`` header.

GNU gettext page on plural forms:
https://www.gnu.org/software/gettext/manual/html_node/Plural-forms.html
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Callable

from gettext_catalog.errors import HeaderError
from gettext_catalog.plurals.ast import Node, to_source
from gettext_catalog.plurals.parser import PluralExpressionParser, compile_node


PLURAL_FORMS_HEADER = "Plural-Forms"

DEFAULT_NUM_PLURALS = 2
DEFAULT_PLURAL_EXPRESSION = "(n!=1)"

_PLURAL_FORMS_RE = re.compile(
    r"^\s*nplurals\s*=\s*(?P<nplurals>\d+)\s*;\s*plural\s*=\s*(?P<plural>.*?)\s*;?\s*$",
    re.DOTALL,
)


@dataclass(frozen=True)
class PluralExpression:
    """A compiled plural formula.

    Instances are immutable and can be evaluated from several threads at
    once.

    Attributes:
        source: The formula exactly as given.

    Example:
        expr = PluralExpression("n%10==1 && n%100!=11 ? 0 : n != 0 ? 1 : 2")
        expr.evaluate(21)  # 0
        expr.evaluate(5)   # 1

    Raises:
        ExpressionCompileError: If the formula cannot be compiled.
    """

    source: str
    tree: Node = field(init=False, repr=False, compare=False)
    _function: Callable[[int], int | bool] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        tree = PluralExpressionParser(self.source).parse()
        object.__setattr__(self, "tree", tree)
        object.__setattr__(self, "_function", compile_node(tree))

    def evaluate(self, n: int) -> int:
        """Return the plural-form index for ``n``.

        The result is not checked against the catalog's ``nplurals``.
        """
        return int(self._function(n))

    def __call__(self, n: int) -> int:
        return self.evaluate(n)

    def __str__(self) -> str:
        return self.source

    def to_c(self) -> str:
        """Render the compiled tree as a fully parenthesized C expression."""
        return to_source(self.tree)


@lru_cache(maxsize=128)
def get_plural_expression(source: str) -> PluralExpression:
    """Compile a formula, reusing earlier results for the same source."""
    return PluralExpression(source)


def parse_plural_forms(value: str) -> tuple[int, PluralExpression]:
    """Parse a ``Plural-Forms`` header value.

    Args:
        value: Header value, e.g. ``"nplurals=2; plural=(n != 1);"``.

    Returns:
        Tuple of (number of plural forms, compiled expression).

    Raises:
        HeaderError: If the value is not of the form ``nplurals=N; plural=EXPR;``.
        ExpressionCompileError: If the formula cannot be compiled.
    """
    match = _PLURAL_FORMS_RE.match(value)
    if not match:
        raise HeaderError(PLURAL_FORMS_HEADER, value, "expected 'nplurals=N; plural=EXPR;'")

    num_plurals = int(match.group("nplurals"))
    if num_plurals < 1:
        raise HeaderError(PLURAL_FORMS_HEADER, value, "nplurals must be at least 1")

    return num_plurals, get_plural_expression(match.group("plural"))


def format_plural_forms(num_plurals: int, expression: PluralExpression) -> str:
    """Format a ``Plural-Forms`` header value."""
    return f"nplurals={num_plurals}; plural={expression.source};"
