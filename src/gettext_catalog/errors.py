"""Exception hierarchy for gettext catalogs.

All errors raised by this package derive from :class:`CatalogError`:

- FormatError: malformed PO, MO or JSON input (always fatal to the read)
- UnsupportedFormatError: no codec registered for a file extension
- HeaderError: malformed header values (e.g. ``Plural-Forms``)
- ExpressionCompileError: plural formula could not be compiled
"""

from __future__ import annotations


# =============================================================================
# Base
# =============================================================================


class CatalogError(Exception):
    """Base exception for catalog errors."""

    pass


# =============================================================================
# Codec Errors
# =============================================================================


class FormatError(CatalogError):
    """Malformed catalog data encountered while reading a stream."""

    def __init__(
        self,
        message: str,
        format_name: str | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.format_name = format_name
        self.line = line
        self.column = column

        location = ""
        if line is not None:
            location = f" (line {line}"
            if column is not None:
                location += f", column {column}"
            location += ")"

        prefix = f"[{format_name}] " if format_name else ""
        super().__init__(f"{prefix}{message}{location}")


class UnsupportedFormatError(CatalogError):
    """No codec is registered for the requested format."""

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        self.name = name
        self.available = available or []
        msg = f"Format '{name}' is not supported"
        if self.available:
            msg += f". Available: {', '.join(self.available)}"
        super().__init__(msg)


class HeaderError(CatalogError):
    """Invalid catalog header."""

    def __init__(self, name: str, value: str, reason: str) -> None:
        self.name = name
        self.value = value
        super().__init__(f"Invalid header '{name}: {value}': {reason}")


# =============================================================================
# Plural Expression Errors
# =============================================================================


class ExpressionCompileError(CatalogError):
    """Base error for plural expressions that cannot be compiled."""

    def __init__(
        self,
        message: str,
        expression: str = "",
        position: int | None = None,
    ) -> None:
        self.expression = expression
        self.position = position
        super().__init__(message)


class InvalidCharacterError(ExpressionCompileError):
    """An unrecognized character was found in the expression."""

    def __init__(self, expression: str, position: int, char: str) -> None:
        self.char = char
        super().__init__(
            f"Encountered invalid character {char!r} at position {position}",
            expression,
            position,
        )


class EmptyExpressionError(ExpressionCompileError):
    """The expression is empty or contains only whitespace."""

    def __init__(self, expression: str = "") -> None:
        super().__init__("Empty plural expression", expression)


class MissingQuestionMarkError(ExpressionCompileError):
    """A ':' was found without a pending '?'."""

    def __init__(self, expression: str, position: int) -> None:
        super().__init__(
            f"Found ':' without '?' at position {position}",
            expression,
            position,
        )


class MalformedExpressionError(ExpressionCompileError):
    """Operators and operands do not form a valid expression."""

    pass
