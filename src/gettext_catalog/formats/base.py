"""Base class for catalog file formats."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO, ClassVar, Mapping

from gettext_catalog.errors import FormatError, HeaderError
from gettext_catalog.model.localization import Localization


class LocalizationFormat(ABC):
    """A codec between :class:`Localization` and a byte stream.

    ``read`` consumes the whole stream and populates the catalog, ``write``
    serializes the whole catalog. Neither closes the stream. A failed read
    leaves the catalog partially populated; callers should discard it.
    """

    name: ClassVar[str] = ""
    extensions: ClassVar[tuple[str, ...]] = ()
    binary: ClassVar[bool] = False

    @abstractmethod
    def read(
        self,
        localization: Localization,
        stream: BinaryIO,
        load_comments: bool = False,
    ) -> None:
        """Read messages and headers from the stream into the catalog.

        Args:
            localization: Catalog to populate.
            stream: Binary input stream.
            load_comments: Also load comments, flags and previous values.

        Raises:
            FormatError: If the stream content is malformed.
        """
        pass

    @abstractmethod
    def write(
        self,
        localization: Localization,
        stream: BinaryIO,
        write_comments: bool = False,
    ) -> None:
        """Write the catalog to the stream.

        Args:
            localization: Catalog to serialize.
            stream: Binary output stream.
            write_comments: Include comments, flags and previous values.
        """
        pass

    def _error(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
    ) -> FormatError:
        return FormatError(message, self.name, line, column)


def format_header_block(headers: Mapping[str, str]) -> str:
    """Join headers into ``name: value`` lines separated by newlines."""
    return "\n".join(f"{name}: {value}" for name, value in headers.items())


def parse_header_block(
    localization: Localization,
    block: str,
    format_name: str | None = None,
) -> None:
    """Apply a ``name: value`` header block to a catalog.

    Blank lines are ignored; each remaining line is split on its first colon.

    Raises:
        FormatError: A line has no colon or a typed header is invalid.
    """
    for line in block.strip().split("\n"):
        if not line.strip():
            continue

        name, sep, value = line.partition(":")
        if not sep:
            raise FormatError(f"Malformed header line {line!r}", format_name)

        try:
            localization.set_header(name.strip(), value.strip())
        except HeaderError as e:
            raise FormatError(str(e), format_name) from e
