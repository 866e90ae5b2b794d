"""Convenience functions for reading and writing catalogs.

Example:
    from gettext_catalog.formats import read_file, write_file

    catalog = read_file("locale/de.po", load_comments=True)
    write_file(catalog, "locale/de.mo")
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

from gettext_catalog.formats.registry import get_format
from gettext_catalog.model.localization import Localization


logger = logging.getLogger(__name__)


def read_file(
    path: str | Path,
    load_comments: bool = False,
    localization: Localization | None = None,
    format: str | None = None,
) -> Localization:
    """Read a catalog file.

    Args:
        path: File to read; the format is chosen by its extension.
        load_comments: Also load comments, flags and previous values.
        localization: Catalog to populate; a new one is created if omitted.
        format: Format name overriding the extension.

    Returns:
        The populated catalog.

    Raises:
        FormatError: If the file content is malformed.
        UnsupportedFormatError: If the extension is unknown.
        OSError: If the file cannot be read.
    """
    path = Path(path)
    codec = get_format(format or path)
    localization = localization if localization is not None else Localization()

    with open(path, "rb") as f:
        codec.read(localization, f, load_comments)

    logger.debug("Loaded %d messages from %s", len(localization), path)
    return localization


def write_file(
    localization: Localization,
    path: str | Path,
    write_comments: bool = True,
    format: str | None = None,
    indent: int | None = None,
) -> None:
    """Write a catalog file.

    Args:
        localization: Catalog to write.
        path: Destination; the format is chosen by its extension.
        write_comments: Include comments, flags and previous values.
        format: Format name overriding the extension.
        indent: JSON indentation.
    """
    path = Path(path)
    codec = get_format(format or path)
    if indent is not None and hasattr(codec, "indent"):
        codec.indent = indent

    with open(path, "wb") as f:
        codec.write(localization, f, write_comments)

    logger.debug("Saved %d messages to %s", len(localization), path)


def loads(
    data: str | bytes,
    format: str = "po",
    load_comments: bool = False,
    localization: Localization | None = None,
) -> Localization:
    """Read a catalog from a string (PO, JSON) or bytes (any format)."""
    codec = get_format(format)
    localization = localization if localization is not None else Localization()

    if isinstance(data, str):
        data = data.encode("utf-8")

    codec.read(localization, io.BytesIO(data), load_comments)
    return localization


def dumps(
    localization: Localization,
    format: str = "po",
    write_comments: bool = True,
    indent: int | None = None,
) -> str | bytes:
    """Serialize a catalog; text formats return ``str``, MO returns ``bytes``."""
    codec = get_format(format)
    if indent is not None and hasattr(codec, "indent"):
        codec.indent = indent

    buffer = io.BytesIO()
    codec.write(localization, buffer, write_comments)

    if codec.binary:
        return buffer.getvalue()
    return buffer.getvalue().decode("utf-8")
