"""Catalog file formats.

Each format implements the same ``read``/``write`` contract over binary
streams and is selected by file extension:

- ``.po``, ``.pot``: :class:`POFormat`
- ``.mo``: :class:`MOFormat`
- ``.json``: :class:`JSONFormat`

Example:
    from gettext_catalog.formats import get_format

    codec = get_format("de.mo")
    with open("de.mo", "rb") as f:
        codec.read(catalog, f)
"""

from gettext_catalog.formats.base import (
    LocalizationFormat,
    format_header_block,
    parse_header_block,
)
from gettext_catalog.formats.files import dumps, loads, read_file, write_file
from gettext_catalog.formats.json_format import JSONFormat
from gettext_catalog.formats.mo import MOFormat
from gettext_catalog.formats.po import POFormat
from gettext_catalog.formats.registry import (
    get_format,
    is_supported,
    list_extensions,
    register_format,
)

__all__ = [
    # Base
    "LocalizationFormat",
    "format_header_block",
    "parse_header_block",
    # Formats
    "JSONFormat",
    "MOFormat",
    "POFormat",
    # Registry
    "get_format",
    "is_supported",
    "list_extensions",
    "register_format",
    # Files
    "dumps",
    "loads",
    "read_file",
    "write_file",
]
