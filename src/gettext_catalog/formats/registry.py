"""Format registry, keyed by file extension."""

from __future__ import annotations

from pathlib import Path
from typing import Type

from gettext_catalog.errors import UnsupportedFormatError
from gettext_catalog.formats.base import LocalizationFormat
from gettext_catalog.formats.json_format import JSONFormat
from gettext_catalog.formats.mo import MOFormat
from gettext_catalog.formats.po import POFormat


_FORMAT_REGISTRY: dict[str, Type[LocalizationFormat]] = {}


def register_format(format_class: Type[LocalizationFormat]) -> None:
    """Register a format for each of its file extensions.

    Args:
        format_class: Format class to register; later registrations win.
    """
    for extension in format_class.extensions:
        _FORMAT_REGISTRY[extension.lower()] = format_class


def _extension(name: str | Path) -> str:
    text = str(name).lower()
    suffix = Path(text).suffix
    if suffix:
        return suffix
    return "." + text.lstrip(".")


def get_format(name: str | Path) -> LocalizationFormat:
    """Create the codec for a format name, extension or file path.

    Args:
        name: ``"po"``, ``".mo"``, ``"messages/de.json"`` and so on.

    Returns:
        Codec instance.

    Raises:
        UnsupportedFormatError: If no codec handles the extension.
    """
    extension = _extension(name)
    format_class = _FORMAT_REGISTRY.get(extension)
    if format_class is None:
        raise UnsupportedFormatError(extension, list_extensions())
    return format_class()


def list_extensions() -> list[str]:
    """List all registered file extensions."""
    return sorted(_FORMAT_REGISTRY)


def is_supported(name: str | Path) -> bool:
    """Check if a codec exists for a format name, extension or path."""
    return _extension(name) in _FORMAT_REGISTRY


for _format_class in (POFormat, MOFormat, JSONFormat):
    register_format(_format_class)
