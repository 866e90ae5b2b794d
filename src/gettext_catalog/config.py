"""Configuration for catalog loading and the translator.

Environment Variables:
    GETTEXT_CATALOG_DEFAULT_LANGUAGE: Working language (default: en)
    GETTEXT_CATALOG_LOCALE_DIR: Directory with catalog files (default: locale)
    GETTEXT_CATALOG_LOAD_COMMENTS: Load comments when reading (default: false)
    GETTEXT_CATALOG_WRITE_COMMENTS: Write comments when saving (default: true)
    GETTEXT_CATALOG_JSON_INDENT: Indentation for JSON output (default: compact)
    GETTEXT_CATALOG_LOG_LEVEL: Log level for the CLI (default: WARNING)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any


ENV_PREFIX = "GETTEXT_CATALOG_"


def _get_bool(key: str, default: bool) -> bool:
    value = os.environ.get(key, "").lower()
    if value in ("true", "1", "yes", "on"):
        return True
    if value in ("false", "0", "no", "off"):
        return False
    return default


def _get_int(key: str, default: int | None) -> int | None:
    value = os.environ.get(key)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass
class CatalogConfig:
    """Catalog configuration.

    Example:
        >>> config = CatalogConfig(default_language="de", locale_dir=Path("i18n"))
        >>> config = CatalogConfig.from_environment()
    """

    default_language: str = "en"
    locale_dir: Path = field(default_factory=lambda: Path("locale"))
    load_comments: bool = False
    write_comments: bool = True
    json_indent: int | None = None
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        self.locale_dir = Path(self.locale_dir)

    @property
    def log_level_value(self) -> int:
        """Numeric log level; unknown names map to WARNING."""
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.WARNING

    @classmethod
    def from_environment(cls) -> "CatalogConfig":
        """Load configuration from environment variables."""
        defaults = cls()
        return cls(
            default_language=os.environ.get(
                f"{ENV_PREFIX}DEFAULT_LANGUAGE", defaults.default_language
            ),
            locale_dir=Path(os.environ.get(f"{ENV_PREFIX}LOCALE_DIR", str(defaults.locale_dir))),
            load_comments=_get_bool(f"{ENV_PREFIX}LOAD_COMMENTS", defaults.load_comments),
            write_comments=_get_bool(f"{ENV_PREFIX}WRITE_COMMENTS", defaults.write_comments),
            json_indent=_get_int(f"{ENV_PREFIX}JSON_INDENT", defaults.json_indent),
            log_level=os.environ.get(f"{ENV_PREFIX}LOG_LEVEL", defaults.log_level),
        )

    def with_overrides(self, **overrides: Any) -> "CatalogConfig":
        """Return a copy with the given non-None fields replaced."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def to_dict(self) -> dict[str, Any]:
        return {
            "default_language": self.default_language,
            "locale_dir": str(self.locale_dir),
            "load_comments": self.load_comments,
            "write_comments": self.write_comments,
            "json_indent": self.json_indent,
            "log_level": self.log_level,
        }


_config: CatalogConfig | None = None


def get_config() -> CatalogConfig:
    """Get the global configuration, loading it from the environment once."""
    global _config
    if _config is None:
        _config = CatalogConfig.from_environment()
    return _config


def set_config(config: CatalogConfig | None) -> None:
    """Replace the global configuration; None reloads from the environment on next use."""
    global _config
    _config = config
