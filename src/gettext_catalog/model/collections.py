"""Case-insensitive collections used by the catalog model.

Keys are normalized with ``str.lower()`` on insert and lookup, which is
locale independent. The spelling used on first insertion is kept for
output, and insertion order is preserved.
"""

from __future__ import annotations

from collections.abc import MutableMapping, MutableSet
from typing import Iterable, Iterator, Mapping


def _normalize(key: str) -> str:
    return key.lower()


class CaseInsensitiveDict(MutableMapping[str, str]):
    """Ordered string mapping with case-insensitive keys.

    Example:
        headers = CaseInsensitiveDict({"Content-Type": "text/plain"})
        headers["content-type"]  # "text/plain"
        list(headers)            # ["Content-Type"]
    """

    def __init__(self, data: Mapping[str, str] | Iterable[tuple[str, str]] | None = None) -> None:
        self._store: dict[str, tuple[str, str]] = {}
        if data is not None:
            self.update(data)

    def __setitem__(self, key: str, value: str) -> None:
        normalized = _normalize(key)
        existing = self._store.get(normalized)
        name = existing[0] if existing is not None else key
        self._store[normalized] = (name, value)

    def __getitem__(self, key: str) -> str:
        return self._store[_normalize(key)][1]

    def __delitem__(self, key: str) -> None:
        del self._store[_normalize(key)]

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._store.values())

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and _normalize(key) in self._store

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Mapping):
            other = CaseInsensitiveDict(other)
            return {k: v for k, (_, v) in self._store.items()} == {
                k: v for k, (_, v) in other._store.items()
            }
        return NotImplemented

    def copy(self) -> "CaseInsensitiveDict":
        return CaseInsensitiveDict(self.items())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self.items())!r})"


class FlagSet(MutableSet[str]):
    """Ordered set of message flags with case-insensitive membership.

    Example:
        flags = FlagSet(["fuzzy", "c-format"])
        "FUZZY" in flags  # True
    """

    def __init__(self, flags: Iterable[str] | None = None) -> None:
        self._store: dict[str, str] = {}
        if flags is not None:
            for flag in flags:
                self.add(flag)

    def add(self, value: str) -> None:
        self._store.setdefault(_normalize(value), value)

    def discard(self, value: str) -> None:
        self._store.pop(_normalize(value), None)

    def update(self, values: Iterable[str]) -> None:
        for value in values:
            self.add(value)

    def __contains__(self, value: object) -> bool:
        return isinstance(value, str) and _normalize(value) in self._store

    def __iter__(self) -> Iterator[str]:
        return iter(self._store.values())

    def __len__(self) -> int:
        return len(self._store)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._store.values())!r})"
