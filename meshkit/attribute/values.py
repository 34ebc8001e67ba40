"""Composite attribute values: lists and string maps."""

from __future__ import annotations

from typing import Any, Iterable, Iterator


class List:
    """A named list of attribute values."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, name: str, entries: Iterable[Any] | None = None) -> None:
        self.name = name
        self.entries: list[Any] = list(entries) if entries is not None else []

    def append(self, val: Any) -> None:
        """Append a value to the end of the list."""
        self.entries.append(val)

    def equal(self, other: "List") -> bool:
        """Return True if both lists hold equal entries."""
        return self.entries == other.entries

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, List):
            return NotImplemented
        return self.equal(other)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.entries)

    def __str__(self) -> str:
        return "[" + " ".join(str(e) for e in self.entries) + "]"

    def __repr__(self) -> str:
        return f"List({self.name!r}, {self.entries!r})"


class StringMap:
    """A named string-to-string map that reports lookups to its owning bag's tracker."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, name: str, entries: dict[str, str], owner: Any = None) -> None:
        self.name = name
        self._entries = entries
        self.owner = owner

    def set(self, key: str, val: str) -> None:
        """Set a map entry."""
        self._entries[key] = val

    def get(self, key: str) -> str | None:
        """Return the value for key, or None, recording the access if tracked."""
        found = key in self._entries
        value = self._entries.get(key)

        if self.owner is not None:
            tracker = self.owner.reference_tracker()
            if tracker is not None:
                from meshkit.attribute.bag import Presence

                condition = Presence.EXACT if found else Presence.ABSENCE
                tracker.map_reference(self.name, key, condition)

        return value

    def entries(self) -> dict[str, str]:
        """Return the wrapped map."""
        return self._entries

    def copy(self) -> "StringMap":
        """Return a copy with its own map, keeping name and owner."""
        return StringMap(self.name, dict(self._entries), self.owner)

    def equal(self, other: "StringMap") -> bool:
        """Return True if both maps hold the same entries."""
        return self._entries == other._entries

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StringMap):
            return NotImplemented
        return self.equal(other)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __str__(self) -> str:
        body = " ".join(f"{k}:{v}" for k, v in sorted(self._entries.items()))
        return f"stringmap[{body}]"

    def __repr__(self) -> str:
        return f"StringMap({self.name!r}, {self._entries!r})"


def wrap_string_map(entries: dict[str, str]) -> StringMap:
    """Wrap a map without a name or owner, so no access is tracked."""
    return StringMap("", entries)