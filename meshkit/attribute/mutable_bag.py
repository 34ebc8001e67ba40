"""A writable attribute bag that layers changes over a parent bag."""

from __future__ import annotations

from typing import Any

from meshkit.attribute.bag import EMPTY, Bag, ReferenceTracker, check_type
from meshkit.attribute.values import StringMap


class BagDoneError(RuntimeError):
    """Raised when a bag is used after done() was called on it."""

    def __init__(self) -> None:
        super().__init__("attempt to use a bag after its done method has been called")


def _copy_value(value: Any) -> Any:
    if isinstance(value, bytearray):
        return bytearray(value)
    if isinstance(value, bytes):
        return bytes(value)
    if isinstance(value, StringMap):
        return value.copy()
    return value


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        text = repr(value)
        return text[:-2] if text.endswith(".0") else text
    if isinstance(value, (bytes, bytearray)):
        return "[" + " ".join(str(b) for b in value) + "]"
    return str(value)


class MutableBag(Bag):
    """A bag whose local values override those of its parent.

    A fresh child looks identical to its parent; setting values makes it
    diverge, and reset() makes it identical again.
    """

    def __init__(self, parent: Bag | None = None) -> None:
        self._parent: Bag | None = parent if parent is not None else EMPTY
        self._values: dict[str, Any] = {}

    def _live_parent(self) -> Bag:
        if self._parent is None:
            raise BagDoneError()
        return self._parent

    def get(self, name: str) -> Any:
        parent = self._live_parent()
        if name in self._values:
            return self._values[name]
        return parent.get(name)

    def contains(self, key: str) -> bool:
        parent = self._live_parent()
        return key in self._values or parent.contains(key)

    def names(self) -> list[str]:
        parent = self._live_parent()
        return sorted(set(parent.names()) | self._values.keys())

    def set(self, name: str, value: Any) -> None:
        """Override the named attribute locally."""
        self._live_parent()
        if not check_type(value):
            raise TypeError(f"invalid type {type(value).__name__} for {name!r} with value {value!r}")
        self._values[name] = value

    def delete(self, name: str) -> None:
        """Remove a local value; the parent may still hold the name."""
        self._values.pop(name, None)

    def reset(self) -> None:
        """Drop all local values."""
        self._values = {}

    def merge(self, bag: "MutableBag") -> None:
        """Copy in the other bag's local values for names not already present."""
        for key, value in bag._values.items():
            if not self.contains(key):
                self._values[key] = _copy_value(value)

    def done(self) -> None:
        self._live_parent()
        self._parent = None
        self.reset()

    def reference_tracker(self) -> ReferenceTracker | None:
        return None

    def __enter__(self) -> "MutableBag":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        if self._parent is not None:
            self.done()

    def __str__(self) -> str:
        parent = self._live_parent()
        if not self._values:
            return str(parent)
        lines = [str(parent), "---\n"]
        for key in sorted(self._values):
            lines.append(f"{key:<30}: {_format_value(self._values[key])}\n")
        return "".join(lines)


def mutable_bag_from(values: dict[str, Any]) -> MutableBag:
    """Build a bag holding the given values; raise TypeError on unsupported types."""
    for key, value in values.items():
        if not check_type(value):
            raise TypeError(f"unexpected type {type(value).__name__}: {key!r} = {value!r}")
    bag = MutableBag()
    bag._values = values
    return bag


def copy_bag(bag: Bag) -> MutableBag:
    """Return a deep copy of a bag as a parentless mutable bag."""
    result = MutableBag()
    for name in bag.names():
        result.set(name, _copy_value(bag.get(name)))
    return result