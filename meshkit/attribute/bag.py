"""Attribute bag interfaces, value comparison and reference tracking types."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from meshkit.attribute.values import List, StringMap

_SCALAR_TYPES = (bool, int, str, float)
_SUPPORTED_TYPES = (bool, int, str, float, datetime, timedelta, bytes, bytearray, StringMap, List)


class Presence(enum.IntEnum):
    """Outcome of an attribute reference."""

    CONDITION_UNSPECIFIED = 0
    ABSENCE = 1
    EXACT = 2
    REGEX = 3


@dataclass(frozen=True)
class Reference:
    """A reference to an attribute, optionally to one key of a map attribute."""

    name: str
    map_key: str = ""


@dataclass
class ReferencedAttributeSnapshot:
    """Saved state of the attributes referenced through a bag."""

    referenced_attrs: dict[Reference, Presence] = field(default_factory=dict)


class ReferenceTracker(ABC):
    """Records accesses made through an attribute bag."""

    @abstractmethod
    def map_reference(self, name: str, key: str, condition: Presence) -> None:
        """Record access of a string map entry."""

    @abstractmethod
    def reference(self, name: str, condition: Presence) -> None:
        """Record access of an attribute by name."""

    @abstractmethod
    def clear(self) -> None:
        """Forget all tracked references."""

    @abstractmethod
    def restore(self, snap: ReferencedAttributeSnapshot) -> None:
        """Reinstate references from a snapshot."""

    @abstractmethod
    def snapshot(self) -> ReferencedAttributeSnapshot:
        """Return a snapshot of the current references."""


class Bag(ABC):
    """Read access to a set of named attributes."""

    @abstractmethod
    def get(self, name: str) -> Any:
        """Return the attribute value, or None if absent."""

    @abstractmethod
    def names(self) -> list[str]:
        """Return the names of all attributes in the bag."""

    @abstractmethod
    def contains(self, key: str) -> bool:
        """Return True if the bag holds the attribute."""

    @abstractmethod
    def done(self) -> None:
        """Signal that the bag is no longer used."""

    @abstractmethod
    def reference_tracker(self) -> ReferenceTracker | None:
        """Return the tracker of accesses, if any."""

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains(key)


class EmptyBag(Bag):
    """A bag that never holds anything; the end of a chain of bags."""

    def get(self, name: str) -> Any:
        return None

    def names(self) -> list[str]:
        return []

    def contains(self, key: str) -> bool:
        return False

    def done(self) -> None:
        pass

    def reference_tracker(self) -> ReferenceTracker | None:
        return None

    def __str__(self) -> str:
        return ""


EMPTY = EmptyBag()


class Expression(ABC):
    """A precompiled expression evaluated against an attribute bag."""

    @abstractmethod
    def evaluate(self, attributes: Bag) -> Any:
        """Evaluate the expression."""

    @abstractmethod
    def evaluate_boolean(self, attributes: Bag) -> bool:
        """Evaluate the expression to a boolean."""

    @abstractmethod
    def evaluate_string(self, attributes: Bag) -> str:
        """Evaluate the expression to a string."""

    @abstractmethod
    def evaluate_double(self, attributes: Bag) -> float:
        """Evaluate the expression to a float."""

    @abstractmethod
    def evaluate_integer(self, attributes: Bag) -> int:
        """Evaluate the expression to an integer."""


def equal(this: Any, that: Any) -> bool:
    """Compare two attribute values; values of different types are never equal."""
    if this is None and that is None:
        return True
    if isinstance(this, _SCALAR_TYPES):
        return type(this) is type(that) and this == that
    if isinstance(this, datetime):
        return isinstance(that, datetime) and this == that
    if isinstance(this, timedelta):
        return isinstance(that, timedelta) and this == that
    if isinstance(this, (bytes, bytearray)):
        return isinstance(that, (bytes, bytearray)) and bytes(this) == bytes(that)
    if isinstance(this, StringMap):
        return isinstance(that, StringMap) and this.equal(that)
    if isinstance(this, List):
        return isinstance(that, List) and this.equal(that)
    return False


def check_type(value: Any) -> bool:
    """Return True if the value has a supported attribute type."""
    return isinstance(value, _SUPPORTED_TYPES)