"""Registry of instrumented coverage counters."""

from __future__ import annotations

import threading
from typing import Callable, Sequence

from meshkit.cover.block import Block
from meshkit.cover.coverage import Coverage

ReadPosFn = Callable[[], Sequence[int]]
ReadStmtFn = Callable[[], Sequence[int]]
ReadCountFn = Callable[[], Sequence[int]]
ClearCountFn = Callable[[], None]


class AlreadyRegisteredError(ValueError):
    """Raised when a block name is registered twice."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Name already registered: {name!r}")
        self.name = name


class _BlockState:
    """The live counters of one block and the last captured copy of them."""

    def __init__(
        self,
        length: int,
        name: str,
        read_pos: ReadPosFn,
        read_stmt: ReadStmtFn,
        read_count: ReadCountFn,
        clear_count: ClearCountFn,
    ) -> None:
        self._length = length
        self._lock = threading.Lock()
        self._ephemeral = Block(name)
        self._read_pos = read_pos
        self._read_stmt = read_stmt
        self._read_count = read_count
        self._clear_count = clear_count

    def _init_ephemeral(self) -> None:
        # Must be called under the lock.
        if not self._ephemeral.count:
            self._ephemeral.count = [0] * self._length
            self._ephemeral.num_stmt = list(self._read_stmt())
            self._ephemeral.pos = list(self._read_pos())

    def capture(self) -> None:
        """Copy the live counters into the captured state."""
        with self._lock:
            self._init_ephemeral()
            self._ephemeral.count = list(self._read_count())

    def clear(self) -> None:
        """Reset the live counters."""
        with self._lock:
            self._init_ephemeral()
            self._clear_count()

    def read(self) -> Block:
        """Return a copy of the captured state."""
        with self._lock:
            self._init_ephemeral()
            return self._ephemeral.clone()


class Registry:
    """Holds the coverage counters of every registered block."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._blocks: dict[str, _BlockState] = {}

    def register(
        self,
        length: int,
        context: str,
        read_pos: ReadPosFn,
        read_stmt: ReadStmtFn,
        read_count: ReadCountFn,
        clear_count: ClearCountFn,
    ) -> None:
        """Register a block of ``length`` counters under the name ``context``.

        The read functions return the current positions, statement counts
        and counters; ``clear_count`` resets the counters.
        """
        state = _BlockState(length, context, read_pos, read_stmt, read_count, clear_count)
        with self._lock:
            if context in self._blocks:
                raise AlreadyRegisteredError(context)
            self._blocks[context] = state

    def _states(self) -> list[_BlockState]:
        with self._lock:
            return list(self._blocks.values())

    def snapshot(self) -> None:
        """Capture the counters of every registered block."""
        for state in self._states():
            state.capture()

    def clear(self) -> None:
        """Reset the counters of every registered block."""
        for state in self._states():
            state.clear()

    def get_coverage(self) -> Coverage:
        """Return the last captured counters of all blocks."""
        return Coverage([state.read() for state in self._states()])


_registry = Registry()


def get_registry() -> Registry:
    """Return the process-wide registry."""
    return _registry