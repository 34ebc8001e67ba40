"""Coverage counters captured for one instrumented file."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Block:
    """Coverage snapshot of one file block.

    ``pos`` holds three values per counter: start line, end line, and the
    start and end columns packed into the low and high 16 bits.
    """

    name: str
    count: list[int] = field(default_factory=list)
    pos: list[int] = field(default_factory=list)
    num_stmt: list[int] = field(default_factory=list)

    def clone(self) -> "Block":
        """Return a copy with its own counts.

        Positions and statement counts never change once read, so the
        copy shares them.
        """
        return Block(
            name=self.name,
            count=list(self.count),
            pos=self.pos,
            num_stmt=self.num_stmt,
        )