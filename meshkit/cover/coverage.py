"""Coverage data gathered from all blocks, and its profile text form."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import TextIO

from meshkit.cover.block import Block


@dataclass
class Coverage:
    """Coverage of every registered block."""

    blocks: list[Block] = field(default_factory=list)

    def write_profile(self, out: TextIO) -> None:
        """Write the data as a cover profile in atomic mode."""
        out.write("mode: atomic\n")
        for block in self.blocks:
            for i, count in enumerate(block.count):
                line0 = block.pos[3 * i]
                line1 = block.pos[3 * i + 1]
                columns = block.pos[3 * i + 2]
                col0 = columns & 0xFFFF
                col1 = (columns >> 16) & 0xFFFF
                stmts = block.num_stmt[i]
                out.write(f"{block.name}:{line0}.{col0},{line1}.{col1} {stmts} {count}\n")

    def profile_text(self) -> str:
        """Return the data as cover profile text."""
        buffer = io.StringIO()
        self.write_profile(buffer)
        return buffer.getvalue()