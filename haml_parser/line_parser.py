"""Line source for the Haml parser.

Hands out one logical line at a time and remembers the current line number.
Lines ending in `` |`` are folded together into a single multi-line block;
the folded pieces are joined with ``\\n`` so the caller can tell how many
physical lines were consumed.
"""

from __future__ import annotations

import re
from typing import TypeVar

from haml_parser.ast_nodes import Node

N = TypeVar("N", bound=Node)

MULTILINE_SUFFIX = " |"

# ``foo.each do | bar |`` is a block with spaced arguments, not a multi-line.
BLOCK_WITH_SPACES = re.compile(r"do\s*\|\s*[^|]*\s+\|\Z")


class LineParser:
    """Iterates over the lines of a template source."""

    def __init__(self, filename: str | None, source: str) -> None:
        self.filename = filename
        self.lines: list[str] = [line.rstrip("\r") for line in source.split("\n")]
        if self.lines and self.lines[-1] == "":
            self.lines.pop()
        self.lineno: int = 0

    def create_node(self, node_cls: type[N], **fields) -> N:
        """Build a node stamped with the current file and line."""
        return node_cls(filename=self.filename, lineno=self.lineno, **fields)

    def has_next(self) -> bool:
        return self.lineno < len(self.lines)

    def next_line(self, in_filter: bool = False) -> str:
        """Return the next line, folding multi-line blocks unless *in_filter*."""
        line = self._move_next()
        if in_filter or not self._is_multiline(line):
            return line
        return self._next_multiline(line)

    # -- Helpers -----------------------------------------------------------

    def _is_multiline(self, line: str) -> bool:
        return line.endswith(MULTILINE_SUFFIX) and not BLOCK_WITH_SPACES.search(line)

    def _move_next(self) -> str:
        line = self.lines[self.lineno]
        self.lineno += 1
        return line

    def _move_back(self) -> None:
        self.lineno -= 1

    def _next_multiline(self, line: str) -> str:
        buf = [line[:-1]]
        while self.has_next():
            line = self._move_next()
            if self._is_multiline(line):
                buf.append(line[:-1])
            else:
                self._move_back()
                break
        return "\n".join(buf)
