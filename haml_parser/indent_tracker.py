"""Indentation tracking for the Haml parser.

``IndentTracker`` strips leading spaces from each line and keeps a stack of
the indent widths currently open.  Moving deeper fires ``on_enter`` once;
moving shallower fires ``on_leave`` once per closed level.  The callbacks run
*before* the caller dispatches the line's content, so the receiving side
always sees the tree in the state the new line belongs to.
"""

from __future__ import annotations

import logging
import re
from typing import Callable

from haml_parser.errors import IndentError

logger = logging.getLogger(__name__)

IndentCallback = Callable[[int, str], None]

INDENT_RE = re.compile(r"\A([ \t]*)(.*)\Z", re.DOTALL)


def _noop(indent_level: int, text: str) -> None:
    return None


class IndentTracker:
    """Turns per-line indent widths into enter/leave notifications."""

    def __init__(
        self,
        on_enter: IndentCallback | None = None,
        on_leave: IndentCallback | None = None,
    ) -> None:
        self.indent_levels: list[int] = [0]
        self.on_enter = on_enter or _noop
        self.on_leave = on_leave or _noop
        self.comment_level: int | None = None

    @property
    def current_level(self) -> int:
        return self.indent_levels[-1]

    def process(self, line: str, lineno: int) -> tuple[str, str]:
        """Split *line* into ``(text, indent)`` and track its depth.

        Blank lines never change the depth.
        """
        indent, text = self.split(line)
        if "\t" in indent and self.comment_level is None:
            raise IndentError("Indenting with hard tabs is not allowed", lineno)
        if text:
            self._track(len(indent), text, lineno)
        return text, indent

    def finish(self) -> None:
        """Close every level still open at end of input."""
        self.comment_level = None
        self._indent_leave(0, "", 0)

    def enter_comment(self) -> None:
        """Stop tracking until a line returns to the comment's own level."""
        self.comment_level = self.indent_levels[-2]

    def check_indent_level(self, lineno: int) -> None:
        """Reject a new level whose width differs from its parent's width."""
        if len(self.indent_levels) < 3:
            return
        expected = self.indent_levels[-2] - self.indent_levels[-3]
        actual = self.indent_levels[-1] - self.indent_levels[-2]
        if expected != actual:
            raise IndentError(
                f"Inconsistent indentation: {actual} spaces used for indentation, "
                f"but the rest of the document was indented using {expected} spaces",
                lineno,
            )

    @staticmethod
    def split(line: str) -> tuple[str, str]:
        m = INDENT_RE.match(line)
        return m.group(1), m.group(2)

    # -- Internals ---------------------------------------------------------

    def _track(self, indent_level: int, text: str, lineno: int) -> None:
        if indent_level > self.indent_levels[-1]:
            self._indent_enter(indent_level, text)
        elif indent_level < self.indent_levels[-1]:
            self._indent_leave(indent_level, text, lineno)

    def _indent_enter(self, indent_level: int, text: str) -> None:
        if self.comment_level is not None:
            return
        self.indent_levels.append(indent_level)
        logger.debug("indent enter: %d", indent_level)
        self.on_enter(indent_level, text)

    def _indent_leave(self, indent_level: int, text: str, lineno: int) -> None:
        if self.comment_level is not None:
            if indent_level > self.comment_level:
                return
            self.comment_level = None

        while indent_level < self.indent_levels[-1]:
            self.indent_levels.pop()
            logger.debug("indent leave: %d", indent_level)
            self.on_leave(indent_level, text)

        if indent_level != self.indent_levels[-1]:
            raise IndentError(f"Unmatched indent level: {indent_level}", lineno)
