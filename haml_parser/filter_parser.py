"""Accumulator for ``:filter`` blocks.

Once started, the driver feeds every raw line here until a line shallower
than the block's content closes it.  The closing line is not consumed: the
driver dispatches it normally after receiving the finished ``Filter``.
"""

from __future__ import annotations

import logging

from haml_parser.ast_nodes import Filter
from haml_parser.indent_tracker import IndentTracker

logger = logging.getLogger(__name__)


class FilterParser:
    def __init__(self, indent_tracker: IndentTracker) -> None:
        self.indent_tracker = indent_tracker
        self.node: Filter | None = None
        self.indent_level: int | None = None
        self.trailing_blank_lines: int = 0

    def enabled(self) -> bool:
        return self.node is not None

    def start(self, name: str, filename: str | None, lineno: int) -> None:
        logger.debug("filter :%s started at line %d", name, lineno)
        self.node = Filter(name=name, filename=filename, lineno=lineno)
        self.indent_level = None

    def append(self, line: str) -> Filter | None:
        """Add one raw line; return the filter when *line* closes it."""
        indent, text = self.indent_tracker.split(line)
        if not text:
            self.node.texts.append("")
            return None

        indent_level = len(indent)
        if self.indent_level is None:
            if indent_level > self.indent_tracker.current_level:
                self.indent_level = indent_level
                self.node.texts.append(text)
                return None
            return self.finish()

        if indent_level < self.indent_level:
            return self.finish()
        self.node.texts.append(line[self.indent_level:])
        return None

    def finish(self) -> Filter | None:
        """Close the current block, if any, and hand it back.

        Blank lines at the end of the block are removed from ``texts``;
        their count is left in ``trailing_blank_lines``.
        """
        node = self.node
        self.trailing_blank_lines = 0
        if node is not None:
            while node.texts and not node.texts[-1]:
                node.texts.pop()
                self.trailing_blank_lines += 1
            logger.debug("filter :%s closed with %d lines", node.name, len(node.texts))
        self.node = None
        self.indent_level = None
        return node
