"""Continuation of embedded code across lines ending with a comma."""

from __future__ import annotations

import re

from haml_parser.line_parser import LineParser

# ``?,`` and ``?\,`` are character literals, not a trailing comma.
CHAR_LITERAL_RE = re.compile(r"\W\?\Z")


def is_ruby_multiline(text: str | None) -> bool:
    """A line continues onto the next when it ends with a real comma."""
    if not text or len(text) <= 1 or not text.endswith(","):
        return False
    before = text[-3:-1]
    return not (CHAR_LITERAL_RE.search(before) or before == "?\\")


def read(line_parser: LineParser, current_text: str) -> list[str]:
    """Pull the continuation lines that belong to *current_text*."""
    buf: list[str] = []
    while is_ruby_multiline(current_text) and line_parser.has_next():
        current_text = line_parser.next_line()
        buf.append(current_text)
    return buf
