"""Grammar for output expressions and inline text.

Handles the ``=``, ``~``, ``&``, ``!`` prefixes and plain text.  Returns a
``Script`` node for code that is evaluated, a ``Text`` node for literal or
interpolated text, or ``None`` when nothing follows on the line.
"""

from __future__ import annotations

from haml_parser import ruby_multiline
from haml_parser.ast_nodes import Node, Script, Text
from haml_parser.errors import HamlSyntaxError
from haml_parser.line_parser import LineParser


class ScriptParser:
    def __init__(self, line_parser: LineParser) -> None:
        self.line_parser = line_parser

    def parse(self, text: str) -> Node | None:
        if text.startswith(("=", "~")):
            return self._parse_script(text)
        if text.startswith("&"):
            return self._parse_sanitized(text)
        if text.startswith("!"):
            return self._parse_unescape(text)
        return self._parse_text(text)

    # -- Prefix handlers ---------------------------------------------------

    def _parse_script(self, text: str) -> Node:
        if text[1:2] == "=":
            return self.line_parser.create_node(Text, text=text[2:].strip())
        node = self.line_parser.create_node(Script, preserve=text[0] == "~")
        node.script = self._read_script(text[1:])
        return node

    def _parse_sanitized(self, text: str) -> Node:
        if text.startswith("&=="):
            return self.line_parser.create_node(Text, text=text[3:].lstrip())
        if text[1:2] in ("=", "~"):
            node = self.line_parser.create_node(Script, preserve=text[1] == "~")
            node.script = self._read_script(text[2:])
            return node
        return self.line_parser.create_node(Text, text=text[1:].strip())

    def _parse_unescape(self, text: str) -> Node:
        if text.startswith("!=="):
            return self.line_parser.create_node(
                Text, text=text[3:].lstrip(), escape_html=False
            )
        if text[1:2] in ("=", "~"):
            node = self.line_parser.create_node(
                Script, escape_html=False, preserve=text[1] == "~"
            )
            node.script = self._read_script(text[2:])
            return node
        return self.line_parser.create_node(
            Text, text=text[1:].lstrip(), escape_html=False
        )

    def _parse_text(self, text: str) -> Text | None:
        text = text.lstrip()
        if not text:
            return None
        return self.line_parser.create_node(Text, text=text)

    def _read_script(self, body: str) -> str:
        script = body.lstrip()
        if not script:
            raise HamlSyntaxError("No Ruby code to evaluate", self.line_parser.lineno)
        return "\n".join([script, *ruby_multiline.read(self.line_parser, script)])
