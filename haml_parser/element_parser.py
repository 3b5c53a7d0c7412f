"""Grammar for ``%tag`` element lines.

::

    %tag.class#id{ruby: 'hash'}(html='attrs')[object_ref]<>/ inline content
"""

from __future__ import annotations

import re
from typing import NoReturn

from haml_parser import utils
from haml_parser.ast_nodes import Element
from haml_parser.errors import HamlSyntaxError
from haml_parser.line_parser import LineParser
from haml_parser.script_parser import ScriptParser

ELEMENT_RE = re.compile(r"\A%([-:\w]+)([-:\w.#]*)(.*)\Z", re.DOTALL)
CLASS_AND_ID_RE = re.compile(r"([#.])([-:\w]+)")
NUKE_WHITESPACE_RE = re.compile(r"\A(><|<>|[><])(.*)\Z", re.DOTALL)
TRAILING_COMMA_RE = re.compile(r",\s*\Z")

ATTRIBUTE_BRACKETS = {
    "{": ("}", "brace"),
    "(": (")", "paren"),
    "[": ("]", "bracket"),
}


class ElementParser:
    def __init__(self, line_parser: LineParser) -> None:
        self.line_parser = line_parser

    def parse(self, text: str) -> Element:
        m = ELEMENT_RE.match(text)
        if not m:
            self._syntax_error("Invalid element declaration")

        element = self.line_parser.create_node(Element, tag_name=m.group(1))
        element.static_class, element.static_id = self._parse_class_and_id(m.group(2))
        rest = self._parse_attributes(element, m.group(3))
        rest = self._parse_nuke_whitespace(element, rest)
        rest = self._parse_self_closing(element, rest)
        element.oneline_child = ScriptParser(self.line_parser).parse(rest)
        return element

    def _parse_class_and_id(self, class_and_id: str) -> tuple[str, str]:
        classes: list[str] = []
        ids: list[str] = []
        for kind, prop in CLASS_AND_ID_RE.findall(class_and_id):
            if kind == ".":
                classes.append(prop)
            else:
                ids.append(prop)
        return " ".join(classes), "_".join(ids)

    def _parse_attributes(self, element: Element, rest: str) -> str:
        seen: set[str] = set()
        while rest[:1] in ATTRIBUTE_BRACKETS and rest[0] not in seen:
            opener = rest[0]
            seen.add(opener)
            value, rest = self._read_bracketed(rest, opener)
            if opener == "{":
                element.attributes = value
            elif opener == "(":
                element.html_attributes = value
            else:
                element.object_ref = value
        return rest

    def _read_bracketed(self, text: str, opener: str) -> tuple[str, str]:
        """Split ``text`` (starting at *opener*) into contents and remainder.

        Hash attributes may continue onto the following lines as long as the
        text read so far ends with a comma.
        """
        closer, label = ATTRIBUTE_BRACKETS[opener]
        scanned = ""
        depth = 1
        tail = text[1:]
        while True:
            prefix, rest, depth = utils.balance(tail, opener, closer, depth)
            if depth == 0:
                return scanned + prefix, rest
            scanned += prefix
            if (
                opener == "{"
                and TRAILING_COMMA_RE.search(scanned)
                and self.line_parser.has_next()
            ):
                tail = "\n" + self.line_parser.next_line()
            else:
                self._syntax_error(f"Unmatched {label}")

    def _parse_nuke_whitespace(self, element: Element, rest: str) -> str:
        m = NUKE_WHITESPACE_RE.match(rest)
        if not m:
            return rest
        element.nuke_inner_whitespace = "<" in m.group(1)
        element.nuke_outer_whitespace = ">" in m.group(1)
        return m.group(2)

    def _parse_self_closing(self, element: Element, rest: str) -> str:
        if not rest.startswith("/"):
            return rest
        if rest[1:].strip():
            self._syntax_error("Self-closing tags can't have content")
        element.self_closing = True
        return ""

    def _syntax_error(self, message: str) -> NoReturn:
        raise HamlSyntaxError(message, self.line_parser.lineno)
