"""Haml parser — line-oriented driver producing an AST from template source.

The driver pulls one logical line at a time, classifies it by its first
character and appends the resulting node to the current context.  Nesting is
driven entirely by ``IndentTracker`` callbacks: ``_indent_enter`` makes the
last appended node the new context, ``_indent_leave`` restores its parent.
"""

from __future__ import annotations

import logging
import re
from typing import NoReturn, TypeVar

from haml_parser import ruby_multiline, utils
from haml_parser.ast_nodes import (
    HasChildren,
    Node,
    Root,
    Doctype,
    Element,
    Script,
    SilentScript,
    HtmlComment,
    HamlComment,
    Text,
    Filter,
    Empty,
)
from haml_parser.element_parser import ElementParser
from haml_parser.errors import HamlError, HamlSyntaxError
from haml_parser.filter_parser import FilterParser
from haml_parser.indent_tracker import IndentTracker
from haml_parser.line_parser import LineParser
from haml_parser.script_parser import ScriptParser

logger = logging.getLogger(__name__)

N = TypeVar("N", bound=Node)

DOCTYPE_PREFIX = "!"
DOCTYPE_SENTINEL = "!!!"
ELEMENT_PREFIX = "%"
COMMENT_PREFIX = "/"
SILENT_SCRIPT_PREFIX = "-"
HAML_COMMENT_SENTINEL = "-#"
DIV_ID_PREFIX = "#"
DIV_CLASS_PREFIX = "."
INTERPOLATION_OPENER = "#{"
FILTER_PREFIX = ":"
ESCAPE_PREFIX = "\\"

FILTER_NAME_RE = re.compile(r"\A:(\w+)\Z")
SILENT_SCRIPT_RE = re.compile(r"\A- *(.*)\Z", re.DOTALL)

MID_BLOCK_KEYWORDS = ("else", "elsif", "rescue", "ensure", "end", "when")
START_BLOCK_KEYWORDS = ("if", "begin", "case", "unless")

_MID_BLOCK_RE = re.compile(r"-?\s*(%s)\b" % "|".join(MID_BLOCK_KEYWORDS))
_START_BLOCK_RE = re.compile(r"-?\s*(%s)\b" % "|".join(START_BLOCK_KEYWORDS))
# Assignments to block starters, e.g. ``foo, bar = if baz``.
_ASSIGNED_START_BLOCK_RE = re.compile(
    r"-?\s*\w+(?:,\s*\w+)*\s*=\s*(%s)\b" % "|".join(START_BLOCK_KEYWORDS)
)


def block_keyword(text: str, allow_assignment: bool = False) -> str | None:
    """Return the block keyword *text* opens or continues, if any.

    Mid-block keywords win over start-block keywords.
    """
    m = _MID_BLOCK_RE.match(text) or _START_BLOCK_RE.match(text)
    if m is None and allow_assignment:
        m = _ASSIGNED_START_BLOCK_RE.match(text)
    return m.group(1) if m else None


class Parser:
    """Indentation-driven parser for Haml templates.

    A ``Parser`` can be reused; every ``call`` starts from fresh state.
    """

    def __init__(self, filename: str | None = None) -> None:
        self.filename = filename

    # -- Top-level ---------------------------------------------------------

    def call(self, source: str) -> Root:
        """Parse *source* and return the ``Root`` of the tree."""
        self.ast: Node = Root()
        self.stack: list[Node] = []
        self.line_parser = LineParser(self.filename, source)
        self.indent_tracker = IndentTracker(
            on_enter=self._indent_enter, on_leave=self._indent_leave
        )
        self.filter_parser = FilterParser(self.indent_tracker)

        try:
            while self.line_parser.has_next():
                self._parse_next()

            node = self.filter_parser.finish()
            if node is not None:
                self._append_filter(node, self.line_parser.lineno)
            self.indent_tracker.finish()
        except HamlError as e:
            if self.filename and e.lineno:
                e.attach_filename(self.filename)
            raise
        return self.ast

    def _parse_next(self) -> None:
        in_filter = not isinstance(self.ast, HamlComment) and self.filter_parser.enabled()
        line = self.line_parser.next_line(in_filter=in_filter)
        if in_filter:
            node = self.filter_parser.append(line)
            if node is not None:
                self._append_filter(node, self.line_parser.lineno - 1)
        if self.filter_parser.enabled():
            return

        line_count = line.count("\n")
        self._parse_line(line.replace("\n", ""))
        for _ in range(line_count):
            self.ast.append(self._create_node(Empty))

    def _append_filter(self, node: Filter, last_lineno: int) -> None:
        """Append a closed filter, then one ``Empty`` per blank line it dropped.

        *last_lineno* is the last line that belonged to the filter block.
        """
        self.ast.append(node)
        count = self.filter_parser.trailing_blank_lines
        for lineno in range(last_lineno - count + 1, last_lineno + 1):
            self.ast.append(Empty(filename=self.line_parser.filename, lineno=lineno))

    # -- Line dispatch -----------------------------------------------------

    def _parse_line(self, line: str) -> None:
        text, _indent = self.indent_tracker.process(line, self.line_parser.lineno)

        if not text:
            self.ast.append(self._create_node(Empty))
            return

        if isinstance(self.ast, HamlComment):
            self.ast.append(self._create_node(Text, text=text))
            return

        self._dispatch(text)

    def _dispatch(self, text: str) -> None:
        prefix = text[0]
        if prefix == ESCAPE_PREFIX:
            self._parse_plain(text[1:])
        elif prefix == ELEMENT_PREFIX:
            self._parse_element(text)
        elif prefix == DOCTYPE_PREFIX:
            if text.startswith(DOCTYPE_SENTINEL):
                self._parse_doctype(text)
            else:
                self._parse_script(text)
        elif prefix == COMMENT_PREFIX:
            self._parse_comment(text)
        elif prefix == SILENT_SCRIPT_PREFIX:
            self._parse_silent_script(text)
        elif prefix in (DIV_ID_PREFIX, DIV_CLASS_PREFIX):
            if text.startswith(INTERPOLATION_OPENER):
                self._parse_script(text)
            else:
                self._dispatch(f"{ELEMENT_PREFIX}div{text}")
        elif prefix == FILTER_PREFIX:
            self._parse_filter(text)
        else:
            self._parse_script(text)

    def _parse_doctype(self, text: str) -> None:
        doctype = text[len(DOCTYPE_SENTINEL):].strip()
        self.ast.append(self._create_node(Doctype, doctype=doctype))

    def _parse_comment(self, text: str) -> None:
        text = text[1:].strip()
        comment = self._create_node(HtmlComment)
        if text.startswith("["):
            comment.conditional, text = self._parse_conditional_comment(text)
        comment.comment = text
        self.ast.append(comment)

    def _parse_conditional_comment(self, text: str) -> tuple[str, str]:
        conditional, rest, depth = utils.balance(text[1:], "[", "]")
        if depth != 0:
            self._syntax_error("Unmatched brackets in conditional comment")
        return conditional, rest.lstrip()

    def _parse_plain(self, text: str) -> None:
        self.ast.append(self._create_node(Text, text=text))

    def _parse_element(self, text: str) -> None:
        self.ast.append(ElementParser(self.line_parser).parse(text))

    def _parse_script(self, text: str) -> None:
        node = ScriptParser(self.line_parser).parse(text)
        if node is None:
            return
        if isinstance(node, Script):
            node.keyword = block_keyword(node.script, allow_assignment=True)
        self.ast.append(node)

    def _parse_silent_script(self, text: str) -> None:
        if text.startswith(HAML_COMMENT_SENTINEL):
            self.ast.append(self._create_node(HamlComment))
            return
        node = self._create_node(SilentScript)
        script = SILENT_SCRIPT_RE.match(text).group(1)
        node.script = "\n".join([script, *ruby_multiline.read(self.line_parser, script)])
        node.keyword = block_keyword(node.script)
        node.mid_block_keyword = node.keyword in MID_BLOCK_KEYWORDS
        self.ast.append(node)

    def _parse_filter(self, text: str) -> None:
        m = FILTER_NAME_RE.match(text)
        if not m:
            self._syntax_error(f"Invalid filter name: {text}")
        self.filter_parser.start(m.group(1), self.line_parser.filename, self.line_parser.lineno)

    # -- Indent callbacks --------------------------------------------------

    def _indent_enter(self, indent_level: int, text: str) -> None:
        empty_lines: list[Node] = []
        while self.ast.children and isinstance(self.ast.children[-1], Empty):
            empty_lines.insert(0, self.ast.children.pop())

        if not self.ast.children:
            self._syntax_error("Indenting at the beginning of the document is illegal")
        self.stack.append(self.ast)
        self.ast = self.ast.children[-1]
        logger.debug("entering %s from line %d", self.ast.node_type, self.ast.lineno)

        if isinstance(self.ast, Text):
            self._syntax_error("Illegal nesting: nesting within plain text is illegal")
        if isinstance(self.ast, Doctype):
            self._syntax_error("Illegal nesting: nesting within a header command is illegal")
        if not isinstance(self.ast, HasChildren):
            self._syntax_error(f"Illegal nesting: nesting within a {self.ast.node_type} is illegal")
        if isinstance(self.ast, Element) and self.ast.self_closing:
            self._syntax_error("Illegal nesting: nesting within a self-closing tag is illegal")
        if isinstance(self.ast, HtmlComment) and self.ast.comment:
            self._syntax_error(
                "Illegal nesting: nesting within a html comment that already has content is illegal"
            )
        self.ast.children = empty_lines

        if isinstance(self.ast, HamlComment):
            self.indent_tracker.enter_comment()
        else:
            self.indent_tracker.check_indent_level(self.line_parser.lineno)

    def _indent_leave(self, indent_level: int, text: str) -> None:
        self.ast = self.stack.pop()
        logger.debug("returning to %s", self.ast.node_type)

    # -- Helpers -----------------------------------------------------------

    def _create_node(self, node_cls: type[N], **fields) -> N:
        return self.line_parser.create_node(node_cls, **fields)

    def _syntax_error(self, message: str) -> NoReturn:
        raise HamlSyntaxError(message, self.line_parser.lineno)
