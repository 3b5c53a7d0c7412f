"""Haml AST node definitions.

Every node is a Python dataclass carrying ``filename`` and ``lineno`` for
source-location tracking.  Container nodes additionally own an ordered
``children`` list; the ``HasChildren`` mixin gives them ``append``.

``to_dict()`` exports a plain nested mapping, which is what tests compare
against and what the CLI prints.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any


# ── Base ────────────────────────────────────────────────────────────────────

@dataclass
class Node:
    """Base class for every AST node."""
    filename: str | None = None
    lineno: int = 0

    node_type = "node"

    def to_dict(self) -> dict[str, Any]:
        return export(self)


class HasChildren:
    """Capability shared by nodes that can be a nesting target."""

    children: list

    def append(self, node: Node) -> None:
        self.children.append(node)


def export(node: Node) -> dict[str, Any]:
    """Return a structural snapshot of *node* with children expanded."""
    result: dict[str, Any] = {"type": node.node_type}
    for f in dataclasses.fields(node):
        value = getattr(node, f.name)
        if f.name == "children":
            value = [export(child) for child in value]
        elif isinstance(value, Node):
            value = export(value)
        elif isinstance(value, list):
            value = list(value)
        result[f.name] = value
    return result


# ── Document ────────────────────────────────────────────────────────────────

@dataclass
class Root(HasChildren, Node):
    children: list = field(default_factory=list)

    node_type = "root"


@dataclass
class Doctype(Node):
    doctype: str = ""

    node_type = "doctype"


# ── Markup ──────────────────────────────────────────────────────────────────

@dataclass
class Element(HasChildren, Node):
    tag_name: str = ""
    static_class: str = ""
    static_id: str = ""
    attributes: str = ""
    html_attributes: str | None = None
    object_ref: str | None = None
    oneline_child: Node | None = None
    self_closing: bool = False
    nuke_inner_whitespace: bool = False
    nuke_outer_whitespace: bool = False
    children: list = field(default_factory=list)

    node_type = "element"


@dataclass
class Text(Node):
    text: str = ""
    escape_html: bool = True

    node_type = "text"


@dataclass
class Filter(Node):
    name: str = ""
    texts: list[str] = field(default_factory=list)

    node_type = "filter"


@dataclass
class Empty(Node):
    node_type = "empty"


# ── Embedded code ───────────────────────────────────────────────────────────

@dataclass
class Script(HasChildren, Node):
    script: str = ""
    escape_html: bool = True
    preserve: bool = False
    keyword: str | None = None
    children: list = field(default_factory=list)

    node_type = "script"


@dataclass
class SilentScript(HasChildren, Node):
    script: str = ""
    mid_block_keyword: bool = False
    keyword: str | None = None
    children: list = field(default_factory=list)

    node_type = "silent_script"


# ── Comments ────────────────────────────────────────────────────────────────

@dataclass
class HtmlComment(HasChildren, Node):
    comment: str = ""
    conditional: str = ""
    children: list = field(default_factory=list)

    node_type = "html_comment"


@dataclass
class HamlComment(HasChildren, Node):
    children: list = field(default_factory=list)

    node_type = "haml_comment"
