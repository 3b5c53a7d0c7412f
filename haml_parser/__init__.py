"""haml_parser — turns Haml template source into a typed AST."""

from haml_parser.ast_nodes import (
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
from haml_parser.errors import HamlError, HamlSyntaxError, IndentError
from haml_parser.parser import Parser


def parse(source: str, filename: str | None = None) -> Root:
    """Parse *source* and return the root of the AST."""
    return Parser(filename=filename).call(source)


__all__ = [
    "parse", "Parser",
    "Node", "Root", "Doctype", "Element", "Script", "SilentScript",
    "HtmlComment", "HamlComment", "Text", "Filter", "Empty",
    "HamlError", "HamlSyntaxError", "IndentError",
]
