"""Tests for ElementParser — the %tag line grammar."""

import pytest

from haml_parser.ast_nodes import Element, Script, Text
from haml_parser.element_parser import ElementParser
from haml_parser.errors import HamlSyntaxError
from haml_parser.line_parser import LineParser


def parse_element(source: str) -> Element:
    lp = LineParser(None, source)
    text = lp.next_line()
    return ElementParser(lp).parse(text)


class TestTagAndSelectors:
    def test_bare_tag(self):
        node = parse_element("%p")
        assert node.tag_name == "p"
        assert node.static_class == ""
        assert node.static_id == ""
        assert node.attributes == ""
        assert node.html_attributes is None
        assert node.object_ref is None
        assert node.oneline_child is None
        assert node.children == []

    def test_namespaced_tag(self):
        assert parse_element("%svg:rect").tag_name == "svg:rect"

    def test_classes_join_with_space(self):
        assert parse_element("%p.a.b-c").static_class == "a b-c"

    def test_ids_join_with_underscore(self):
        assert parse_element("%p#a#b").static_id == "a_b"

    def test_mixed_selectors(self):
        node = parse_element("%div.foo#bar.baz")
        assert node.static_class == "foo baz"
        assert node.static_id == "bar"

    def test_invalid_declaration(self):
        with pytest.raises(HamlSyntaxError, match="Invalid element declaration"):
            parse_element("%")


class TestAttributes:
    def test_hash_attributes(self):
        node = parse_element("%a{href: '/', class: {x: 1}}")
        assert node.attributes == "href: '/', class: {x: 1}"

    def test_html_attributes(self):
        node = parse_element("%a(href='/' title=t)")
        assert node.html_attributes == "href='/' title=t"

    def test_object_ref(self):
        node = parse_element("%div[@user, :greeting]")
        assert node.object_ref == "@user, :greeting"

    def test_all_attribute_kinds(self):
        node = parse_element("%a{x: 1}(y=2)[z] text")
        assert node.attributes == "x: 1"
        assert node.html_attributes == "y=2"
        assert node.object_ref == "z"
        assert node.oneline_child.text == "text"

    def test_repeated_kind_ends_attributes(self):
        node = parse_element("%a{x: 1}{y: 2}")
        assert node.attributes == "x: 1"
        assert node.oneline_child.text == "{y: 2}"

    def test_unmatched_brace(self):
        with pytest.raises(HamlSyntaxError, match="Unmatched brace"):
            parse_element("%a{x: 1")

    def test_unmatched_paren(self):
        with pytest.raises(HamlSyntaxError, match="Unmatched paren"):
            parse_element("%a(x=1,\n  y=2)")

    def test_multiline_hash(self):
        node = parse_element("%a{x: 1,\n  y: 2}")
        assert node.attributes == "x: 1,\n  y: 2"


class TestModifiers:
    def test_nuke_inner(self):
        node = parse_element("%p<")
        assert node.nuke_inner_whitespace is True
        assert node.nuke_outer_whitespace is False

    def test_nuke_outer(self):
        node = parse_element("%p>")
        assert node.nuke_inner_whitespace is False
        assert node.nuke_outer_whitespace is True

    def test_nuke_both(self):
        for marker in ("<>", "><"):
            node = parse_element("%p" + marker)
            assert node.nuke_inner_whitespace is True
            assert node.nuke_outer_whitespace is True

    def test_self_closing(self):
        node = parse_element("%br/")
        assert node.self_closing is True
        assert node.oneline_child is None

    def test_self_closing_after_attributes(self):
        node = parse_element("%img{src: x}/")
        assert node.self_closing is True
        assert node.attributes == "src: x"

    def test_self_closing_with_content(self):
        with pytest.raises(HamlSyntaxError, match="Self-closing tags can't have content"):
            parse_element("%br/ text")


class TestOnelineChild:
    def test_text(self):
        node = parse_element("%p hello")
        assert isinstance(node.oneline_child, Text)
        assert node.oneline_child.text == "hello"

    def test_script(self):
        node = parse_element("%p= user.name")
        assert isinstance(node.oneline_child, Script)
        assert node.oneline_child.script == "user.name"

    def test_unescaped_script(self):
        node = parse_element("%p!= raw")
        assert node.oneline_child.escape_html is False
