"""Tests for Haml AST node definitions and export."""

from haml_parser.ast_nodes import (
    Node,
    HasChildren,
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


CONTAINERS = [Root, Element, Script, SilentScript, HtmlComment, HamlComment]
LEAVES = [Doctype, Text, Filter, Empty]


class TestDefaults:
    def test_location_defaults(self):
        node = Empty()
        assert node.filename is None
        assert node.lineno == 0

    def test_element_defaults(self):
        node = Element(tag_name="p")
        assert node.static_class == ""
        assert node.static_id == ""
        assert node.attributes == ""
        assert node.html_attributes is None
        assert node.object_ref is None
        assert node.oneline_child is None
        assert node.self_closing is False
        assert node.nuke_inner_whitespace is False
        assert node.nuke_outer_whitespace is False
        assert node.children == []

    def test_script_defaults(self):
        node = Script(script="x")
        assert node.escape_html is True
        assert node.preserve is False
        assert node.keyword is None

    def test_silent_script_defaults(self):
        node = SilentScript(script="x")
        assert node.mid_block_keyword is False
        assert node.keyword is None

    def test_comment_defaults(self):
        node = HtmlComment()
        assert node.comment == ""
        assert node.conditional == ""

    def test_text_defaults(self):
        assert Text(text="a").escape_html is True

    def test_filter_texts_not_shared(self):
        a, b = Filter(name="a"), Filter(name="b")
        a.texts.append("x")
        assert b.texts == []

    def test_children_not_shared(self):
        a, b = Element(), Element()
        a.append(Text(text="x"))
        assert b.children == []


class TestChildren:
    def test_containers_have_children(self):
        for cls in CONTAINERS:
            node = cls()
            assert isinstance(node, HasChildren)
            assert isinstance(node, Node)

    def test_leaves_have_no_children(self):
        for cls in LEAVES:
            node = cls()
            assert not isinstance(node, HasChildren)
            assert not hasattr(node, "children")

    def test_append_preserves_order(self):
        root = Root()
        first, second = Text(text="1"), Text(text="2")
        root.append(first)
        root.append(second)
        assert root.children == [first, second]


class TestExport:
    def test_type_names(self):
        names = {cls().to_dict()["type"] for cls in CONTAINERS + LEAVES}
        assert names == {
            "root", "element", "script", "silent_script", "html_comment",
            "haml_comment", "doctype", "text", "filter", "empty",
        }

    def test_container_exports_empty_children(self):
        for cls in CONTAINERS:
            assert cls().to_dict()["children"] == []

    def test_missing_optional_is_none(self):
        data = Element(tag_name="p").to_dict()
        assert "oneline_child" in data
        assert data["oneline_child"] is None
        assert data["object_ref"] is None

    def test_nested_export(self):
        el = Element(tag_name="p", lineno=1, oneline_child=Text(text="hi", lineno=1))
        el.append(Empty(lineno=2))
        data = el.to_dict()
        assert data["oneline_child"] == {
            "type": "text", "filename": None, "lineno": 1,
            "text": "hi", "escape_html": True,
        }
        assert data["children"] == [{"type": "empty", "filename": None, "lineno": 2}]

    def test_export_twice_is_equal(self):
        root = Root()
        root.append(Filter(name="plain", texts=["a"]))
        assert root.to_dict() == root.to_dict()
