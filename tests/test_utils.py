"""Tests for the bracket-balance scanner and comma continuation."""

from haml_parser import ruby_multiline
from haml_parser.line_parser import LineParser
from haml_parser.utils import balance


class TestBalance:
    def test_simple(self):
        assert balance("if IE] rest", "[", "]") == ("if IE", " rest", 0)

    def test_nested(self):
        assert balance("a [b] c] d", "[", "]") == ("a [b] c", " d", 0)

    def test_unbalanced(self):
        assert balance("a [b", "[", "]") == ("a [b", "", 2)

    def test_starting_depth(self):
        assert balance("x}} y", "{", "}", depth=2) == ("x}", " y", 0)

    def test_empty(self):
        assert balance("", "(", ")") == ("", "", 1)


class TestRubyMultiline:
    def test_trailing_comma(self):
        assert ruby_multiline.is_ruby_multiline("foo(a,")

    def test_no_comma(self):
        assert not ruby_multiline.is_ruby_multiline("foo(a)")

    def test_single_comma(self):
        assert not ruby_multiline.is_ruby_multiline(",")

    def test_character_literal(self):
        assert not ruby_multiline.is_ruby_multiline("x = ?,")
        assert not ruby_multiline.is_ruby_multiline("x = ?\\,")

    def test_predicate_method_then_comma(self):
        assert ruby_multiline.is_ruby_multiline("foo x?,")

    def test_read_pulls_until_no_comma(self):
        lp = LineParser(None, "link_to a,\n  b,\n  c\n%p")
        first = lp.next_line()
        assert ruby_multiline.read(lp, first) == ["  b,", "  c"]
        assert lp.next_line() == "%p"

    def test_read_stops_at_end_of_input(self):
        lp = LineParser(None, "foo a,")
        first = lp.next_line()
        assert ruby_multiline.read(lp, first) == []
