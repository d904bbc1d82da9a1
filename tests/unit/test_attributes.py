"""Tests for attribute serialization."""

import logging

import pytest

from noxt.renderer.attributes import close_tag, open_tag, serialize_attributes


class TestSerializeAttributes:
    def test_class_list_with_mapping(self):
        assert serialize_attributes({"class": ["a", {"b": True, "c": False}]}) == ' class="a b"'

    def test_true_is_bare(self):
        assert serialize_attributes({"disabled": True}) == " disabled"

    @pytest.mark.parametrize("value", [False, None])
    def test_false_and_none_omitted(self, value):
        assert serialize_attributes({"hidden": value}) == ""

    def test_values_are_escaped(self):
        assert serialize_attributes({"title": 'say "hi" & <bye>'}) == (
            ' title="say &quot;hi&quot; &amp; &lt;bye&gt;"'
        )

    def test_numbers(self):
        assert serialize_attributes({"tabindex": 0, "value": 1.5}) == ' tabindex="0" value="1.5"'

    @pytest.mark.parametrize("value", ["", [], {"a": False}, [None, False]])
    def test_empty_class_omitted(self, value):
        assert serialize_attributes({"class": value}) == ""

    def test_class_string_escaped(self):
        assert serialize_attributes({"class": 'a"b'}) == ' class="a&quot;b"'

    def test_children_never_an_attribute(self):
        assert serialize_attributes({"children": "x", "id": "y"}) == ' id="y"'

    def test_order_preserved(self):
        assert serialize_attributes({"id": "a", "class": "b", "open": True}) == ' id="a" class="b" open'

    def test_unsupported_values_omitted_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="noxt.renderer.attributes"):
            assert serialize_attributes({"data-x": object(), "id": "y"}) == ' id="y"'
        assert "data-x" in caplog.text


class TestTags:
    def test_open_tag(self):
        assert open_tag("a", {"href": "/x?a=1&b=2"}) == '<a href="/x?a=1&amp;b=2">'

    def test_open_tag_without_attributes(self):
        assert open_tag("p", {}) == "<p>"

    def test_close_tag(self):
        assert close_tag("p") == "</p>"
