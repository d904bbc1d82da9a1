"""Tests for the node model, components and the h() builder."""

import pytest

from noxt import (
    Component,
    ComponentCall,
    Element,
    Fragment,
    InvalidIdentifierError,
    Markup,
    NodeKind,
    NodeList,
    RawHtml,
    Text,
    as_component,
    component,
    create_element,
    h,
    to_node,
)


def card(props, ctx):
    return h("div", {"class": "card"}, props.get("children"))


Card = Component("Card", card)


class TestNodeKinds:
    def test_kinds(self):
        assert Text("x").kind is NodeKind.TEXT
        assert RawHtml("<b>").kind is NodeKind.RAW_HTML
        assert NodeList(()).kind is NodeKind.LIST
        assert Element("p").kind is NodeKind.ELEMENT
        assert ComponentCall(Card).kind is NodeKind.COMPONENT_CALL

    def test_nodes_are_frozen(self):
        node = Text("x")
        with pytest.raises(AttributeError):
            node.value = "y"


class TestH:
    """h() builds elements for tags and calls for components."""

    def test_element_with_children(self):
        node = h("div", {"id": "x"}, "a", "b")
        assert node == Element("div", {"id": "x"}, NodeList(("a", "b")))

    def test_single_child_is_not_wrapped(self):
        assert h("p", None, "hi") == Element("p", {}, "hi")

    def test_children_prop_used_without_positional_children(self):
        node = h("div", {"children": "c"})
        assert node.children == "c"
        assert "children" not in node.attrs

    def test_positional_children_win_over_children_prop(self):
        node = h("div", {"children": "c"}, "d")
        assert node.children == "d"
        assert node.attrs == {}

    def test_component_call(self):
        call = h(Card, {"title": "t"}, "x")
        assert isinstance(call, ComponentCall)
        assert call.component is Card
        assert call.props == {"title": "t"}
        assert call.children == "x"

    def test_calling_component_builds_call(self):
        call = Card({"a": 1}, "x", "y", b=2)
        assert call.props == {"a": 1, "b": 2}
        assert call.children == NodeList(("x", "y"))

    def test_plain_function_uses_its_name(self):
        def Sidebar(props, ctx):
            return None

        assert h(Sidebar).component.name == "Sidebar"

    def test_lambda_is_anonymous(self):
        assert h(lambda props, ctx: None).component.name == "Anonymous"

    def test_create_element_alias(self):
        assert create_element is h


class TestComponent:
    """Component names are explicit and validated."""

    @pytest.mark.parametrize("name", ["A", "Card", "A_1", "x9"])
    def test_valid_names(self, name):
        assert Component(name, card).name == name

    @pytest.mark.parametrize("name", ["", "1abc", "_x", "my-card", "has space", "Ünï"])
    def test_invalid_names(self, name):
        with pytest.raises(InvalidIdentifierError) as exc_info:
            Component(name, card)
        assert exc_info.value.name == name

    def test_decorator(self):
        @component
        def Greeting(props, ctx):
            return "hi"

        assert isinstance(Greeting, Component)
        assert Greeting.name == "Greeting"

    def test_decorator_with_name(self):
        @component(name="SiteNav")
        def nav(props, ctx):
            return None

        assert nav.name == "SiteNav"

    def test_module_not_compared(self):
        assert Component("Card", card, module=object()) == Component("Card", card)

    def test_as_component_passthrough(self):
        assert as_component(Card) is Card

    def test_as_component_rejects_non_callables(self):
        with pytest.raises(TypeError):
            as_component("Card")

    def test_fragment(self):
        assert Fragment.name == "Fragment"
        assert Fragment.render({"children": "x"}, None) == "x"


class TestToNode:
    """Coercion is by type only."""

    def test_nothing(self):
        assert to_node(None) is None
        assert to_node(True) is None
        assert to_node(False) is None

    def test_markup_is_raw(self):
        assert to_node(Markup("<b>")) == RawHtml("<b>")

    def test_text_and_numbers(self):
        assert to_node("x") == Text("x")
        assert to_node(3) == Text(3)

    def test_sequences(self):
        assert to_node([1, "a"]) == NodeList((1, "a"))
        assert to_node(iter(["a"])) == NodeList(("a",))

    def test_nodes_pass_through(self):
        node = Element("p")
        assert to_node(node) is node

    def test_dict_with_html_key_is_not_raw(self):
        with pytest.raises(TypeError):
            to_node({"html": "<b>x</b>"})
