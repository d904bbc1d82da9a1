"""Tree renderer tests: escaping, ordering, deep trees, owners and annotations."""

from __future__ import annotations

import asyncio

import pytest
from hypothesis import given, settings

from noxt import (
    Component,
    Element,
    Fragment,
    Markup,
    NodeList,
    RawHtml,
    RenderContext,
    Renderer,
    Text,
    component,
    h,
    render_node,
)
from tests.strategies import trees

# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────


async def _after(delay: float, value):
    await asyncio.sleep(delay)
    return value


@component
async def Delayed(props, ctx):
    await asyncio.sleep(props["delay"])
    return props["label"]


@component
def Item(props, ctx):
    return h("li", None, props["label"])


# ─────────────────────────────────────────────────────────────────────────────
# Leaves
# ─────────────────────────────────────────────────────────────────────────────


class TestLeaves:
    """Text is escaped exactly once; raw HTML passes through."""

    @pytest.mark.asyncio
    async def test_string_escaped(self):
        assert await render_node("<script>alert('x')</script>") == (
            "&lt;script&gt;alert(&#39;x&#39;)&lt;/script&gt;"
        )

    @pytest.mark.asyncio
    async def test_text_node_escaped_once(self):
        assert await render_node(Text("&amp;")) == "&amp;amp;"

    @pytest.mark.asyncio
    async def test_raw_html_verbatim(self):
        payload = "<b>bold</b> & <i>raw</i>"
        assert await render_node(RawHtml(payload)) == payload

    @pytest.mark.asyncio
    async def test_markup_verbatim(self):
        assert await render_node(Markup("<br>")) == "<br>"

    @pytest.mark.asyncio
    async def test_numbers(self):
        assert await render_node([1, " ", 2.5, " ", Text(3)]) == "1 2.5 3"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [None, True, False, [], NodeList()])
    async def test_nothing(self, value):
        assert await render_node(value) == ""

    @given(trees)
    @settings(max_examples=50, deadline=None)
    def test_generated_trees(self, pair):
        node, expected = pair
        assert asyncio.run(render_node(node)) == expected


# ─────────────────────────────────────────────────────────────────────────────
# Elements and lists
# ─────────────────────────────────────────────────────────────────────────────


class TestElements:
    @pytest.mark.asyncio
    async def test_element_with_attributes(self):
        node = h("a", {"href": "/x", "class": ["btn", {"active": True}]}, "Go")
        assert await render_node(node) == '<a href="/x" class="btn active">Go</a>'

    @pytest.mark.asyncio
    async def test_nested_elements(self):
        node = h("ul", None, h("li", None, "a"), h("li", None, "b"))
        assert await render_node(node) == "<ul><li>a</li><li>b</li></ul>"

    @pytest.mark.asyncio
    async def test_nested_lists_flatten(self):
        assert await render_node(["a", ["b", ("c", iter(["d"]))], NodeList(("e",))]) == "abcde"

    @pytest.mark.asyncio
    async def test_generator_children(self):
        node = h("ul", None, (Item(label=str(i)) for i in range(3)))
        assert await render_node(node) == "<ul><li>0</li><li>1</li><li>2</li></ul>"

    @pytest.mark.asyncio
    async def test_children_attribute_is_rendered_not_serialized(self):
        node = Element("div", {"children": "x", "id": "a"}, "y")
        assert await render_node(node) == '<div id="a">y</div>'


# ─────────────────────────────────────────────────────────────────────────────
# Ordering under async latency
# ─────────────────────────────────────────────────────────────────────────────


class TestOrdering:
    """Output order is document order whatever the await timings."""

    @pytest.mark.asyncio
    async def test_staggered_component_delays(self):
        items = [Delayed(label=str(i), delay=(5 - i) * 0.002) for i in range(5)]
        assert await render_node(h("p", None, items)) == "<p>01234</p>"

    @pytest.mark.asyncio
    async def test_staggered_prop_delays(self):
        items = [Item(label=_after((4 - i) * 0.002, f"item{i}")) for i in range(4)]
        assert await render_node(items) == "<li>item0</li><li>item1</li><li>item2</li><li>item3</li>"

    @pytest.mark.asyncio
    async def test_concurrent_passes_are_isolated(self):
        async def one(i):
            ctx = RenderContext({"n": i})
            probe = Component("Probe", lambda props, ctx: _after(0.001 * (3 - i), ctx["n"]))
            return await render_node(h("b", None, probe()), ctx)

        results = await asyncio.gather(*(one(i) for i in range(4)))
        assert results == ["<b>0</b>", "<b>1</b>", "<b>2</b>", "<b>3</b>"]


# ─────────────────────────────────────────────────────────────────────────────
# Deep trees
# ─────────────────────────────────────────────────────────────────────────────


class TestDeepTrees:
    """Depth is bounded by the heap, not the Python call stack."""

    @pytest.mark.asyncio
    @pytest.mark.slow
    async def test_hundred_thousand_nested_elements(self):
        depth = 100_000
        node = "leaf"
        for _ in range(depth):
            node = Element("div", {}, node)
        html = await render_node(node)
        assert html == "<div>" * depth + "leaf" + "</div>" * depth

    @pytest.mark.asyncio
    async def test_deep_component_recursion(self):
        @component
        def Countdown(props, ctx):
            n = props["n"]
            if n == 0:
                return "liftoff"
            return h("i", None, Countdown(n=n - 1))

        depth = 5_000
        html = await render_node(Countdown(n=depth))
        assert html == "<i>" * depth + "liftoff" + "</i>" * depth

    @pytest.mark.asyncio
    async def test_recursive_tree_component(self):
        @component
        def Tree(props, ctx):
            node = props["node"]
            kids = [Tree(node=child) for child in node.get("children", [])]
            return h("li", None, node["name"], h("ul", None, kids) if kids else None)

        data = {"name": "root", "children": [{"name": "a"}, {"name": "b", "children": [{"name": "c"}]}]}
        assert await render_node(Tree(node=data)) == (
            "<li>root<ul><li>a</li><li>b<ul><li>c</li></ul></li></ul></li>"
        )


# ─────────────────────────────────────────────────────────────────────────────
# Components, fragments and annotations
# ─────────────────────────────────────────────────────────────────────────────


class TestComponents:
    @pytest.mark.asyncio
    async def test_children_prop(self):
        card = Component("Card", lambda props, ctx: h("div", {"class": "card"}, props["children"]))
        assert await render_node(card(None, "a", "b")) == '<div class="card">ab</div>'

    @pytest.mark.asyncio
    async def test_component_returning_component_call(self):
        outer = Component("Outer", lambda props, ctx: Item(label=props["x"]))
        assert await render_node(outer(x="y")) == "<li>y</li>"

    @pytest.mark.asyncio
    async def test_sync_component_returning_awaitable(self):
        comp = Component("Later", lambda props, ctx: _after(0, h("b", None, "x")))
        assert await render_node(comp()) == "<b>x</b>"

    @pytest.mark.asyncio
    async def test_fragment(self):
        assert await render_node(Fragment(None, "a", h("b", None, "c"))) == "a<b>c</b>"

    @pytest.mark.asyncio
    async def test_renderer_instance(self):
        assert await Renderer(RenderContext()).render(h("p", None, "hi")) == "<p>hi</p>"


class TestAnnotations:
    """data-template attributes name the owning component."""

    @pytest.mark.asyncio
    async def test_off_by_default(self):
        assert await render_node(Item(label="x")) == "<li>x</li>"

    @pytest.mark.asyncio
    async def test_owner_and_position(self):
        listing = Component("Listing", lambda props, ctx: [h("p", None, "a"), h("p", None, "b")])
        html = await render_node(listing(), RenderContext(annotate=True))
        assert html == (
            '<p data-template="Listing" data-template-first>a</p>'
            '<p data-template="Listing" data-template-rest>b</p>'
        )

    @pytest.mark.asyncio
    async def test_fragment_inherits_owner(self):
        card = Component("Card", lambda props, ctx: Fragment(None, h("p", None, "x")))
        html = await render_node(card(), RenderContext(annotate=True))
        assert html == '<p data-template="Card" data-template-single>x</p>'

    @pytest.mark.asyncio
    async def test_nested_elements_not_annotated(self):
        card = Component("Card", lambda props, ctx: h("div", None, h("span", None, "x")))
        html = await render_node(card(), RenderContext(annotate=True))
        assert html == '<div data-template="Card" data-template-single><span>x</span></div>'

    @pytest.mark.asyncio
    async def test_list_inside_element_not_annotated(self):
        card = Component("Card", lambda props, ctx: h("ul", None, [h("li", None, "a"), h("li", None, "b")]))
        html = await render_node(card(), RenderContext(annotate=True))
        assert html == '<ul data-template="Card" data-template-single><li>a</li><li>b</li></ul>'

    @pytest.mark.asyncio
    async def test_nested_component_annotates_its_own_top_level(self):
        inner = Component("Badge", lambda props, ctx: h("b", None, "!"))
        card = Component("Card", lambda props, ctx: h("div", None, inner()))
        html = await render_node(card(), RenderContext(annotate=True))
        assert html == (
            '<div data-template="Card" data-template-single>'
            '<b data-template="Badge" data-template-single>!</b></div>'
        )

    @pytest.mark.asyncio
    async def test_no_owner_no_annotation(self):
        assert await render_node(h("p", None, "x"), RenderContext(annotate=True)) == "<p>x</p>"
