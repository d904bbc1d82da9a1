"""Layout compositor: wraps a rendered page in a layout component.

The page is rendered first, to a string. The layout is then rendered as a
component call whose ``body`` prop carries that string as raw HTML:

    def Layout(props, ctx):
        return h("html", None,
                 h("head", None, ctx.slot("head")),
                 h("body", None, props["body"]))

``body`` is the only key under which page content reaches a layout.
Both renders share the context, and with it the slot registry, so slot
writes made while rendering the page are visible to the layout.

"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from noxt.nodes import Component, ComponentCall, Node, RawHtml, as_component
from noxt.render_context import RenderContext
from noxt.renderer import render_node

logger = logging.getLogger(__name__)

BODY_PROP = "body"

LayoutRef = str | Component | Callable[..., Any] | bool | None


def resolve_layout(layout: LayoutRef, ctx: RenderContext) -> Component | None:
    """Find the layout component to use.

    Order: explicit argument, ``ctx.layout``, then the registry's default
    layout. Strings are looked up in ``ctx.components``. A name that does
    not resolve means "no layout", not an error. ``False`` at any step
    disables the layout.
    """
    for candidate in (layout, ctx.layout, getattr(ctx.components, "default_layout", None)):
        if candidate is None:
            continue
        if candidate is False:
            return None
        if isinstance(candidate, str):
            found = ctx.components.get(candidate)
            if found is None:
                logger.debug("Layout %r not registered; rendering page unwrapped", candidate)
            return found
        return as_component(candidate)
    return None


def page_node(page: Component | Callable[..., Any] | Node, props: Mapping[str, Any] | None) -> Node:
    """Build the node for a page: components are called with ``props``."""
    if isinstance(page, Node):
        return page
    props = dict(props or {})
    children = props.pop("children", None)
    return ComponentCall(as_component(page), props, children)


async def render_with_layout(
    page: Component | Callable[..., Any] | Node,
    props: Mapping[str, Any] | None = None,
    ctx: RenderContext | None = None,
    layout: LayoutRef = None,
) -> str:
    """Render ``page`` and wrap it in a layout.

    Args:
        page: Component, plain ``(props, ctx)`` callable, or node
        props: Props for the page; also passed to the layout
        ctx: Render context for both passes (a fresh one if omitted)
        layout: Layout component, layout name, or None for the default

    Returns:
        The layout's HTML, or the page's HTML when no layout resolves.

    Raises:
        BoundaryFailureError: If the error-display component fails
    """
    ctx = ctx if ctx is not None else RenderContext()
    props = dict(props or {})

    body = await render_node(page_node(page, props), ctx)

    layout_component = resolve_layout(layout, ctx)
    if layout_component is None:
        return body

    layout_props = {**props, BODY_PROP: RawHtml(body)}
    return await render_node(ComponentCall(layout_component, layout_props), ctx)


__all__ = ["BODY_PROP", "page_node", "render_with_layout", "resolve_layout"]
