"""Noxt tree renderer: explicit-stack evaluation of a render tree.

The renderer turns a root node into an HTML string without recursion:
component trees are user-authored and may be arbitrarily deep (or recurse
through components), so the walk keeps its own stack of frames instead of
using the Python call stack.

Frames:
    ```
    Frame
    ├── node        # what to process
    ├── phase       # ENTER (process node) or EXIT (close an element)
    ├── target      # list of output fragments to write into
    ├── owner       # nearest enclosing component name (error attribution)
    ├── template    # owner for annotations; None below a component's top level
    ├── position    # "first" / "rest" within a list, else "single"
    └── buffer_id   # EXIT only: the element's children buffer
    ```

Element handling:
Entering an element allocates a children buffer under a fresh id and
pushes two frames: EXIT (holds the open/close tag, writes to the original
target) then ENTER for the children (writes to the buffer). The children
are therefore complete when EXIT pops. EXIT releases the buffer and splices
``open + children + close`` into the target. Buffers are spliced as nested
fragment lists and joined once at the end, so a deep chain of elements
costs linear, not quadratic, time.

Suspension points:
Only component calls suspend: awaiting prop values, awaiting what a
callable prop returned, and awaiting the component's result. Everything
else is synchronous. Component calls are resolved one at a time, in
document order.

Complexity:
O(n) in the number of nodes plus output size. Stack depth is bounded by
tree depth, on the heap.

"""

from __future__ import annotations

import inspect
import logging
import time
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from noxt.environment.exceptions import BoundaryFailureError
from noxt.nodes import ComponentCall, Fragment, Node, NodeKind, to_node
from noxt.render_context import RenderContext, render_scope
from noxt.renderer.attributes import close_tag, open_tag
from noxt.renderer.boundary import contain
from noxt.renderer.props import resolve_props
from noxt.utils.html import html_escape

logger = logging.getLogger(__name__)

ROOT_OWNER = "<root>"


class Phase(Enum):
    ENTER = "enter"
    EXIT = "exit"


@dataclass(slots=True)
class Frame:
    """One unit of pending work on the render stack."""

    node: Any
    phase: Phase
    target: list[Any]
    owner: str | None = None
    template: str | None = None
    position: str = "single"
    buffer_id: int | None = None
    open_tag: str = ""
    close_tag: str = ""
    # True for frames rendering the error-display component's output
    in_boundary: bool = field(default=False)


def _flatten(fragments: list[Any]) -> str:
    """Join nested fragment lists into one string, iteratively."""
    parts: list[str] = []
    stack: list[Iterator[Any]] = [iter(fragments)]
    while stack:
        for item in stack[-1]:
            if isinstance(item, list):
                stack.append(iter(item))
                break
            parts.append(item)
        else:
            stack.pop()
    return "".join(parts)


class Renderer:
    """Renders nodes against one ``RenderContext``.

    A renderer holds the buffer table of the pass in flight; use one
    instance per ``render()`` call, or ``render_node()``.

    Example:
        >>> html = await Renderer(RenderContext()).render(h("p", None, "hi"))
        >>> html
        '<p>hi</p>'
    """

    __slots__ = ("ctx", "_buffers", "_next_buffer_id")

    def __init__(self, ctx: RenderContext):
        self.ctx = ctx
        self._buffers: dict[int, list[Any]] = {}
        self._next_buffer_id = 0

    async def render(self, root: Any) -> str:
        """Render ``root`` to an HTML string.

        Raises:
            BoundaryFailureError: If the error-display component fails
        """
        out: list[Any] = []
        stack: list[Frame] = [Frame(root, Phase.ENTER, out)]
        start = time.perf_counter()
        frames = 0

        with render_scope(self.ctx):
            while stack:
                frame = stack.pop()
                frames += 1
                if frame.phase is Phase.EXIT:
                    self._exit(frame)
                    continue
                node = frame.node
                if isinstance(node, ComponentCall):
                    await self._call(frame, stack)
                    continue
                try:
                    self._enter(frame, stack)
                except Exception as exc:
                    await self._contain(frame, frame.owner or ROOT_OWNER, exc, stack)

        html = _flatten(out)
        logger.debug(
            "Render pass: %d frames, %d chars in %.2fms",
            frames,
            len(html),
            (time.perf_counter() - start) * 1000,
        )
        return html

    # -- ENTER -------------------------------------------------------------

    def _enter(self, frame: Frame, stack: list[Frame]) -> None:
        node = frame.node if isinstance(frame.node, Node) else to_node(frame.node)
        if node is None:
            return
        kind = node.kind
        if kind is NodeKind.TEXT:
            frame.target.append(html_escape(node.value))
        elif kind is NodeKind.RAW_HTML:
            frame.target.append(node.html)
        elif kind is NodeKind.LIST:
            self._push_items(frame, node.items, stack)
        elif kind is NodeKind.ELEMENT:
            self._open_element(frame, node, stack)

    def _push_items(self, frame: Frame, items: Any, stack: list[Frame]) -> None:
        items = items if isinstance(items, (list, tuple)) else list(items)
        # reverse push so that pops visit items in source order
        for i in range(len(items) - 1, -1, -1):
            stack.append(
                Frame(
                    items[i],
                    Phase.ENTER,
                    frame.target,
                    owner=frame.owner,
                    template=frame.template,
                    position="first" if i == 0 else "rest",
                    in_boundary=frame.in_boundary,
                )
            )

    def _open_element(self, frame: Frame, node: Any, stack: list[Frame]) -> None:
        attrs = node.attrs
        if self.ctx.annotate and frame.template:
            attrs = {**attrs, "data-template": frame.template, f"data-template-{frame.position}": True}

        self._next_buffer_id += 1
        buffer_id = self._next_buffer_id
        buffer: list[Any] = []
        self._buffers[buffer_id] = buffer

        stack.append(
            Frame(
                None,
                Phase.EXIT,
                frame.target,
                owner=frame.owner,
                position=frame.position,
                buffer_id=buffer_id,
                open_tag=open_tag(node.tag, attrs),
                close_tag=close_tag(node.tag),
                in_boundary=frame.in_boundary,
            )
        )
        # children keep the owner for errors but are not annotated
        stack.append(Frame(node.children, Phase.ENTER, buffer, owner=frame.owner, in_boundary=frame.in_boundary))

    # -- EXIT --------------------------------------------------------------

    def _exit(self, frame: Frame) -> None:
        children = self._buffers.pop(frame.buffer_id)
        frame.target.append(frame.open_tag)
        frame.target.append(children)
        frame.target.append(frame.close_tag)

    # -- component calls ---------------------------------------------------

    async def _call(self, frame: Frame, stack: list[Frame]) -> None:
        call: ComponentCall = frame.node
        comp = call.component
        if comp is Fragment and frame.owner:
            owner = frame.owner
        else:
            owner = comp.name
        if comp is Fragment and frame.template:
            template = frame.template
        else:
            template = comp.name

        try:
            props = await resolve_props(call.props, self.ctx)
            props["children"] = call.children
            result = comp.render(props, self.ctx)
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:
            await self._contain(frame, comp.name, exc, stack)
            return

        stack.append(
            Frame(
                result,
                Phase.ENTER,
                frame.target,
                owner=owner,
                template=template,
                position=frame.position,
                in_boundary=frame.in_boundary,
            )
        )

    async def _contain(self, frame: Frame, component_name: str, exc: Exception, stack: list[Frame]) -> None:
        if frame.in_boundary:
            # no nested boundary: the error display itself is failing
            raise BoundaryFailureError(component_name, exc) from exc
        replacement = await contain(component_name, exc, self.ctx)
        stack.append(
            Frame(
                replacement,
                Phase.ENTER,
                frame.target,
                owner=component_name,
                template=component_name,
                position=frame.position,
                in_boundary=True,
            )
        )


async def render_node(root: Any, ctx: RenderContext | None = None) -> str:
    """Render ``root`` to HTML with a fresh ``Renderer``.

    Args:
        root: Any renderable value (node, string, number, list, ...)
        ctx: Render context; a bare one is created when omitted

    Raises:
        BoundaryFailureError: If the error-display component fails
    """
    return await Renderer(ctx if ctx is not None else RenderContext()).render(root)


__all__ = ["Frame", "Phase", "Renderer", "render_node"]
