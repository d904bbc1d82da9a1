"""Noxt RenderContext: the data threaded through one render pass.

Every component is called as ``render(props, ctx)``. ``ctx`` is a
``RenderContext``: a read-mostly mapping over global data and per-request
data, plus the component table and the slot registry of the current pass.

Lookup order for ``ctx[name]``:
1. context data (global context, ``request``, ``response``, ``query``, ...)
2. registered components (``ctx["Card"]``)

Components that need to pass extra data down build a new context with
``ctx.extend(**values)``; the original is never mutated by the renderer.

The context of the pass in flight is also published through a ContextVar,
so helpers that are not handed ``ctx`` can reach it:

    >>> from noxt.render_context import get_render_context
    >>> get_render_context() is None   # outside a render pass
    True

Async Safety:
ContextVars are task-local. Each request renders in its own task, so
concurrent requests never see each other's context.

"""

from __future__ import annotations

from collections.abc import Hashable, Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING, Any

from noxt.slots import Slots

if TYPE_CHECKING:
    from noxt.nodes import Component


class RenderContext(Mapping[str, Any]):
    """Per-pass render context.

    Attributes:
        components: Component table (name -> Component); used for layout
            lookup, the error-display component and ``ctx["Name"]``
        slots: Slot registry for this pass
        debug: Include tracebacks in inline error markers
        annotate: Add ``data-template`` attributes naming the owning component
        layout: Layout override; ``before_request`` hooks may set it

    Example:
        >>> ctx = RenderContext({"site": "Docs"})
        >>> ctx["site"]
        'Docs'
        >>> child = ctx.extend(section="api")
        >>> child["section"], "section" in ctx
        ('api', False)
    """

    __slots__ = ("_data", "components", "slots", "debug", "annotate", "layout")

    def __init__(
        self,
        data: Mapping[str, Any] | None = None,
        *,
        components: Mapping[str, Component] | None = None,
        slots: Slots | None = None,
        debug: bool = False,
        annotate: bool = False,
        layout: str | Component | None = None,
    ):
        self._data: dict[str, Any] = dict(data or {})
        self.components: Mapping[str, Component] = components if components is not None else {}
        self.slots = slots if slots is not None else Slots()
        self.debug = debug
        self.annotate = annotate
        self.layout = layout

    def __getitem__(self, key: str) -> Any:
        try:
            return self._data[key]
        except KeyError:
            pass
        return self.components[key]

    def __iter__(self) -> Iterator[str]:
        yield from self._data
        for name in self.components:
            if name not in self._data:
                yield name

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __contains__(self, key: object) -> bool:
        return key in self._data or key in self.components

    @property
    def data(self) -> Mapping[str, Any]:
        """Context data without the component table."""
        return self._data

    @property
    def request(self) -> Any:
        return self._data.get("request")

    @property
    def response(self) -> Any:
        return self._data.get("response")

    @property
    def query(self) -> Mapping[str, Any]:
        return self._data.get("query") or {}

    def extend(self, **values: Any) -> RenderContext:
        """Return a child context with extra data.

        Shares components, slots and flags with the parent.
        """
        child = RenderContext(
            {**self._data, **values},
            components=self.components,
            slots=self.slots,
            debug=self.debug,
            annotate=self.annotate,
            layout=self.layout,
        )
        return child

    def slot(self, slot_id: Hashable, *args: Any) -> list[Any] | None:
        """Shorthand for ``ctx.slots.slot(...)``."""
        return self.slots.slot(slot_id, *args)

    def __repr__(self) -> str:
        return f"RenderContext(data={sorted(self._data)!r}, components={len(self.components)})"


# Module-level ContextVar
_render_context: ContextVar[RenderContext | None] = ContextVar(
    "noxt_render_context",
    default=None,
)


def get_render_context() -> RenderContext | None:
    """Get the context of the render pass in flight (None outside a pass)."""
    return _render_context.get()


def get_render_context_required() -> RenderContext:
    """Get the context of the render pass in flight.

    Raises:
        RuntimeError: If called outside a render pass
    """
    ctx = _render_context.get()
    if ctx is None:
        raise RuntimeError("Not in a render pass")
    return ctx


@contextmanager
def render_scope(ctx: RenderContext) -> Iterator[RenderContext]:
    """Publish ``ctx`` as the current render context for the with block.

    Restores the previous context on exit, so nested passes (a layout
    rendered after its page) restore correctly.
    """
    token: Token[RenderContext | None] = _render_context.set(ctx)
    try:
        yield ctx
    finally:
        _render_context.reset(token)


__all__ = [
    "RenderContext",
    "get_render_context",
    "get_render_context_required",
    "render_scope",
]
