"""Components, component calls and the ``h()`` builder.

A ``Component`` pairs an explicit name with a render callable
``(props, ctx)``. The render callable may be sync or async and may return
any child value, including another ``ComponentCall``.

Example:
    >>> @component
    ... async def Greeting(props, ctx):
    ...     return h("p", {"class": "greeting"}, "Hello, ", props["name"])
    >>> call = Greeting(name="World")
    >>> call.component.name
    'Greeting'

Building trees:
    ``h(type, props, *children)`` builds an ``Element`` for string types and
    a ``ComponentCall`` for components and plain callables.

"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from noxt.environment.exceptions import InvalidIdentifierError
from noxt.nodes.base import Node, NodeKind
from noxt.nodes.html import Element, NodeList, RawHtml, Text
from noxt.utils.html import Markup

IDENTIFIER_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")

ANONYMOUS = "Anonymous"


def validate_name(name: str) -> str:
    """Return ``name`` if it is a valid component identifier.

    Raises:
        InvalidIdentifierError: If it does not match ``[A-Za-z][A-Za-z0-9_]*``
    """
    if not isinstance(name, str) or not IDENTIFIER_RE.match(name):
        raise InvalidIdentifierError(str(name))
    return name


@dataclass(frozen=True, slots=True)
class Component:
    """A named render function.

    Attributes:
        name: Display name, used for error attribution and debug attributes
        render: Callable ``(props, ctx)`` returning a child value or awaitable
        module: View module the component was loaded from, if any

    Calling a component builds a ``ComponentCall``; it does not render.
    """

    name: str
    render: Callable[..., Any] = field(repr=False)
    module: Any = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        validate_name(self.name)

    def __call__(self, props: Mapping[str, Any] | None = None, /, *children: Any, **kwargs: Any) -> ComponentCall:
        merged = {**(props or {}), **kwargs}
        return _make_call(self, merged, children)


@dataclass(frozen=True, slots=True)
class ComponentCall(Node):
    """Deferred invocation of ``component`` with ``props``.

    Prop values may be plain values, awaitables, or callables invoked as
    ``(props, ctx)``; the renderer resolves them before calling the
    component. ``children`` is passed through untouched.
    """

    kind: ClassVar[NodeKind] = NodeKind.COMPONENT_CALL

    component: Component
    props: Mapping[str, Any] = field(default_factory=dict)
    children: Any = None


def component(func: Callable[..., Any] | None = None, *, name: str | None = None) -> Any:
    """Decorator turning a ``(props, ctx)`` function into a ``Component``.

        >>> @component
        ... def Card(props, ctx): ...
        >>> @component(name="SiteNav")
        ... def nav(props, ctx): ...
    """

    def wrap(fn: Callable[..., Any]) -> Component:
        return Component(name or fn.__name__, fn)

    if func is None:
        return wrap
    return wrap(func)


def as_component(value: Component | Callable[..., Any]) -> Component:
    """Coerce a plain callable into a ``Component``.

    Lambdas and other callables without a usable ``__name__`` are named
    ``Anonymous``.
    """
    if isinstance(value, Component):
        return value
    if not callable(value):
        raise TypeError(f"Expected a component or callable, got {type(value).__name__}")
    name = getattr(value, "__name__", "")
    if not IDENTIFIER_RE.match(name):
        name = ANONYMOUS
    return Component(name, value)


def _fragment(props: Mapping[str, Any], ctx: Any) -> Any:
    return props.get("children")


Fragment = Component("Fragment", _fragment)
"""Transparent grouping component; renders its children unchanged."""


def _collect_children(children: tuple[Any, ...], props: Mapping[str, Any]) -> Any:
    if not children:
        return props.get("children")
    if len(children) == 1:
        return children[0]
    return NodeList(children)


def _make_call(comp: Component, props: dict[str, Any], children: tuple[Any, ...]) -> ComponentCall:
    kids = _collect_children(children, props)
    props.pop("children", None)
    return ComponentCall(comp, props, kids)


def h(type_: str | Component | Callable[..., Any], props: Mapping[str, Any] | None = None, *children: Any) -> Node:
    """Build an element or component call.

    A ``children`` entry in ``props`` is used only when no positional
    children are given, and is never kept as an attribute.
    """
    attrs = dict(props or {})
    if isinstance(type_, str):
        kids = _collect_children(children, attrs)
        attrs.pop("children", None)
        return Element(type_, attrs, kids)
    return _make_call(as_component(type_), attrs, children)


create_element = h


def to_node(value: Any) -> Node | None:
    """Coerce a plain Python value to a node.

    ``None`` and booleans render nothing; ``Markup`` is raw HTML; strings
    and numbers are text; lists, tuples and iterators are node lists.
    Coercion looks at the type only: a dict with an ``html`` key is not
    raw HTML.

    Raises:
        TypeError: For values that have no rendering
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Node):
        return value
    if isinstance(value, Markup):
        return RawHtml(str(value))
    if isinstance(value, (str, int, float)):
        return Text(value)
    if isinstance(value, (list, tuple, Iterator)):
        return NodeList(tuple(value))
    raise TypeError(f"Cannot render value of type {type(value).__name__}")
