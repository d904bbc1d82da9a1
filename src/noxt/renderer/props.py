"""Property resolution for component calls."""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from noxt.nodes import Component


def is_lazy(value: Any) -> bool:
    """True for prop values the renderer must call before use.

    Components and classes are callable but are passed through as values.
    """
    return callable(value) and not isinstance(value, (Component, type))


async def resolve_value(value: Any, props: Mapping[str, Any], ctx: Any) -> Any:
    """Resolve one prop value.

    Callables are invoked as ``(props, ctx)``; awaitables (including what
    a callable returned) are awaited once. Anything else is returned as is.
    """
    if is_lazy(value):
        value = value(props, ctx)
    if inspect.isawaitable(value):
        value = await value
    return value


async def resolve_props(props: Mapping[str, Any], ctx: Any) -> dict[str, Any]:
    """Resolve every prop value in mapping order.

    Resolution is sequential: each lazy value sees a read-only view of the
    props resolved before it, and side effects (slot writes) happen in
    source order. ``children`` is skipped; it is not a prop to resolve.
    """
    resolved: dict[str, Any] = {}
    view = MappingProxyType(resolved)
    for key, value in props.items():
        if key == "children":
            continue
        resolved[key] = await resolve_value(value, view, ctx)
    return resolved
