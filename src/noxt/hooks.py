"""Application hooks.

Hooks are configured as ``AppConfig.hooks``: a mapping from hook name to a
callable or a (possibly nested) list of callables. Callables may be sync or
async and are called in order with keyword arguments.

Hook points:
- ``register_page(page)``: once per page, after loading
- ``before_request(ctx, page)``: per request, after the context is built
- ``before_render(module, props, ctx)``: each time a view component renders
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping
from typing import Any

from noxt.environment.config import HOOK_NAMES, HookSpec


def _flatten(spec: HookSpec | None) -> tuple[Callable[..., Any], ...]:
    if spec is None:
        return ()
    if callable(spec):
        return (spec,)
    out: list[Callable[..., Any]] = []
    stack: list[Any] = [iter(spec)]
    while stack:
        for item in stack[-1]:
            if callable(item):
                out.append(item)
            elif isinstance(item, (list, tuple)):
                stack.append(iter(item))
                break
            elif item:
                raise TypeError(f"Hook entries must be callables, got {type(item).__name__}")
        else:
            stack.pop()
    return tuple(out)


class Hooks:
    """Flattened, ordered hook callables keyed by hook name."""

    __slots__ = ("_hooks",)

    def __init__(self, spec: Mapping[str, HookSpec] | None = None):
        spec = spec or {}
        unknown = sorted(set(spec) - HOOK_NAMES)
        if unknown:
            raise ValueError(f"Unknown hook(s): {', '.join(unknown)}; expected one of {sorted(HOOK_NAMES)}")
        self._hooks = {name: _flatten(value) for name, value in spec.items()}

    def __bool__(self) -> bool:
        return any(self._hooks.values())

    def get(self, name: str) -> tuple[Callable[..., Any], ...]:
        return self._hooks.get(name, ())

    async def run(self, name: str, **kwargs: Any) -> None:
        for fn in self._hooks.get(name, ()):
            result = fn(**kwargs)
            if inspect.isawaitable(result):
                await result
