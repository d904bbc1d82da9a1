"""Error boundary: contains a failing component call.

Every component call is its own boundary. When resolving its props or
running its render function raises, the renderer asks this module for a
replacement node and renders that in the failing call's place. Siblings
and ancestors are unaffected.

The replacement comes from the error-display component: the registry's
``ErrorMessage`` (or whatever name the registry configures), falling back
to ``default_error_message``. It is called with
``{"error": RenderError, "component_name": str}``.

There is exactly one level of fallback. If the error-display component
fails, ``BoundaryFailureError`` aborts the pass.

"""

from __future__ import annotations

import inspect
import logging
import traceback
from typing import Any

from noxt.environment import terminal
from noxt.environment.exceptions import BoundaryFailureError, RenderError
from noxt.nodes import Component, h

logger = logging.getLogger(__name__)

DEFAULT_ERROR_COMPONENT = "ErrorMessage"


def _default_error_message(props: dict[str, Any], ctx: Any) -> Any:
    error = props["error"]
    name = props.get("component_name") or "component"
    cause = getattr(error, "original", error)
    message = f"Error in {name}: {terminal.strip_colors(str(cause))}"
    if getattr(ctx, "debug", False):
        trace = "".join(traceback.format_exception(cause))
        return h("noxt-error", None, message, h("pre", None, trace))
    return h("noxt-error", None, message)


default_error_message = Component(DEFAULT_ERROR_COMPONENT, _default_error_message)
"""Built-in error display: ``<noxt-error>Error in Name: message</noxt-error>``."""


def error_component(ctx: Any) -> Component:
    """The error-display component for ``ctx``, or the built-in default."""
    components = getattr(ctx, "components", None) or {}
    name = getattr(components, "error_component_name", DEFAULT_ERROR_COMPONENT)
    found = components.get(name)
    return found if found is not None else default_error_message


async def contain(component_name: str, exc: Exception, ctx: Any) -> Any:
    """Turn a component failure into the node that replaces its output.

    Raises:
        BoundaryFailureError: If the error-display component raises
    """
    error = RenderError(component_name, exc)
    error.__cause__ = exc
    logger.error("Error rendering component %s: %s", component_name, exc, exc_info=exc)

    display = error_component(ctx)
    try:
        result = display.render({"error": error, "component_name": component_name}, ctx)
        if inspect.isawaitable(result):
            result = await result
    except Exception as boundary_exc:
        raise BoundaryFailureError(display.name, boundary_exc, error) from boundary_exc
    return result
