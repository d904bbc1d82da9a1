"""Noxt: server-side component rendering to HTML for Python.

Components are plain (sync or async) functions of ``(props, ctx)`` that
return a tree of nodes. Noxt walks that tree once and produces an HTML
string, awaiting async components and props along the way.

Quickstart:
    >>> from noxt import component, h, render_node
    >>> @component
    ... async def Greeting(props, ctx):
    ...     return h("p", {"class": ["greeting", {"loud": props.get("loud")}]}, "Hello, ", props["name"])
    >>> await render_node(Greeting(name="<World>", loud=True))
    '<p class="greeting loud">Hello, &lt;World&gt;</p>'

Applications:
    >>> from noxt import App
    >>> app = await App(views="views/", context={"site_name": "Docs"}).load()
    >>> response = await app.dispatch(Request("GET", "/posts/hello"))

Architecture:
View modules → Loader → ComponentRegistry → Page → render_with_layout → Renderer

Pipeline stages:
1. **Loader**: discovers view modules (``*.py`` files or in-memory)
2. **Registry**: wraps each view as a named ``Component``; frozen after load
3. **Page**: per-request context, verb selection, property loaders
4. **Layout**: renders the page, then the layout around it (``body`` prop)
5. **Renderer**: explicit-stack walk, per-element buffers, error boundary

Rendering Guarantees:
- Document order is preserved however deep the tree and however many
  awaits happen along the way
- No recursion proportional to tree depth (explicit frame stack)
- A failing component is replaced by the error-display component in
  place; siblings and ancestors render normally
- Text is escaped exactly once; ``RawHtml`` / ``Markup`` pass through

Slots:
Components write to ``ctx.slot("head", value)`` and layouts read
``ctx.slot("head")``. Reads see writes from components rendered earlier
in the same pass only.

"""

from noxt.app import App, Route
from noxt.environment import (
    AppConfig,
    BoundaryFailureError,
    ChoiceLoader,
    ComponentRegistry,
    ContextKeyError,
    DictLoader,
    DuplicateNameError,
    ErrorCode,
    FileSystemLoader,
    InvalidIdentifierError,
    LoadError,
    MethodNotAllowedError,
    MissingRouteParamError,
    NoxtError,
    RegistryFrozenError,
    RenderError,
)
from noxt.layout import render_with_layout
from noxt.nodes import (
    Component,
    ComponentCall,
    Element,
    Fragment,
    Node,
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
from noxt.pages import Page, Request, Response, RoutePattern
from noxt.render_context import RenderContext, get_render_context, get_render_context_required
from noxt.renderer import Renderer, render_node
from noxt.slots import Slots
from noxt.utils.html import Markup, cx, html_escape

__version__ = "0.1.0"

__all__ = [
    "App",
    "AppConfig",
    "BoundaryFailureError",
    "ChoiceLoader",
    "Component",
    "ComponentCall",
    "ComponentRegistry",
    "ContextKeyError",
    "DictLoader",
    "DuplicateNameError",
    "Element",
    "ErrorCode",
    "FileSystemLoader",
    "Fragment",
    "InvalidIdentifierError",
    "LoadError",
    "Markup",
    "MethodNotAllowedError",
    "MissingRouteParamError",
    "Node",
    "NodeKind",
    "NodeList",
    "NoxtError",
    "Page",
    "RawHtml",
    "RegistryFrozenError",
    "RenderContext",
    "RenderError",
    "Renderer",
    "Request",
    "Response",
    "Route",
    "RoutePattern",
    "Slots",
    "Text",
    "__version__",
    "as_component",
    "component",
    "create_element",
    "cx",
    "get_render_context",
    "get_render_context_required",
    "h",
    "html_escape",
    "render_node",
    "render_with_layout",
    "to_node",
]
