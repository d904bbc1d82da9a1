"""Pages: view modules that answer HTTP requests.

A view module becomes a page when it declares ``route``:

    # views/Post.py
    route = ["/posts/:slug", "/p/:slug"]
    layout = "BlogLayout"

    params = {"slug": lambda props, ctx: props["slug"].lower()}

    async def load_post(props, ctx):
        return await ctx["db"].posts.get(props["slug"])

    data = {"post": load_post}

    def default(props, ctx):
        return h("article", None, h("h1", None, props["post"].title))

    def POST(props, ctx):
        ...

Request handling is framework-agnostic: a page turns a ``Request`` value
into a ``Response`` value. Mounting on a server means iterating
``App.routes`` and forwarding to ``Page.handle``.

Verb selection:
``GET`` uses the module's ``GET`` function, falling back to ``default``.
Every other verb needs its own function; otherwise the answer is 405,
decided before any loader or render runs.

Property loaders:
``params`` runs first and must be synchronous (``path_for()`` also runs
it); ``data`` runs second and may be async. Each is either a function
``(props, ctx) -> mapping`` merged into props, or a mapping whose
callable values are called ``(props, ctx)`` and whose other values are
copied.

"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
from urllib.parse import quote, unquote

from noxt.environment.exceptions import LoadError, MethodNotAllowedError, MissingRouteParamError
from noxt.layout import render_with_layout
from noxt.nodes import Component
from noxt.renderer.props import resolve_value

if TYPE_CHECKING:
    from noxt.app import App
    from noxt.hooks import Hooks

logger = logging.getLogger(__name__)

HTTP_VERBS = ("GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS")

LOADER_EXPORTS = ("params", "data")

HTML_CONTENT_TYPE = "text/html; charset=utf-8"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"


@dataclass(frozen=True, slots=True)
class Request:
    """The parts of an HTTP request a page needs.

    Attributes:
        method: HTTP verb
        path: Request path (used by ``App.dispatch``)
        params: Path parameters; become the page's initial props
        query: Query-string values
        headers: Request headers
        body: Parsed body, if any
    """

    method: str = "GET"
    path: str = "/"
    params: Mapping[str, str] = field(default_factory=dict)
    query: Mapping[str, Any] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Any = None


def _html_headers() -> dict[str, str]:
    return {"content-type": HTML_CONTENT_TYPE}


@dataclass(slots=True)
class Response:
    """Status, body and headers of a page response.

    The response is in the render context as ``ctx.response``, so
    components can change ``status`` or add headers while rendering.
    """

    status: int = 200
    body: str = ""
    headers: dict[str, str] = field(default_factory=_html_headers)

    @classmethod
    def text(cls, status: int, body: str, **headers: str) -> Response:
        return cls(status, body, {"content-type": TEXT_CONTENT_TYPE, **headers})


class RoutePattern:
    """A path pattern with ``:name`` parameter segments.

    Example:
        >>> p = RoutePattern("/posts/:slug")
        >>> p.match("/posts/hello")
        {'slug': 'hello'}
        >>> p.build({"slug": "a b"})
        '/posts/a%20b'
    """

    __slots__ = ("pattern", "param_names", "_segments")

    def __init__(self, pattern: str):
        if not pattern.startswith("/"):
            raise LoadError(f"Route pattern must start with '/': {pattern!r}")
        self.pattern = pattern
        self._segments = self._split(pattern)
        self.param_names = tuple(s[1:] for s in self._segments if s.startswith(":"))

    @staticmethod
    def _split(path: str) -> list[str]:
        return [s for s in path.split("/") if s]

    def match(self, path: str) -> dict[str, str] | None:
        """Path parameters if ``path`` matches, else None."""
        parts = self._split(path.split("?", 1)[0])
        if len(parts) != len(self._segments):
            return None
        params: dict[str, str] = {}
        for segment, part in zip(self._segments, parts):
            if segment.startswith(":"):
                params[segment[1:]] = unquote(part)
            elif segment != part:
                return None
        return params

    def build(self, params: Mapping[str, Any]) -> str:
        """Fill the pattern's parameters.

        Raises:
            MissingRouteParamError: If a parameter is missing from ``params``
        """
        parts: list[str] = []
        for segment in self._segments:
            if segment.startswith(":"):
                name = segment[1:]
                if name not in params:
                    raise MissingRouteParamError(name, self.pattern)
                parts.append(quote(str(params[name]), safe=""))
            else:
                parts.append(segment)
        path = "/" + "/".join(parts)
        if self.pattern.endswith("/") and len(self.pattern) > 1:
            path += "/"
        return path

    def __repr__(self) -> str:
        return f"RoutePattern({self.pattern!r})"


async def apply_loaders(module: Any, props: dict[str, Any], ctx: Any) -> dict[str, Any]:
    """Run the module's ``params`` then ``data`` loaders into ``props``."""
    for export in LOADER_EXPORTS:
        loader = getattr(module, export, None)
        if loader is None:
            continue
        if callable(loader):
            result = loader(props, ctx)
            if inspect.isawaitable(result):
                result = await result
            props.update(result or {})
            continue
        for key, value in loader.items():
            props[key] = await resolve_value(value, props, ctx)
    return props


def apply_params_sync(module: Any, props: dict[str, Any], ctx: Any) -> dict[str, Any]:
    """Run only the synchronous ``params`` loader (used for link building)."""
    loader = getattr(module, "params", None)
    if loader is None:
        return props
    if callable(loader):
        props.update(loader(props, ctx) or {})
        return props
    for key, value in loader.items():
        props[key] = value(props, ctx) if callable(value) else value
    return props


def check_params_sync(name: str, module: Any) -> None:
    """Reject async ``params`` loaders on pages.

    Raises:
        LoadError: If ``params`` (or one of its entries) is a coroutine function
    """
    loader = getattr(module, "params", None)
    if loader is None:
        return
    funcs = [loader] if callable(loader) else list(loader.values())
    if any(inspect.iscoroutinefunction(f) for f in funcs):
        raise LoadError(
            f"Page {name} declares an async params loader; "
            "params must be synchronous, use data for async loading"
        )


class ViewRender:
    """Render callable of a registered view.

    Runs the module's property loaders and the ``before_render`` hooks on
    a copy of the props, then the view function itself.
    """

    __slots__ = ("module", "func", "hooks")

    def __init__(self, module: Any, func: Callable[..., Any], hooks: Hooks | None = None):
        self.module = module
        self.func = func
        self.hooks = hooks

    async def __call__(self, props: Mapping[str, Any], ctx: Any) -> Any:
        props = dict(props)
        await apply_loaders(self.module, props, ctx)
        if self.hooks:
            await self.hooks.run("before_render", module=self.module, props=props, ctx=ctx)
        result = self.func(props, ctx)
        if inspect.isawaitable(result):
            result = await result
        return result


def view_function(name: str, module: Any) -> Callable[..., Any] | None:
    """The module's default render function: ``default``, then ``<Name>``."""
    for attr in ("default", name):
        func = getattr(module, attr, None)
        if callable(func):
            return func
    return None


class Page:
    """A routable view.

    Attributes:
        name: Component name of the view
        module: The view module
        component: The view as a component (None for verb-only modules)
        routes: Route patterns, first one used by ``path_for()``
        handlers: HTTP verb -> Component
        layout: Layout override from the module (name, component or False)
    """

    __slots__ = ("name", "module", "component", "routes", "handlers", "layout", "_app")

    def __init__(
        self,
        name: str,
        module: Any,
        *,
        app: App,
        component: Component | None = None,
        hooks: Hooks | None = None,
    ):
        check_params_sync(name, module)
        route = module.route
        patterns = [route] if isinstance(route, str) else list(route)
        if not patterns:
            raise LoadError(f"Page {name} declares an empty route list")

        self.name = name
        self.module = module
        self.component = component
        self.routes = tuple(RoutePattern(p) for p in patterns)
        self.layout = getattr(module, "layout", None)
        self._app = app

        # handlers share the page name so errors and annotations name the page
        handlers: dict[str, Component] = {}
        for verb in HTTP_VERBS:
            func = getattr(module, verb, None)
            if callable(func):
                handlers[verb] = Component(name, ViewRender(module, func, hooks), module)
            elif verb == "GET":
                default = component
                if default is None and view_function(name, module) is not None:
                    default = Component(name, ViewRender(module, view_function(name, module), hooks), module)
                if default is not None:
                    handlers[verb] = default
        self.handlers = handlers

    @property
    def methods(self) -> tuple[str, ...]:
        return tuple(self.handlers)

    def select_handler(self, method: str) -> Component:
        """The component answering ``method``.

        Raises:
            MethodNotAllowedError: If the module has no function for it
        """
        handler = self.handlers.get(method.upper())
        if handler is None:
            raise MethodNotAllowedError(method.upper(), self.methods)
        return handler

    async def handle(self, request: Request) -> Response:
        """Render this page for ``request``.

        Returns 405 without rendering when the verb has no handler, and a
        500 with the error display when the render pass fails.
        """
        try:
            handler = self.select_handler(request.method)
        except MethodNotAllowedError as exc:
            logger.info("%s %s -> %s: 405", exc.method, request.path, self.name)
            return Response.text(405, "Method not allowed", allow=", ".join(exc.allowed))

        response = Response()
        ctx = None
        try:
            ctx = await self._app.request_context(request, response, page=self)
            layout = ctx.layout if ctx.layout is not None else self.layout
            response.body = await render_with_layout(handler, dict(request.params), ctx, layout)
        except Exception as exc:
            logger.error("Error rendering page %s for %s %s", self.name, request.method, request.path, exc_info=exc)
            return await self._app.error_response(exc, ctx, component_name=self.name)
        return response

    def path_for(self, params: Mapping[str, Any] | None = None, ctx: Any = None) -> str:
        """Build a path to this page from its first route.

        Applies the synchronous ``params`` loader first, like the original
        request would.

        Raises:
            MissingRouteParamError: If a route parameter has no value
        """
        values = dict(params or {})
        if ctx is None:
            ctx = self._app.base_context()
        apply_params_sync(self.module, values, ctx)
        return self.routes[0].build(values)

    def __repr__(self) -> str:
        return f"Page({self.name!r}, routes={[r.pattern for r in self.routes]!r}, methods={list(self.methods)!r})"


__all__ = [
    "HTTP_VERBS",
    "Page",
    "Request",
    "Response",
    "RoutePattern",
    "ViewRender",
    "apply_loaders",
]
