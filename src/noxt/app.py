"""Noxt App: loads views, registers components and pages, serves requests.

Lifecycle:
    ```
    App(config)            # configuration only, nothing loaded
    await app.load()       # discover views, build the registry, pages
    app.routes             # (pattern, method, page) for a server to mount
    await app.dispatch(r)  # or page.handle(r) after your own routing
    ```

Loading is all-or-nothing: context-key validation, module import, name
validation, duplicate detection and page construction all happen before
anything is committed to the app. On any error the app stays unloaded.

The component registry is frozen once loading completes. To reload views,
build a new ``App``.

Example:
    >>> app = App(loader=DictLoader({
    ...     "Home": {"route": "/", "default": lambda props, ctx: h("h1", None, "Hi")},
    ... }), layout=None)
    >>> await app.load()
    >>> (await app.dispatch(Request("GET", "/"))).body
    '<h1>Hi</h1>'

"""

from __future__ import annotations

import dataclasses
import inspect
import logging
from collections.abc import Mapping
from typing import Any, NamedTuple

from noxt.environment.config import DEFAULT_CONFIG, AppConfig
from noxt.environment.exceptions import BoundaryFailureError, ContextKeyError, LoadError, RenderError
from noxt.environment.loaders import FileSystemLoader, Loader
from noxt.environment.registry import ComponentRegistry
from noxt.hooks import Hooks
from noxt.layout import LayoutRef, render_with_layout
from noxt.nodes import Component, Node
from noxt.pages import HTTP_VERBS, Page, Request, Response, ViewRender, view_function
from noxt.render_context import RenderContext
from noxt.renderer import default_error_message, error_component, render_node

logger = logging.getLogger(__name__)

RESERVED_CONTEXT_KEYS = frozenset(
    {"req", "res", "request", "response", "query", "slots", "slot", "layout"}
)


class Route(NamedTuple):
    pattern: str
    method: str
    page: Page


class App:
    """A noxt application.

    Attributes:
        config: The effective ``AppConfig``
        loader: Where view modules come from
        context: Global context data (copied from the config)
        components: Component registry (empty until ``load()``)
        modules: Loaded view modules by name
        pages: Pages by name, in load order
    """

    def __init__(self, config: AppConfig | None = None, *, loader: Loader | None = None, **overrides: Any):
        config = config or DEFAULT_CONFIG
        if overrides:
            config = dataclasses.replace(config, **overrides)
        self.config = config
        self.loader = loader if loader is not None else FileSystemLoader(config.view_paths())
        self.hooks = Hooks(config.hooks)
        self.context: dict[str, Any] = dict(config.context)
        self.components = self._new_registry()
        self.modules: dict[str, Any] = {}
        self.pages: dict[str, Page] = {}
        self._loaded = False

    @property
    def loaded(self) -> bool:
        return self._loaded

    def _new_registry(self) -> ComponentRegistry:
        return ComponentRegistry(
            error_component_name=self.config.error_component,
            default_layout=self.config.layout,
        )

    # -- startup -----------------------------------------------------------

    def _validate_context(self) -> None:
        for key in self.context:
            if key in RESERVED_CONTEXT_KEYS or key[:1].isupper():
                raise ContextKeyError(key, RESERVED_CONTEXT_KEYS)

    def _make_component(self, name: str, module: Any) -> Component | None:
        func = view_function(name, module)
        if func is None:
            if not any(callable(getattr(module, verb, None)) for verb in HTTP_VERBS):
                raise LoadError(f"View module {name} exports no render function")
            return None
        return Component(name, ViewRender(module, func, self.hooks), module)

    async def load(self) -> App:
        """Discover views and register components and pages.

        Raises:
            ContextKeyError: If a global context key is reserved or capitalized
            LoadError: If a module cannot be loaded or is not a valid view
            DuplicateNameError: If two views share a name
            InvalidIdentifierError: If a view name is not a valid identifier
        """
        if self._loaded:
            return self
        self._validate_context()

        modules = self.loader.load_modules()
        registry = self._new_registry()
        components: dict[str, Component | None] = {}
        for name, module in modules.items():
            comp = self._make_component(name, module)
            if comp is not None:
                registry.add(comp)
            components[name] = comp

        pages: dict[str, Page] = {}
        for name, module in modules.items():
            if getattr(module, "route", None) is None:
                continue
            pages[name] = Page(name, module, app=self, component=components[name], hooks=self.hooks)
        registry.freeze()

        self.modules = modules
        self.components = registry
        self.pages = pages
        self._loaded = True

        for page in pages.values():
            for pattern in page.routes:
                logger.info("%s %s -> %s", "|".join(page.methods), pattern.pattern, page.name)
            await self.hooks.run("register_page", page=page)
        return self

    # -- routing -----------------------------------------------------------

    @property
    def routes(self) -> list[Route]:
        """Every (pattern, method, page) triple, in registration order."""
        return [
            Route(pattern.pattern, method, page)
            for page in self.pages.values()
            for pattern in page.routes
            for method in page.methods
        ]

    def match(self, path: str) -> tuple[Page, dict[str, str]] | None:
        """The first page whose route matches ``path``, with its params."""
        for page in self.pages.values():
            for pattern in page.routes:
                params = pattern.match(path)
                if params is not None:
                    return page, params
        return None

    async def dispatch(self, request: Request) -> Response:
        """Route ``request`` to a page and handle it; 404 if nothing matches."""
        found = self.match(request.path)
        if found is None:
            logger.info("%s %s: 404", request.method, request.path)
            return Response.text(404, "Not found")
        page, params = found
        request = dataclasses.replace(request, params={**params, **request.params})
        return await page.handle(request)

    def path_for(self, name: str, params: Mapping[str, Any] | None = None) -> str:
        """Build a path to the page ``name``.

        Raises:
            KeyError: If there is no such page
            MissingRouteParamError: If a route parameter has no value
        """
        return self.pages[name].path_for(params)

    # -- rendering ---------------------------------------------------------

    def base_context(self) -> RenderContext:
        """A context with global data and components, without request data."""
        return RenderContext(
            self.context,
            components=self.components,
            debug=self.config.resolved_debug(),
            annotate=self.config.annotate_elements,
        )

    async def request_context(
        self,
        request: Request,
        response: Response | None = None,
        *,
        page: Page | None = None,
    ) -> RenderContext:
        """Build the render context for one request and run ``before_request``.

        Each call gets its own slot registry.
        """
        data = {
            **self.context,
            "request": request,
            "req": request,
            "response": response,
            "res": response,
            "query": request.query,
        }
        ctx = RenderContext(
            data,
            components=self.components,
            debug=self.config.resolved_debug(),
            annotate=self.config.annotate_elements,
        )
        await self.hooks.run("before_request", ctx=ctx, page=page)
        return ctx

    async def render(
        self,
        view: str | Component | Node,
        props: Mapping[str, Any] | None = None,
        *,
        request: Request | None = None,
        layout: LayoutRef = None,
    ) -> str:
        """Render a view (by name, component or node) outside of routing."""
        target = self.components[view] if isinstance(view, str) else view
        ctx = await self.request_context(request or Request(), Response())
        return await render_with_layout(target, props, ctx, layout)

    async def error_response(
        self,
        exc: Exception,
        ctx: RenderContext | None = None,
        *,
        component_name: str = "page",
    ) -> Response:
        """A 500 response whose body is rendered by the error display.

        The registered error-display component is tried first, unless it is
        what failed; the built-in one is the fallback. If both fail the body
        is plain text.
        """
        ctx = ctx if ctx is not None else self.base_context()
        error = exc if isinstance(exc, RenderError) else RenderError(component_name, exc)
        if error is not exc:
            error.__cause__ = exc

        candidates = [default_error_message]
        registered = error_component(ctx)
        if registered is not default_error_message and not isinstance(exc, BoundaryFailureError):
            candidates.insert(0, registered)

        for display in candidates:
            try:
                result = display.render({"error": error, "component_name": error.component_name}, ctx)
                if inspect.isawaitable(result):
                    result = await result
                body = await render_node(result, ctx)
            except Exception as display_exc:
                logger.error("Error display %s failed", display.name, exc_info=display_exc)
                continue
            return Response(500, body)
        return Response.text(500, "Internal Server Error")

    def __repr__(self) -> str:
        state = "loaded" if self._loaded else "not loaded"
        return f"App({len(self.components)} components, {len(self.pages)} pages, {state})"


__all__ = ["App", "RESERVED_CONTEXT_KEYS", "Route"]
