"""Exceptions for the noxt renderer and page layer.

Exception Hierarchy:
NoxtError (base)
├── LoadError                 # View module discovery/import failed (startup)
│   └── DuplicateNameError    # Two view modules share a component name
├── RegistrationError         # Registry misuse (startup)
│   ├── InvalidIdentifierError  # Component name fails the naming pattern
│   ├── ContextKeyError         # Disallowed global context key
│   └── RegistryFrozenError     # Registration after load() completed
├── MissingRouteParamError    # path_for() lacks a route parameter
├── MethodNotAllowedError     # No render function for the HTTP verb
└── RenderError               # A component call failed (contained)
    └── BoundaryFailureError  # The error-display component failed (fatal)

Propagation:
Startup errors are raised from ``App.load()`` before any route is exposed.
``RenderError`` never escapes a render pass; it is what the error-display
component receives as ``error``. ``BoundaryFailureError`` is the only
render-time error that reaches the caller of ``render_node()``.

Example:
    ```
    N-RUN-001: Component 'Sidebar' failed: division by zero
      Component: Sidebar
      Hint: The failing subtree was replaced by the ErrorMessage component
    ```

"""

from __future__ import annotations

from enum import Enum

from noxt.environment import terminal


class ErrorCode(Enum):
    """Searchable error codes.

    Format: N-{CATEGORY}-{NUMBER}
    Categories: LOAD (discovery), REG (registry), RUN (render), HTTP (pages)
    """

    LOAD_FAILED = "N-LOAD-001"
    DUPLICATE_NAME = "N-LOAD-002"

    INVALID_IDENTIFIER = "N-REG-001"
    CONTEXT_KEY = "N-REG-002"
    REGISTRY_FROZEN = "N-REG-003"

    RENDER_FAILED = "N-RUN-001"
    BOUNDARY_FAILED = "N-RUN-002"

    MISSING_ROUTE_PARAM = "N-HTTP-001"
    METHOD_NOT_ALLOWED = "N-HTTP-002"

    @property
    def category(self) -> str:
        """Error category (``load``, ``registry``, ``render`` or ``http``)."""
        prefix = self.value.split("-")[1]
        return {
            "LOAD": "load",
            "REG": "registry",
            "RUN": "render",
            "HTTP": "http",
        }.get(prefix, "unknown")


class NoxtError(Exception):
    """Base exception for all noxt errors.

    Attributes:
        code: Optional ErrorCode for searchable error identification.
        suggestion: Optional actionable hint shown by ``format_compact()``.
    """

    code: ErrorCode | None = None
    suggestion: str | None = None

    def format_compact(self) -> str:
        """Format the error as a short, coloured terminal diagnostic.

        Format::

            N-LOAD-002: Duplicate component name 'Home'
              Hint: Component names must be unique across all view directories
        """
        parts = [terminal.format_error_header(self.code.value if self.code else None, str(self))]
        parts.extend(self._details())
        if self.suggestion:
            parts.append(f"  {terminal.hint('Hint:')} {self.suggestion}")
        return "\n".join(parts)

    def _details(self) -> list[str]:
        """Extra coloured lines for ``format_compact()``; messages stay plain."""
        return []


class LoadError(NoxtError):
    """A view module could not be discovered or imported.

    Raised by loaders during ``App.load()``. The original exception is
    chained as ``__cause__``.
    """

    code: ErrorCode | None = ErrorCode.LOAD_FAILED

    def __init__(self, message: str, *, path: str | None = None):
        self.path = path
        if path:
            message = f"{message} ({path})"
        super().__init__(message)

    def _details(self) -> list[str]:
        return [f"  Path: {terminal.route(self.path)}"] if self.path else []


class DuplicateNameError(LoadError):
    """Two view modules register the same component name."""

    code: ErrorCode | None = ErrorCode.DUPLICATE_NAME
    suggestion = "Component names must be unique across all view directories"

    def __init__(self, name: str, *, path: str | None = None, previous: str | None = None):
        self.name = name
        self.previous = previous
        message = f"Duplicate component name {name!r}"
        if previous:
            message += f", first defined in {previous}"
        super().__init__(message, path=path)


class RegistrationError(NoxtError):
    """Base class for component registry errors."""


class InvalidIdentifierError(RegistrationError):
    """A component name does not match ``[A-Za-z][A-Za-z0-9_]*``."""

    code: ErrorCode | None = ErrorCode.INVALID_IDENTIFIER
    suggestion = "Use letters, digits and underscores, starting with a letter"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Invalid component name: {name!r}")


class ContextKeyError(RegistrationError):
    """A global context key collides with request data or component names."""

    code: ErrorCode | None = ErrorCode.CONTEXT_KEY

    def __init__(self, key: str, reserved: frozenset[str]):
        self.key = key
        self.suggestion = (
            "Context keys must not start with a capital letter and must not be one of: "
            + ", ".join(sorted(reserved))
        )
        super().__init__(f"Context key {key!r} is not allowed")


class RegistryFrozenError(RegistrationError):
    """The component registry was modified after loading completed."""

    code: ErrorCode | None = ErrorCode.REGISTRY_FROZEN
    suggestion = "Build a new App to reload views instead of mutating the registry"


class MissingRouteParamError(NoxtError):
    """A route pattern needs a parameter the caller did not provide."""

    code: ErrorCode | None = ErrorCode.MISSING_ROUTE_PARAM

    def __init__(self, param: str, pattern: str):
        self.param = param
        self.pattern = pattern
        super().__init__(f"Missing param {param!r} for route {pattern}")

    def _details(self) -> list[str]:
        return [f"  Route: {terminal.route(self.pattern)}"]


class MethodNotAllowedError(NoxtError):
    """A page has no render function for the requested HTTP verb.

    ``Page.handle()`` turns this into a 405 response; it only propagates
    from ``Page.select_handler()``.
    """

    code: ErrorCode | None = ErrorCode.METHOD_NOT_ALLOWED

    def __init__(self, method: str, allowed: tuple[str, ...]):
        self.method = method
        self.allowed = allowed
        super().__init__(f"Method {method} not allowed (allowed: {', '.join(allowed) or 'none'})")


class RenderError(NoxtError):
    """A component call failed while resolving props or rendering.

    Contained by the error boundary: the failing subtree is replaced by the
    error-display component, which receives this exception as ``error``.
    The original exception is available as ``__cause__`` and ``original``.

    Attributes:
        component_name: Name of the failing component (owner)
        original: The exception raised by user code
    """

    code: ErrorCode | None = ErrorCode.RENDER_FAILED
    suggestion = "The failing subtree was replaced by the error-display component"

    def __init__(self, component_name: str, original: BaseException):
        self.component_name = component_name
        self.original = original
        super().__init__(f"Component {component_name!r} failed: {original}")

    def _details(self) -> list[str]:
        return [
            f"  Component: {terminal.component(self.component_name)}",
            f"  Cause: {type(self.original).__name__}",
        ]


class BoundaryFailureError(RenderError):
    """The error-display component itself failed.

    There is no nested boundary: the whole render pass is aborted and the
    caller (usually ``Page.handle()``) answers with a 500.
    """

    code: ErrorCode | None = ErrorCode.BOUNDARY_FAILED
    suggestion = "Check the ErrorMessage component; it must not raise"

    def __init__(self, component_name: str, original: BaseException, render_error: RenderError | None = None):
        self.render_error = render_error
        super().__init__(component_name, original)


__all__ = [
    "BoundaryFailureError",
    "ContextKeyError",
    "DuplicateNameError",
    "ErrorCode",
    "InvalidIdentifierError",
    "LoadError",
    "MethodNotAllowedError",
    "MissingRouteParamError",
    "NoxtError",
    "RegistrationError",
    "RegistryFrozenError",
    "RenderError",
]
