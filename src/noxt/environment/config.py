"""Application configuration.

``AppConfig`` is an immutable value built once per ``App``. Override
individual fields with keyword arguments to ``App(...)``, which applies them
with ``dataclasses.replace``:

    >>> app = App(views="site/views", context={"site_name": "Docs"}, debug=False)

Environment:
    NOXT_ENV: when ``debug`` is left as None, debug output (tracebacks in
    inline error markers) is on unless ``NOXT_ENV=production``.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from noxt.nodes import Component

HookSpec = Callable[..., Any] | Sequence[Any]

HOOK_NAMES = frozenset({"before_request", "before_render", "register_page"})


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Configuration for an ``App``.

    Attributes:
        views: Directory or directories scanned for view modules
        context: Global context data merged into every request context
        layout: Default layout name or component (None disables layouts)
        error_component: Name of the error-display component
        hooks: Hook name -> callable or (nested) list of callables
        debug: Tracebacks in error markers; None reads ``NOXT_ENV``
        annotate_elements: Add ``data-template`` attributes naming owners
    """

    views: str | Path | Sequence[str | Path] = "views"
    context: Mapping[str, Any] = field(default_factory=dict)
    layout: str | Component | None = "Layout"
    error_component: str = "ErrorMessage"
    hooks: Mapping[str, HookSpec] = field(default_factory=dict)
    debug: bool | None = None
    annotate_elements: bool = False

    def resolved_debug(self) -> bool:
        """Effective debug flag."""
        if self.debug is not None:
            return self.debug
        return os.environ.get("NOXT_ENV", "development") != "production"

    def view_paths(self) -> list[Path]:
        if isinstance(self.views, (str, Path)):
            return [Path(self.views)]
        return [Path(p) for p in self.views]


DEFAULT_CONFIG = AppConfig()
