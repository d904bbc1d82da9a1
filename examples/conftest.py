"""Shared pytest configuration for noxt examples.

``example`` executes the ``app.py`` next to the test in its own module
namespace, so every test starts from clean state. Examples that build a
module-level ``app`` get ``example_app`` too: the app loaded, behind a
small synchronous client.
"""

from __future__ import annotations

import asyncio
import importlib.util
from pathlib import Path
from types import ModuleType
from typing import Any

import pytest

from noxt import App, Request, Response


class ExampleClient:
    """Dispatches requests to a loaded ``App`` from synchronous tests."""

    def __init__(self, app: App):
        self.app = app

    def request(self, method: str, path: str, **kwargs: Any) -> Response:
        return asyncio.run(self.app.dispatch(Request(method, path, **kwargs)))

    def get(self, path: str, **kwargs: Any) -> Response:
        return self.request("GET", path, **kwargs)

    def render(self, view: Any, props: dict[str, Any] | None = None) -> str:
        return asyncio.run(self.app.render(view, props, layout=False))


@pytest.fixture
def example(request: pytest.FixtureRequest) -> ModuleType:
    """Execute the sibling app.py as a fresh module."""
    app_path = Path(request.path).parent / "app.py"
    spec = importlib.util.spec_from_file_location(f"noxt_example_{app_path.parent.name}", app_path)
    if spec is None or spec.loader is None:
        pytest.fail(f"Cannot import {app_path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def example_app(example: ModuleType) -> ExampleClient:
    """The example's ``App``, loaded and wrapped in an ``ExampleClient``."""
    app = getattr(example, "app", None)
    if not isinstance(app, App):
        pytest.fail(f"{example.__name__} defines no App named 'app'")
    asyncio.run(app.load())
    return ExampleClient(app)
