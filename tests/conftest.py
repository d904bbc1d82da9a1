"""Pytest configuration and fixtures for noxt tests."""

from __future__ import annotations

import pytest

from noxt import App, DictLoader, RenderContext, h
from noxt.environment import terminal


@pytest.fixture(autouse=True)
def _plain_terminal(monkeypatch):
    """Keep error messages free of ANSI codes regardless of the test runner's TTY."""
    monkeypatch.setattr(terminal, "_USE_COLORS", False)


@pytest.fixture
def ctx() -> RenderContext:
    """A bare render context: no components, no debug output."""
    return RenderContext()


@pytest.fixture
def views() -> dict:
    """A small site: layout, error display, a page with loaders and a partial."""

    def layout(props, ctx):
        return h(
            "html",
            None,
            h("head", None, ctx.slot("head")),
            h("body", None, props["body"]),
        )

    def error_message(props, ctx):
        return h("p", {"class": "error"}, props["component_name"], ": ", str(props["error"].original))

    def home(props, ctx):
        ctx.slot("head", h("title", None, ctx["site_name"]))
        return h("h1", None, "Welcome to ", ctx["site_name"])

    def post(props, ctx):
        return h("article", None, h("h1", None, props["title"]), h("p", None, "slug=", props["slug"]))

    def card(props, ctx):
        return h("div", {"class": "card"}, props.get("children"))

    return {
        "Layout": {"default": layout},
        "ErrorMessage": {"default": error_message},
        "Home": {"route": "/", "default": home},
        "Post": {
            "route": ["/posts/:slug", "/p/:slug"],
            "params": {"slug": lambda props, ctx: props["slug"].lower()},
            "data": {"title": lambda props, ctx: props["slug"].title()},
            "default": post,
        },
        "Card": {"default": card},
    }


@pytest.fixture
def app_factory(views):
    """Build (unloaded) apps over ``views``, merged with per-test modules."""

    def make(extra: dict | None = None, **overrides) -> App:
        overrides.setdefault("context", {"site_name": "Docs"})
        overrides.setdefault("debug", False)
        return App(loader=DictLoader({**views, **(extra or {})}), **overrides)

    return make


def assert_contains(html: str, *expected_parts: str) -> None:
    """Assert rendered HTML contains all expected parts.

    Args:
        html: The rendered output.
        expected_parts: Strings that should all be present in the output.
    """
    for part in expected_parts:
        assert part in html, (
            f"Rendered output missing expected content:\n"
            f"  Missing: {part!r}\n"
            f"  Actual: {html!r}"
        )
