"""Small, dependency-free helpers shared by the renderer."""

from noxt.utils.html import Markup, cx, html_escape

__all__ = ["Markup", "cx", "html_escape"]
