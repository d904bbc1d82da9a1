"""Tree renderer: explicit-stack evaluation, attributes, props, error boundary."""

from noxt.renderer.attributes import serialize_attributes
from noxt.renderer.boundary import default_error_message, error_component
from noxt.renderer.core import Frame, Phase, Renderer, render_node
from noxt.renderer.props import resolve_props

__all__ = [
    "Frame",
    "Phase",
    "Renderer",
    "default_error_message",
    "error_component",
    "render_node",
    "resolve_props",
    "serialize_attributes",
]
