"""HTML output nodes: text, raw HTML, lists and elements."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from noxt.nodes.base import Node, NodeKind


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Text leaf. Escaped exactly once when rendered."""

    kind: ClassVar[NodeKind] = NodeKind.TEXT

    value: str | int | float


@dataclass(frozen=True, slots=True)
class RawHtml(Node):
    """Pre-escaped HTML, emitted verbatim. The caller vouches for safety."""

    kind: ClassVar[NodeKind] = NodeKind.RAW_HTML

    html: str


@dataclass(frozen=True, slots=True)
class NodeList(Node):
    """Ordered children. Nested lists are flattened during traversal."""

    kind: ClassVar[NodeKind] = NodeKind.LIST

    items: tuple[Any, ...] = ()


@dataclass(frozen=True, slots=True)
class Element(Node):
    """An HTML element: ``<tag attrs>children</tag>``.

    ``children`` is a single child value (commonly a ``NodeList``) and is
    always rendered, never serialized as an attribute.
    """

    kind: ClassVar[NodeKind] = NodeKind.ELEMENT

    tag: str
    attrs: Mapping[str, Any] = field(default_factory=dict)
    children: Any = None
