"""Render-tree node model.

Node variants (discriminated by ``Node.kind``):
- ``Text``: escaped text leaf
- ``RawHtml``: pre-escaped HTML passthrough
- ``NodeList``: ordered children
- ``Element``: tag + attributes + children
- ``ComponentCall``: component + props + children

"""

from noxt.nodes.base import Node, NodeKind
from noxt.nodes.components import (
    Component,
    ComponentCall,
    Fragment,
    as_component,
    component,
    create_element,
    h,
    to_node,
    validate_name,
)
from noxt.nodes.html import Element, NodeList, RawHtml, Text

__all__ = [
    "Component",
    "ComponentCall",
    "Element",
    "Fragment",
    "Node",
    "NodeKind",
    "NodeList",
    "RawHtml",
    "Text",
    "as_component",
    "component",
    "create_element",
    "h",
    "to_node",
    "validate_name",
]
