"""Base node class and kind discriminator for the noxt render tree."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class NodeKind(Enum):
    """Explicit discriminator for render-tree nodes.

    The renderer dispatches on ``node.kind``, never on the shape of a value.
    """

    TEXT = "text"
    RAW_HTML = "raw_html"
    LIST = "list"
    ELEMENT = "element"
    COMPONENT_CALL = "component_call"


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all render-tree nodes.

    Nodes are immutable descriptors. They hold no output and may be
    shared between render passes.

    """

    kind: ClassVar[NodeKind]
