"""Element attribute serialization."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from noxt.utils.html import cx, html_escape

logger = logging.getLogger(__name__)


def serialize_attributes(attrs: Mapping[str, Any]) -> str:
    """Serialize an attribute mapping to the text between tag name and ``>``.

    Rules, in order:
    - ``children`` is never an attribute
    - ``None`` / ``False``: omitted
    - ``True``: bare attribute name
    - ``class``: flattened with ``cx()``, omitted when empty
    - ``str`` / ``int`` / ``float``: ``name="escaped value"``
    - anything else: omitted, with a warning

    Example:
        >>> serialize_attributes({"class": ["a", {"b": True, "c": False}], "disabled": True})
        ' class="a b" disabled'
    """
    parts: list[str] = []
    for name, value in attrs.items():
        if name == "children" or value is None or value is False:
            continue
        if value is True:
            parts.append(f" {name}")
        elif name == "class":
            classes = cx(value)
            if classes:
                parts.append(f' class="{html_escape(classes)}"')
        elif isinstance(value, (str, int, float)):
            parts.append(f' {name}="{html_escape(value)}"')
        else:
            logger.warning(
                "Omitting attribute %r: unsupported value of type %s",
                name,
                type(value).__name__,
            )
    return "".join(parts)


def open_tag(tag: str, attrs: Mapping[str, Any]) -> str:
    return f"<{tag}{serialize_attributes(attrs)}>"


def close_tag(tag: str) -> str:
    return f"</{tag}>"
