"""HTML primitives: escaping, the Markup marker, and class-name flattening.

Escaping:
Single-pass via ``str.translate()`` over exactly five characters
(``& < > " '``). Nothing else is touched, so escaping an already escaped
string escapes it again; the renderer applies it once per text leaf.

Class names:
``cx()`` mirrors the ``classnames`` convention from JS land:

    >>> cx("btn", ["primary", {"active": True, "disabled": False}])
    'btn primary active'

Thread-Safety:
All functions are pure. The translation table is read-only after import.

"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

_ESCAPE_TABLE = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#39;",
    }
)

_ESCAPE_CHARS = frozenset("&<>\"'")


class Markup(str):
    """A string that is already safe HTML.

    The renderer passes ``Markup`` values through verbatim, exactly like a
    ``RawHtml`` node. Wrapping untrusted input in ``Markup`` defeats escaping.

    Example:
        >>> Markup("<b>ok</b>")
        Markup('<b>ok</b>')
    """

    __slots__ = ()

    def __html__(self) -> str:
        return str(self)

    def __repr__(self) -> str:
        return f"Markup({str.__repr__(self)})"


def html_escape(value: Any) -> str:
    """Escape ``& < > " '`` in ``str(value)``.

    Fast path returns the string untouched when it contains none of the
    five characters.
    """
    s = value if isinstance(value, str) else str(value)
    if _ESCAPE_CHARS.isdisjoint(s):
        return s
    return s.translate(_ESCAPE_TABLE)


def cx(*args: Any) -> str:
    """Flatten class-name arguments into a space-separated string.

    Accepts strings, numbers, mappings (keys whose values are truthy),
    and arbitrarily nested lists/tuples/sets of those. Falsy entries are
    dropped and duplicates keep their first position.

    Nested sequences are walked with an explicit stack so that a deeply
    nested class list cannot exhaust the call stack.
    """
    seen: dict[str, None] = {}
    stack: list[Any] = [args]
    while stack:
        item = stack.pop()
        if not item or item is True:
            continue
        if isinstance(item, str):
            seen.setdefault(item, None)
        elif isinstance(item, (int, float)):
            seen.setdefault(str(item), None)
        elif isinstance(item, Mapping):
            for key, enabled in item.items():
                if enabled:
                    seen.setdefault(str(key), None)
        elif isinstance(item, Iterable):
            # reversed so that popping restores left-to-right order
            stack.extend(reversed(list(item)))
    return " ".join(seen)


__all__ = ["Markup", "cx", "html_escape"]
