"""Slot registry: cross-component content injection within one render pass.

A component anywhere in the tree can push content into a named slot; another
component (commonly the layout) reads it back:

    def Article(props, ctx):
        ctx.slot("head", h("title", None, props["title"]))        # anonymous
        ctx.slot("head", "canonical", h("link", {"rel": "canonical"}))  # named
        return h("article", None, props["body"])

    def Layout(props, ctx):
        return h("html", None, h("head", None, ctx.slot("head")), ...)

Ordering contract:
The tree is walked once, depth-first and left-to-right, and component calls
are resolved one at a time. A read sees exactly the writes made by components
that ran before it. A slot written by a component that runs *after* the
reader is not reflected in that read, and there is no second pass.
``render_with_layout()`` renders the page before the layout, so page
components can always feed the layout.

Thread-Safety:
One ``Slots`` instance belongs to one render pass. The renderer is
cooperative and single-task, so writes and reads never interleave.

"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterator
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Slot:
    anonymous: list[Any] = field(default_factory=list)
    named: dict[Hashable, Any] = field(default_factory=dict)


class Slots:
    """Per-pass slot registry.

    Methods:
        get(id): anonymous values in insertion order, then named values in
            order of first write
        add(id, value): append an anonymous value
        set(id, key, value): insert or overwrite a named value
        slot(id, *args): multi-arity shorthand used by ``ctx.slot``

    Example:
        >>> slots = Slots()
        >>> slots.add("head", "a")
        >>> slots.set("head", "title", "t1")
        >>> slots.set("head", "title", "t2")
        >>> slots.get("head")
        ['a', 't2']
    """

    __slots__ = ("_slots",)

    def __init__(self) -> None:
        self._slots: dict[Hashable, _Slot] = {}

    def _ensure(self, slot_id: Hashable) -> _Slot:
        slot = self._slots.get(slot_id)
        if slot is None:
            slot = self._slots[slot_id] = _Slot()
        return slot

    def get(self, slot_id: Hashable) -> list[Any]:
        slot = self._slots.get(slot_id)
        if slot is None:
            return []
        return [*slot.anonymous, *slot.named.values()]

    def add(self, slot_id: Hashable, value: Any) -> None:
        logger.debug("slot %r: add %r", slot_id, value)
        self._ensure(slot_id).anonymous.append(value)

    def set(self, slot_id: Hashable, key: Hashable, value: Any) -> None:
        logger.debug("slot %r: set %r = %r", slot_id, key, value)
        self._ensure(slot_id).named[key] = value

    def slot(self, slot_id: Hashable, *args: Any) -> list[Any] | None:
        """Read or write a slot depending on the number of arguments.

        - ``slot(id)`` reads
        - ``slot(id, value)`` or ``slot(id, None, value)`` appends
        - ``slot(id, key, value)`` sets a named value
        """
        if not args:
            return self.get(slot_id)
        if len(args) == 1:
            self.add(slot_id, args[0])
            return None
        if len(args) == 2:
            key, value = args
            if key is None:
                self.add(slot_id, value)
            else:
                self.set(slot_id, key, value)
            return None
        raise TypeError(f"slot() takes at most 3 arguments ({len(args) + 1} given)")

    def ids(self) -> Iterator[Hashable]:
        """Slot ids that have been written, in first-write order."""
        return iter(self._slots)

    def __contains__(self, slot_id: object) -> bool:
        return slot_id in self._slots

    def __repr__(self) -> str:
        return f"Slots({list(self._slots)!r})"


__all__ = ["Slots"]
