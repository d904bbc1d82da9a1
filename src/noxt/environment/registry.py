"""Component registry for a noxt application.

One registry per ``App``. It is filled while views load and frozen when
``App.load()`` completes; after that it is read-only. Reloading means
building a new registry, never editing this one in place.

Provides a read-only ``Mapping`` interface so it can serve directly as
``RenderContext.components``:
    - registry['Card']
    - 'Card' in registry
    - registry.get('Layout')
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import TYPE_CHECKING, Any

from noxt.environment.exceptions import DuplicateNameError, RegistryFrozenError

if TYPE_CHECKING:
    from noxt.nodes import Component


class ComponentRegistry(Mapping[str, "Component"]):
    """Name -> Component table.

    Mutations replace the underlying dict (copy-on-write), so a reader
    holding an iterator never sees it change underneath.

    Attributes:
        error_component_name: Name of the error-display component
        default_layout: Default layout name or component for pages
    """

    __slots__ = ("_components", "_frozen", "error_component_name", "default_layout")

    def __init__(
        self,
        components: Mapping[str, Component] | None = None,
        *,
        error_component_name: str = "ErrorMessage",
        default_layout: Any = None,
    ):
        self._components: dict[str, Component] = dict(components or {})
        self._frozen = False
        self.error_component_name = error_component_name
        self.default_layout = default_layout

    def __getitem__(self, name: str) -> Component:
        return self._components[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._components)

    def __len__(self) -> int:
        return len(self._components)

    def __contains__(self, name: object) -> bool:
        return name in self._components

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Make the registry read-only."""
        self._frozen = True

    def add(self, comp: Component) -> Component:
        """Register an existing component under its own name.

        Raises:
            DuplicateNameError: If the name is already registered
            RegistryFrozenError: If the registry is frozen
        """
        if self._frozen:
            raise RegistryFrozenError(f"Cannot register {comp.name!r}: registry is frozen")
        if comp.name in self._components:
            raise DuplicateNameError(comp.name)
        new = self._components.copy()
        new[comp.name] = comp
        self._components = new
        return comp

    def register(self, name: str, render: Callable[..., Any], module: Any = None) -> Component:
        """Wrap ``render`` in a ``Component`` named ``name`` and register it.

        Raises:
            InvalidIdentifierError: If ``name`` is not a valid identifier
        """
        from noxt.nodes import Component

        return self.add(Component(name, render, module))

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"ComponentRegistry({sorted(self._components)!r}, {state})"
