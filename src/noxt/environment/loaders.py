"""View loaders for noxt applications.

Loaders discover view modules and return them keyed by component name.
They implement ``load_modules() -> dict[str, object]``.

Built-in Loaders:
- ``FileSystemLoader``: import ``*.py`` view modules from directories
- ``DictLoader``: in-memory modules (testing/embedded)
- ``ChoiceLoader``: combine several loaders

View modules:
A view module exposes ``default`` (or a function named after the module),
and optionally per-verb functions (``GET``, ``POST``, ...), ``route``,
``params``, ``data`` and ``layout``. See ``noxt.pages``.

Naming:
The component name is the file stem. Files whose stem starts with a
lowercase letter are helpers, not views, and are skipped; files starting
with ``_`` are ignored entirely. A name found twice is a hard failure.

"""

from __future__ import annotations

import importlib.util
import logging
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from types import ModuleType, SimpleNamespace
from typing import Any

from noxt.environment.exceptions import DuplicateNameError, LoadError

logger = logging.getLogger(__name__)

MODULE_PREFIX = "noxt_views"


def _is_view_name(name: str) -> bool:
    return bool(name) and name[0].isupper()


class FileSystemLoader:
    """Import view modules from one or more directories.

    Directories are scanned recursively and in order. Each file is imported
    under a private module name (``noxt_views.<Name>``) so view modules do
    not collide with importable packages.

    Example:
            >>> loader = FileSystemLoader(["views/", "shared/views/"])
            >>> sorted(loader.load_modules())
        ['ErrorMessage', 'Home', 'Layout']

    Raises:
        LoadError: If a directory is missing or a module fails to import
        DuplicateNameError: If two files share a stem

    """

    __slots__ = ("_paths",)

    def __init__(self, paths: str | Path | Sequence[str | Path]):
        if isinstance(paths, (str, Path)):
            paths = [paths]
        self._paths = [Path(p) for p in paths]

    def discover(self) -> list[tuple[str, Path]]:
        """List ``(name, path)`` for every view file, in load order."""
        found: list[tuple[str, Path]] = []
        seen: dict[str, Path] = {}
        for base in self._paths:
            if not base.is_dir():
                raise LoadError("View directory not found", path=str(base))
            for path in sorted(base.rglob("*.py")):
                name = path.stem
                if name.startswith("_"):
                    continue
                if not _is_view_name(name):
                    logger.info("Skipping non-capitalized view module: %s", path)
                    continue
                if name in seen:
                    raise DuplicateNameError(name, path=str(path), previous=str(seen[name]))
                seen[name] = path
                found.append((name, path))
        return found

    def load_modules(self) -> dict[str, ModuleType]:
        modules: dict[str, ModuleType] = {}
        for name, path in self.discover():
            modules[name] = self._import(name, path)
        return modules

    @staticmethod
    def _import(name: str, path: Path) -> ModuleType:
        module_name = f"{MODULE_PREFIX}.{name}"
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise LoadError(f"Cannot import view module {name}", path=str(path))
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as exc:
            sys.modules.pop(module_name, None)
            raise LoadError(f"Error loading view module {name}: {exc}", path=str(path)) from exc
        logger.debug("Loaded view module %s from %s", name, path)
        return module

    def __repr__(self) -> str:
        return f"FileSystemLoader({[str(p) for p in self._paths]!r})"


class DictLoader:
    """Serve view modules from an in-memory mapping.

    Values may be modules, any object with module-like attributes, or plain
    dicts (wrapped in a ``SimpleNamespace``).

    Example:
            >>> loader = DictLoader({
            ...     "Home": {"route": "/", "default": lambda props, ctx: "Hi"},
            ... })
            >>> loader.load_modules()["Home"].route
            '/'

    """

    __slots__ = ("_mapping",)

    def __init__(self, mapping: Mapping[str, Any]):
        self._mapping = mapping

    def load_modules(self) -> dict[str, Any]:
        modules: dict[str, Any] = {}
        for name, module in self._mapping.items():
            if not _is_view_name(name):
                logger.info("Skipping non-capitalized view module: %s", name)
                continue
            modules[name] = SimpleNamespace(**module) if isinstance(module, Mapping) else module
        return modules


class ChoiceLoader:
    """Combine the modules of several loaders.

    Unlike a template fallback chain, every loader contributes: all names
    must be unique across loaders.

    Raises:
        DuplicateNameError: If two loaders provide the same name
    """

    __slots__ = ("_loaders",)

    def __init__(self, loaders: Sequence[FileSystemLoader | DictLoader | ChoiceLoader]):
        self._loaders = list(loaders)

    def load_modules(self) -> dict[str, Any]:
        modules: dict[str, Any] = {}
        origins: dict[str, Any] = {}
        for loader in self._loaders:
            for name, module in loader.load_modules().items():
                if name in modules:
                    raise DuplicateNameError(name, path=repr(loader), previous=repr(origins[name]))
                modules[name] = module
                origins[name] = loader
        return modules


Loader = FileSystemLoader | DictLoader | ChoiceLoader
