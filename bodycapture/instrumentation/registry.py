"""Import-hook registry that patches client libraries when they are imported."""

import importlib.abc
import importlib.machinery
import logging
import sys
from collections.abc import Sequence
from types import ModuleType
from typing import Callable, override

logger = logging.getLogger(__name__)

PatchFn = Callable[[ModuleType], None]

_PATCHED_MARKER = "__bodycapture_patched__"

_registry: dict[str, PatchFn] = {}
_finder_installed = False


def register_patch(module_name: str, patch_fn: PatchFn) -> None:
    """Patch ``module_name`` now if it is loaded, otherwise when it is imported."""
    _registry[module_name] = patch_fn
    _install_finder()

    module = sys.modules.get(module_name)
    if module is not None:
        _apply_patch(module, patch_fn)


def unregister_patch(module_name: str) -> None:
    """Forget the patch for ``module_name`` so it can be registered again."""
    _registry.pop(module_name, None)
    module = sys.modules.get(module_name)
    if module is not None and getattr(module, _PATCHED_MARKER, False):
        delattr(module, _PATCHED_MARKER)


class _PatchingLoader(importlib.abc.Loader):
    def __init__(self, loader: importlib.abc.Loader, patch_fn: PatchFn) -> None:
        self._loader = loader
        self._patch_fn = patch_fn

    @override
    def create_module(self, spec: importlib.machinery.ModuleSpec):
        create = getattr(self._loader, "create_module", None)
        return create(spec) if callable(create) else None

    @override
    def exec_module(self, module: ModuleType) -> None:
        self._loader.exec_module(module)
        _apply_patch(module, self._patch_fn)


class _PatchingFinder(importlib.abc.MetaPathFinder):
    @override
    def find_spec(
        self,
        fullname: str,
        path: Sequence[str] | None,
        target: ModuleType | None = None,
    ):
        patch_fn = _registry.get(fullname)
        if not patch_fn:
            return None

        spec = importlib.machinery.PathFinder.find_spec(fullname, path)
        if not spec or not spec.loader:
            return None

        spec.loader = _PatchingLoader(spec.loader, patch_fn)
        return spec


def _install_finder() -> None:
    global _finder_installed
    if _finder_installed:
        return

    sys.meta_path.insert(0, _PatchingFinder())
    _finder_installed = True


def _apply_patch(module: ModuleType, patch_fn: PatchFn) -> None:
    if getattr(module, _PATCHED_MARKER, False):
        return

    patch_fn(module)
    setattr(module, _PATCHED_MARKER, True)
    logger.debug(f"Patched module {module.__name__}")
