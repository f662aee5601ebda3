"""Base class for client library instrumentations."""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from types import ModuleType

from .registry import register_patch, unregister_patch

logger = logging.getLogger(__name__)


class InstrumentationBase(ABC):
    """Registers ``patch`` to run against ``module_name`` once it is imported.

    Subclasses implement ``patch`` to wrap the library and ``unpatch`` to
    restore it.
    """

    def __init__(
        self,
        name: str,
        module_name: str,
        supported_versions: str = "*",
        enabled: bool = True,
    ) -> None:
        self.name = name
        self.module_name = module_name
        self.supported_versions = supported_versions
        self.enabled = enabled

        if enabled:
            register_patch(module_name, self.patch)
        else:
            logger.debug(f"{name} disabled, not patching {module_name}")

    @abstractmethod
    def patch(self, module: ModuleType) -> None: ...

    @abstractmethod
    def unpatch(self, module: ModuleType) -> None: ...

    def uninstrument(self) -> None:
        """Undo the patch and stop patching future imports."""
        unregister_patch(self.module_name)
        module = sys.modules.get(self.module_name)
        if module is not None and self.enabled:
            self.unpatch(module)
