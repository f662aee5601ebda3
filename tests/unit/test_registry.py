"""Tests for the import-hook patch registry."""

from __future__ import annotations

import importlib
import sys
import types

import pytest

from bodycapture.instrumentation.base import InstrumentationBase
from bodycapture.instrumentation.registry import register_patch, unregister_patch


@pytest.fixture
def fake_module():
    name = "bodycapture_fake_client"
    module = types.ModuleType(name)
    sys.modules[name] = module
    yield module
    unregister_patch(name)
    sys.modules.pop(name, None)


class TestRegisterPatch:
    def test_patches_already_imported_module(self, fake_module):
        calls = []

        register_patch(fake_module.__name__, calls.append)

        assert calls == [fake_module]
        assert fake_module.__bodycapture_patched__ is True

    def test_does_not_patch_twice(self, fake_module):
        calls = []

        register_patch(fake_module.__name__, calls.append)
        register_patch(fake_module.__name__, calls.append)

        assert calls == [fake_module]

    def test_unregister_allows_patching_again(self, fake_module):
        calls = []

        register_patch(fake_module.__name__, calls.append)
        unregister_patch(fake_module.__name__)
        register_patch(fake_module.__name__, calls.append)

        assert calls == [fake_module, fake_module]

    def test_patches_module_on_first_import(self, temp_dir, monkeypatch):
        name = "bodycapture_lazy_client"
        (temp_dir / f"{name}.py").write_text("class Session:\n    pass\n")
        monkeypatch.syspath_prepend(str(temp_dir))
        calls = []

        register_patch(name, lambda module: calls.append(module.__name__))
        try:
            assert calls == []
            module = importlib.import_module(name)
            assert calls == [name]
            assert hasattr(module, "Session")
        finally:
            unregister_patch(name)
            sys.modules.pop(name, None)


class RecordingInstrumentation(InstrumentationBase):
    def __init__(self, module_name: str, enabled: bool = True):
        self.events: list[tuple[str, str]] = []
        super().__init__(name="RecordingInstrumentation", module_name=module_name, enabled=enabled)

    def patch(self, module):
        self.events.append(("patch", module.__name__))

    def unpatch(self, module):
        self.events.append(("unpatch", module.__name__))


class TestInstrumentationBase:
    def test_subclass_without_unpatch_cannot_be_created(self, fake_module):
        class PatchOnly(InstrumentationBase):
            def patch(self, module):
                pass

        with pytest.raises(TypeError):
            PatchOnly(name="PatchOnly", module_name=fake_module.__name__)

        assert not hasattr(fake_module, "__bodycapture_patched__")

    def test_patches_and_uninstruments_loaded_module(self, fake_module):
        instrumentation = RecordingInstrumentation(fake_module.__name__)

        instrumentation.uninstrument()

        assert instrumentation.events == [
            ("patch", fake_module.__name__),
            ("unpatch", fake_module.__name__),
        ]
        assert not hasattr(fake_module, "__bodycapture_patched__")

    def test_disabled_instrumentation_never_patches(self, fake_module):
        instrumentation = RecordingInstrumentation(fake_module.__name__, enabled=False)

        instrumentation.uninstrument()

        assert instrumentation.events == []
