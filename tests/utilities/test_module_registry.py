"""Tests for :mod:`hilbert_anim.utilities.module_registry`."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from hilbert_anim.utilities.module_registry import discover_registry


@pytest.fixture()
def plugin_package(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    package = tmp_path / "sample_plugins"
    package.mkdir()
    (package / "__init__.py").write_text("")
    (package / "alpha.py").write_text("def color(indices, size):\n    return 'alpha'\n")
    (package / "beta.py").write_text("VALUE = 1\n")
    (package / "notes.txt").write_text("not a module")
    monkeypatch.syspath_prepend(str(tmp_path))
    yield package
    for name in [m for m in sys.modules if m.startswith("sample_plugins")]:
        sys.modules.pop(name, None)


class TestDiscoverRegistry:
    def test_maps_module_stems_to_attribute(self, plugin_package: Path) -> None:
        """Verify only modules exposing the attribute are registered, keyed by stem."""
        registry = discover_registry(plugin_package, "sample_plugins", attribute="color")

        assert list(registry) == ["alpha"]
        assert registry["alpha"](None, 0) == "alpha"
