from __future__ import annotations

from functools import cached_property
from pathlib import Path

from hilbert_anim.coloring.base import ColoringFunction
from hilbert_anim.utilities.module_registry import discover_registry

DEFAULT_FUNCTION = "oklab_hue"


class ColoringRegistry:
    @cached_property
    def registry(self) -> dict[str, ColoringFunction]:
        functions_dir = Path(__file__).resolve().parent / "functions"
        return discover_registry(
            functions_dir,
            "hilbert_anim.coloring.functions",
            attribute="color",
            log_imports=True,
        )

    def get(self, name: str) -> ColoringFunction | None:
        return self.registry.get(name)

    def names(self) -> list[str]:
        return sorted(self.registry)
