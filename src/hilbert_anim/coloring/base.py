from __future__ import annotations

from typing import Protocol

import numpy as np

from hilbert_anim.color import Color


class ColoringFunction(Protocol):
    """Map curve positions to colors.

    ``indices`` is an int64 array of positions in ``[0, size)``; the result is
    a ``(len(indices), 3)`` uint8 array. Implementations must be pure and
    elementwise so any subset of indices colors the same way.
    """

    def __call__(self, indices: np.ndarray, size: int) -> np.ndarray: ...


def progress(indices: np.ndarray, size: int) -> np.ndarray:
    """Fraction of the curve covered at each index, in ``[0, 1)``."""

    return np.asarray(indices, dtype=np.float64) / float(size)


def apply_coloring(
    coloring_fn: ColoringFunction, indices: np.ndarray, size: int
) -> np.ndarray:
    flat = np.ascontiguousarray(indices, dtype=np.int64).reshape(-1)
    colors = np.asarray(coloring_fn(flat, size))
    if colors.shape != (flat.shape[0], 3) or colors.dtype != np.uint8:
        raise ValueError(
            "coloring function must return a uint8 array of shape "
            f"({flat.shape[0]}, 3), got {colors.dtype} {colors.shape}"
        )
    return colors


def color_at(coloring_fn: ColoringFunction, index: int, size: int) -> Color:
    """Color a single curve position."""

    r, g, b = (int(c) for c in apply_coloring(coloring_fn, np.array([index]), size)[0])
    return Color(r=r, g=g, b=b)
