"""Render single animation frames.

Frame ``k`` of ``frame_count`` shifts every curve position forward by
``k * size // frame_count`` cells (wrapping), so after the last frame the
colors have travelled once around the curve and the animation loops cleanly.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

import numpy as np

from hilbert_anim.coloring import ColoringFunction, apply_coloring
from hilbert_anim.curve import curve_size, hilbert_index_grid, side_length

if TYPE_CHECKING:
    from hilbert_anim.config import AnimationConfig

IndexT = TypeVar("IndexT", int, np.ndarray)


@dataclass(frozen=True)
class Frame:
    frame_index: int
    frame_count: int
    size: int

    def __post_init__(self) -> None:
        if self.frame_count < 1:
            raise ValueError("frame_count must be positive")
        if not 0 <= self.frame_index < self.frame_count:
            raise ValueError(
                f"frame_index {self.frame_index} outside [0, {self.frame_count})"
            )

    @property
    def shift(self) -> int:
        return self.frame_index * self.size // self.frame_count


def index_offset(index: IndexT, frame: Frame) -> IndexT:
    """Return the curve position whose color ``index`` shows on ``frame``."""

    return (index + frame.shift) % frame.size


def color_table(coloring_fn: ColoringFunction, size: int) -> np.ndarray:
    """Return the ``(size, 3)`` uint8 colors of every curve position."""

    return apply_coloring(coloring_fn, np.arange(size, dtype=np.int64), size)


def render_frame(
    frame: Frame,
    coloring_fn: ColoringFunction,
    order: int,
    *,
    colors: np.ndarray | None = None,
) -> np.ndarray:
    """Return the ``(side, side, 3)`` uint8 raster for ``frame``.

    ``raster[y, x]`` is colored from the curve position of cell ``(x, y)``.
    Every frame is a rotation of the same colors along the curve, so callers
    rendering many frames pass the precomputed :func:`color_table` as
    ``colors`` and skip re-running ``coloring_fn``.
    """

    if frame.size != curve_size(order):
        raise ValueError(
            f"frame size {frame.size} does not match order {order} curve"
        )
    if colors is None:
        colors = color_table(coloring_fn, frame.size)
    elif colors.shape != (frame.size, 3):
        raise ValueError(
            f"color table shape {colors.shape} does not match curve size {frame.size}"
        )
    side = side_length(order)
    shifted = index_offset(hilbert_index_grid(order), frame)
    return colors[shifted].reshape(side, side, 3)


class FrameRenderer:
    """Render frames for one :class:`~hilbert_anim.config.AnimationConfig`.

    The color table is built on first use and shared by every frame.
    """

    def __init__(self, config: "AnimationConfig") -> None:
        self._config = config
        self._colors: np.ndarray | None = None
        self._lock = threading.Lock()

    @property
    def config(self) -> "AnimationConfig":
        return self._config

    @property
    def colors(self) -> np.ndarray:
        with self._lock:
            if self._colors is None:
                colors = color_table(self._config.coloring_fn, self._config.size)
                colors.setflags(write=False)
                self._colors = colors
            return self._colors

    def prepare(self) -> None:
        """Build the shared index grid and color table before workers read them."""

        hilbert_index_grid(self._config.order)
        _ = self.colors

    def frame(self, frame_index: int) -> Frame:
        return Frame(
            frame_index=frame_index,
            frame_count=self._config.frame_count,
            size=self._config.size,
        )

    def render(self, frame_index: int) -> np.ndarray:
        return render_frame(
            self.frame(frame_index),
            self._config.coloring_fn,
            self._config.order,
            colors=self.colors,
        )
