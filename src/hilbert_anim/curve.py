"""Hilbert curve index/coordinate mapping.

The curve of order ``n`` visits every cell of a ``2**n x 2**n`` grid exactly
once, and consecutive indices always land on neighbouring cells.
"""

from __future__ import annotations

from functools import lru_cache

import numpy as np
from numba import njit

# Order 12 is a 4096x4096 raster; each further order quadruples memory use.
MAX_ORDER = 12


def side_length(order: int) -> int:
    _check_order(order)
    return 1 << order


def curve_size(order: int) -> int:
    """Number of cells visited by the curve, ``4**order``."""

    _check_order(order)
    return 1 << (2 * order)


def _check_order(order: int) -> None:
    if not 1 <= order <= MAX_ORDER:
        raise ValueError(f"order must be between 1 and {MAX_ORDER}, got {order}")


@njit
def _d2xy(n: int, d: int) -> tuple[int, int]:
    x = 0
    y = 0
    t = d
    s = 1
    while s < n:
        rx = (t // 2) & 1
        ry = (t ^ rx) & 1
        if ry == 0:
            if rx == 1:
                x = s - 1 - x
                y = s - 1 - y
            temp = x
            x = y
            y = temp
        x += s * rx
        y += s * ry
        t //= 4
        s *= 2
    return x, y


@njit
def _xy2d(n: int, x: int, y: int) -> int:
    d = 0
    s = n // 2
    while s > 0:
        rx = 1 if (x & s) > 0 else 0
        ry = 1 if (y & s) > 0 else 0
        d += s * s * ((3 * rx) ^ ry)
        if ry == 0:
            if rx == 1:
                x = n - 1 - x
                y = n - 1 - y
            temp = x
            x = y
            y = temp
        s //= 2
    return d


@njit
def _index_grid(n: int) -> np.ndarray:
    grid = np.empty((n, n), dtype=np.int64)
    for y in range(n):
        for x in range(n):
            grid[y, x] = _xy2d(n, x, y)
    return grid


@njit
def _coordinates(n: int) -> np.ndarray:
    total = n * n
    points = np.empty((total, 2), dtype=np.int64)
    for d in range(total):
        x, y = _d2xy(n, d)
        points[d, 0] = x
        points[d, 1] = y
    return points


def index_to_coord(index: int, order: int) -> tuple[int, int]:
    """Return the ``(x, y)`` cell visited at position ``index`` along the curve."""

    size = curve_size(order)
    if not 0 <= index < size:
        raise ValueError(f"index {index} outside curve of size {size}")
    x, y = _d2xy(side_length(order), int(index))
    return int(x), int(y)


def coord_to_index(x: int, y: int, order: int) -> int:
    """Return the position along the curve at which cell ``(x, y)`` is visited."""

    n = side_length(order)
    if not (0 <= x < n and 0 <= y < n):
        raise ValueError(f"coordinate ({x}, {y}) outside {n}x{n} grid")
    return int(_xy2d(n, int(x), int(y)))


@lru_cache(maxsize=8)
def hilbert_index_grid(order: int) -> np.ndarray:
    """Return a read-only ``(side, side)`` array with ``grid[y, x]`` = curve index."""

    grid = _index_grid(side_length(order))
    grid.setflags(write=False)
    return grid


def hilbert_coordinates(order: int) -> np.ndarray:
    """Return the ``(4**order, 2)`` array of ``(x, y)`` cells in curve order."""

    return _coordinates(side_length(order))
