import numpy as np

from hilbert_anim.coloring.base import progress
from hilbert_anim.utilities.color_conversion import (encode_linear_srgb,
                                                     okhsv_to_linear_srgb)


def color(indices: np.ndarray, size: int) -> np.ndarray:
    """Sweep the full Okhsv hue circle once along the curve."""

    hue = progress(indices, size) * 360.0
    return encode_linear_srgb(okhsv_to_linear_srgb(hue, 1.0, 1.0))
