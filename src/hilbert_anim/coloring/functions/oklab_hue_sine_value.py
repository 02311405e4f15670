import math

import numpy as np

from hilbert_anim.coloring.base import progress
from hilbert_anim.utilities.color_conversion import (encode_linear_srgb,
                                                     okhsv_to_linear_srgb)

SINE_CYCLES = 8.0


def color(indices: np.ndarray, size: int) -> np.ndarray:
    """Hue sweep with a value that pulses ``SINE_CYCLES`` times along the curve."""

    p = progress(indices, size)
    value = np.sin(p * 2.0 * math.pi * SINE_CYCLES) * 0.375 + 0.625
    return encode_linear_srgb(okhsv_to_linear_srgb(p * 360.0, 1.0, value))
