import numpy as np

from hilbert_anim.coloring.base import progress
from hilbert_anim.utilities.color_conversion import encode_linear_srgb

CHANNEL_SHIFT = 1.0 / 3.0


def _square_channel(p: np.ndarray) -> np.ndarray:
    return np.maximum(1.0 - (p * 4.0 - 2.0) ** 2, 0.0)


def color(indices: np.ndarray, size: int) -> np.ndarray:
    """Three parabolic linear-sRGB channels, a third of the curve apart."""

    p = progress(indices, size)
    linear = np.stack(
        (
            _square_channel(np.mod(p + CHANNEL_SHIFT, 1.0)),
            _square_channel(p),
            _square_channel(np.mod(p - CHANNEL_SHIFT, 1.0)),
        ),
        axis=-1,
    )
    return encode_linear_srgb(linear)
