"""Vectorised Okhsv / Oklab / sRGB conversions.

All functions accept numpy arrays (or scalars) and broadcast elementwise.
Hue is expressed in degrees.
"""

from __future__ import annotations

import numpy as np

_TOE_K1 = 0.206
_TOE_K2 = 0.03
_TOE_K3 = (1.0 + _TOE_K1) / (1.0 + _TOE_K2)

# Polynomial fit for the maximum saturation per hue, one row per gamut edge
# (red, green, blue): k0..k4 followed by the linear sRGB weights of that channel.
_SATURATION_COEFFICIENTS = np.array(
    [
        [1.19086277, 1.76576728, 0.59662641, 0.75515197, 0.56771245,
         4.0767416621, -3.3077115913, 0.2309699292],
        [0.73956515, -0.45954404, 0.08285427, 0.12541070, 0.14503204,
         -1.2684380046, 2.6097574011, -0.3413193965],
        [1.35733652, -0.00915799, -1.15130210, -0.50559606, 0.00692167,
         -0.0041960863, -0.7034186147, 1.7076147010],
    ]
)


def oklab_to_linear_srgb(
    lightness: np.ndarray, a: np.ndarray, b: np.ndarray
) -> np.ndarray:
    """Return linear sRGB with a trailing channel axis of length 3."""

    l_ = lightness + 0.3963377774 * a + 0.2158037573 * b
    m_ = lightness - 0.1055613458 * a - 0.0638541728 * b
    s_ = lightness - 0.0894841775 * a - 1.2914855480 * b

    l = l_ * l_ * l_
    m = m_ * m_ * m_
    s = s_ * s_ * s_

    return np.stack(
        (
            4.0767416621 * l - 3.3077115913 * m + 0.2309699292 * s,
            -1.2684380046 * l + 2.6097574011 * m - 0.3413193965 * s,
            -0.0041960863 * l - 0.7034186147 * m + 1.7076147010 * s,
        ),
        axis=-1,
    )


def _toe_inv(x: np.ndarray) -> np.ndarray:
    return (x * x + _TOE_K1 * x) / (_TOE_K3 * (x + _TOE_K2))


def _max_saturation(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    edge = np.where(
        -1.88170328 * a - 0.80936493 * b > 1,
        0,
        np.where(1.81444104 * a - 1.19445276 * b > 1, 1, 2),
    )
    k0, k1, k2, k3, k4, wl, wm, ws = np.moveaxis(
        _SATURATION_COEFFICIENTS[edge], -1, 0
    )

    saturation = k0 + k1 * a + k2 * b + k3 * a * a + k4 * a * b

    k_l = 0.3963377774 * a + 0.2158037573 * b
    k_m = -0.1055613458 * a - 0.0638541728 * b
    k_s = -0.0894841775 * a - 1.2914855480 * b

    # One Halley step refines the polynomial estimate.
    l_ = 1.0 + saturation * k_l
    m_ = 1.0 + saturation * k_m
    s_ = 1.0 + saturation * k_s

    l = l_ * l_ * l_
    m = m_ * m_ * m_
    s = s_ * s_ * s_

    l_ds = 3.0 * k_l * l_ * l_
    m_ds = 3.0 * k_m * m_ * m_
    s_ds = 3.0 * k_s * s_ * s_

    l_ds2 = 6.0 * k_l * k_l * l_
    m_ds2 = 6.0 * k_m * k_m * m_
    s_ds2 = 6.0 * k_s * k_s * s_

    f = wl * l + wm * m + ws * s
    f1 = wl * l_ds + wm * m_ds + ws * s_ds
    f2 = wl * l_ds2 + wm * m_ds2 + ws * s_ds2

    return saturation - f * f1 / (f1 * f1 - 0.5 * f * f2)


def _find_cusp(a: np.ndarray, b: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    s_cusp = _max_saturation(a, b)
    rgb_at_max = oklab_to_linear_srgb(np.ones_like(a), s_cusp * a, s_cusp * b)
    l_cusp = np.cbrt(1.0 / np.max(rgb_at_max, axis=-1))
    return l_cusp, l_cusp * s_cusp


def okhsv_to_linear_srgb(
    hue_degrees: np.ndarray | float,
    saturation: np.ndarray | float,
    value: np.ndarray | float,
) -> np.ndarray:
    """Convert Okhsv to linear sRGB, returning an array with a trailing RGB axis."""

    hue, saturation, value = np.broadcast_arrays(
        np.asarray(hue_degrees, dtype=np.float64),
        np.asarray(saturation, dtype=np.float64),
        np.asarray(value, dtype=np.float64),
    )
    radians = np.deg2rad(hue)
    a_ = np.cos(radians)
    b_ = np.sin(radians)

    l_cusp, c_cusp = _find_cusp(a_, b_)
    s_max = c_cusp / l_cusp
    t_max = c_cusp / (1.0 - l_cusp)
    s_0 = 0.5
    k = 1.0 - s_0 / s_max

    denominator = s_0 + t_max - t_max * k * saturation
    l_v = 1.0 - saturation * s_0 / denominator
    c_v = saturation * t_max * s_0 / denominator

    lightness = value * l_v
    chroma = value * c_v

    l_vt = _toe_inv(l_v)
    c_vt = c_v * l_vt / l_v

    with np.errstate(divide="ignore", invalid="ignore"):
        l_new = _toe_inv(lightness)
        chroma = np.where(lightness > 0.0, chroma * l_new / lightness, 0.0)
    lightness = l_new

    rgb_scale = oklab_to_linear_srgb(l_vt, a_ * c_vt, b_ * c_vt)
    scale_l = np.cbrt(1.0 / np.maximum(np.max(rgb_scale, axis=-1), 0.0))

    lightness = lightness * scale_l
    chroma = chroma * scale_l

    return oklab_to_linear_srgb(lightness, chroma * a_, chroma * b_)


def linear_to_srgb(channel: np.ndarray) -> np.ndarray:
    """Apply the sRGB transfer function to linear values in ``[0, 1]``."""

    channel = np.clip(np.asarray(channel, dtype=np.float64), 0.0, 1.0)
    return np.where(
        channel <= 0.0031308,
        12.92 * channel,
        1.055 * np.power(channel, 1.0 / 2.4) - 0.055,
    )


def encode_linear_srgb(linear_rgb: np.ndarray) -> np.ndarray:
    """Gamma-encode linear sRGB and quantise it to ``uint8``."""

    encoded = linear_to_srgb(linear_rgb)
    return np.clip(np.round(encoded * 255.0), 0, 255).astype(np.uint8)
