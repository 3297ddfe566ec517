"""
Derive a land mask from map colors.

Water on the supported maps is drawn in saturated blues, so a pixel is water when its
HSV color falls inside a hue band with minimum saturation and value. Everything else is
land. The output is an alpha raster usable by `MaskClassifier` (255 = land, 0 = water).
"""

from __future__ import annotations

import numpy as np


def rgb_to_hsv(rgb: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Convert an (..., 3+) uint8-range RGB array to h, s, v arrays in [0, 1]."""
    arr = np.asarray(rgb, dtype=np.float64)
    if arr.ndim < 1 or arr.shape[-1] < 3:
        raise ValueError(f"Expected an RGB array with a trailing channel axis; got shape {arr.shape}")
    arr = arr[..., :3] / 255.0
    r, g, b = arr[..., 0], arr[..., 1], arr[..., 2]

    mx = arr.max(axis=-1)
    mn = arr.min(axis=-1)
    d = mx - mn

    has_hue = d != 0
    safe_d = np.where(has_hue, d, 1.0)
    h = np.select(
        [mx == r, mx == g],
        [np.mod((g - b) / safe_d, 6.0), (b - r) / safe_d + 2.0],
        default=(r - g) / safe_d + 4.0,
    )
    h = np.where(has_hue, h / 6.0, 0.0)
    h = np.where(h < 0, h + 1.0, h)

    s = np.where(mx > 0, d / np.where(mx > 0, mx, 1.0), 0.0)
    return h, s, mx


def water_mask_from_rgb(
    rgb: np.ndarray,
    *,
    h_min: float = 0.45,
    h_max: float = 0.72,
    s_min: float = 0.22,
    v_min: float = 0.12,
) -> np.ndarray:
    """Return a uint8 alpha raster: 0 where the pixel looks like water, 255 elsewhere."""
    h, s, v = rgb_to_hsv(rgb)
    is_water = (h >= h_min) & (h <= h_max) & (s >= s_min) & (v >= v_min)
    return np.where(is_water, 0, 255).astype(np.uint8)
