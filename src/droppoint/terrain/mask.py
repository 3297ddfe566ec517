"""
Land/water classifiers.

A classifier is any callable `Point -> bool` (see `droppoint.core.landing.LandClassifier`).
This module provides the two concrete ones the planner uses:
- `always_land`: used when no mask is available ("land" is the safe default).
- `MaskClassifier`: reads an alpha raster where opaque pixels are land.

The raster is indexed as `alpha[y, x]` in world units (one pixel per canvas unit).
"""

from __future__ import annotations

import math

import numpy as np

from droppoint.core.geo import Point, clamp

DEFAULT_ALPHA_THRESHOLD = 10


def always_land(point: Point) -> bool:
    """Classifier used when no classification source exists."""
    return True


def _round_half_up(v: float) -> int:
    return int(math.floor(v + 0.5))


class MaskClassifier:
    """Classify points against an alpha raster (`alpha > threshold` means land).

    Accepts a 2-D alpha array or an RGBA array (H x W x 4). Points outside the raster are
    clamped to the nearest edge pixel, so the classifier is total over real coordinates.
    """

    def __init__(self, alpha: np.ndarray | None, *, threshold: int = DEFAULT_ALPHA_THRESHOLD):
        self._threshold = int(threshold)
        if alpha is None:
            self._alpha = None
            return

        arr = np.asarray(alpha)
        if arr.ndim == 3 and arr.shape[2] == 4:
            arr = arr[:, :, 3]
        if arr.ndim != 2:
            raise ValueError(f"Mask must be a 2-D alpha or H x W x 4 RGBA array; got shape {arr.shape}")
        if arr.size == 0:
            raise ValueError("Mask must not be empty")
        self._alpha = arr

    @property
    def has_mask(self) -> bool:
        return self._alpha is not None

    @property
    def shape(self) -> tuple[int, int] | None:
        if self._alpha is None:
            return None
        h, w = self._alpha.shape
        return int(h), int(w)

    def __call__(self, point: Point) -> bool:
        if self._alpha is None:
            return True
        h, w = self._alpha.shape
        x = _round_half_up(clamp(point.x, 0, w - 1))
        y = _round_half_up(clamp(point.y, 0, h - 1))
        return bool(self._alpha[y, x] > self._threshold)
