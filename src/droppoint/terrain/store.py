"""
Per-map land mask lookup.

Masks are plain numpy arrays saved with `numpy.save` as `<terrain.mask_dir>/<map_id>_mask.npy`.
No mask file means no classification source, and the planner falls back to `always_land`.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

import numpy as np

from droppoint.config.settings import Settings
from droppoint.core.env import resolve_project_path
from droppoint.core.landing import LandClassifier
from droppoint.terrain.mask import MaskClassifier, always_land

logger = logging.getLogger(__name__)


def mask_path(settings: Settings, map_id: str) -> Path:
    return resolve_project_path(settings.terrain.mask_dir) / f"{map_id}_mask.npy"


@lru_cache(maxsize=32)
def _load_alpha(path: str, mtime_ns: int) -> np.ndarray:
    # `mtime_ns` is part of the cache key so a rewritten mask is picked up.
    logger.info("Loading land mask from %s", path)
    return np.load(path, allow_pickle=False)


def load_map_mask(settings: Settings, map_id: str) -> np.ndarray | None:
    """Return the stored mask for `map_id`, or `None` if there is none (or it is unreadable)."""
    path = mask_path(settings, map_id)
    if not path.is_file():
        return None
    try:
        return _load_alpha(str(path), path.stat().st_mtime_ns)
    except (OSError, ValueError) as e:
        logger.warning("Could not read land mask for %s (%s): %s", map_id, path, str(e))
        return None


def save_map_mask(settings: Settings, map_id: str, alpha: np.ndarray) -> Path:
    path = mask_path(settings, map_id)
    path.parent.mkdir(parents=True, exist_ok=True)
    np.save(path, np.asarray(alpha, dtype=np.uint8), allow_pickle=False)
    return path


def classifier_for_map(settings: Settings, map_id: str) -> LandClassifier:
    """Build the land classifier for a map (mask-backed when a mask exists)."""
    alpha = load_map_mask(settings, map_id)
    if alpha is None:
        return always_land
    return MaskClassifier(alpha, threshold=settings.terrain.alpha_threshold)
