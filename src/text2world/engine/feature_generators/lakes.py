"""
Lake carving.

One circular lake centered on the grid, deepest at the center.
"""

import numpy as np

from ...procgen.zones import ZoneParameters
from .base import FeatureGenerator, lerp_toward


def lake_weight(distance: np.ndarray, radius: float) -> np.ndarray:
    """Linear falloff: 1 at the center, 0 at and beyond the radius."""

    distance = np.asarray(distance, dtype=np.float64)
    if not radius > 0.0:
        return np.zeros_like(distance)

    return np.maximum(0.0, 1.0 - distance / radius)


class LakeGenerator(FeatureGenerator):
    """Blends terrain toward the lake bed depth inside the lake radius."""

    def apply(
        self,
        heightmap: np.ndarray,
        X: np.ndarray, Y: np.ndarray,
        zones: ZoneParameters,
        seed: int
    ) -> np.ndarray:
        """Carve the configured lake, if any."""

        lake = zones.lake
        if lake is None:
            return heightmap

        distance = np.sqrt(X * X + Y * Y)
        return lerp_toward(heightmap, lake.depth, lake_weight(distance, lake.radius))
