"""
River carving.

A single river runs west-east along the grid's center row.
"""

import numpy as np

from ...procgen.zones import ZoneParameters
from .base import FeatureGenerator, lerp_toward


def river_weight(distance: np.ndarray, width: float) -> np.ndarray:
    """
    Gaussian falloff with distance from the river center line.

    A non-positive width disables carving: the weight is zero everywhere.
    """

    distance = np.asarray(distance, dtype=np.float64)
    if not width > 0.0:
        return np.zeros_like(distance)

    return np.exp(-(distance * distance) / (2.0 * width * width))


class RiverGenerator(FeatureGenerator):
    """Blends terrain toward the river bed depth near the center line."""

    def __init__(self, center_line: float = 0.0):
        self.center_line = center_line

    def apply(
        self,
        heightmap: np.ndarray,
        X: np.ndarray, Y: np.ndarray,
        zones: ZoneParameters,
        seed: int
    ) -> np.ndarray:
        """Carve the configured river, if any."""

        river = zones.river
        if river is None:
            return heightmap

        weight = river_weight(np.abs(Y - self.center_line), river.width)
        return lerp_toward(heightmap, river.depth, weight)
