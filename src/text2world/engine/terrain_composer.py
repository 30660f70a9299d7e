"""
Heightmap synthesis.

Composes the feature generators in a fixed order over a normalized
coordinate grid: base noise, band scaling, river, lake.
"""

from typing import Tuple

import numpy as np
import structlog

from ..config import RESOLUTION
from ..procgen.zones import ZoneParameters
from .feature_generators import BandGenerator, BaseGenerator, LakeGenerator, RiverGenerator

logger = structlog.get_logger(__name__)


class TerrainComposer:
    """
    Feature-based heightmap generation.

    The output is a pure function of ``(seed, zones)``; every call rebuilds
    the grid from scratch and returns a new read-only array.
    """

    def __init__(self, resolution: int = RESOLUTION):
        self.resolution = resolution

        # Application order is part of the contract: lake wins over river
        self.feature_generators = {
            "base": BaseGenerator(),
            "bands": BandGenerator(),
            "rivers": RiverGenerator(),
            "lakes": LakeGenerator(),
        }

    def coordinate_grid(self) -> Tuple[np.ndarray, np.ndarray]:
        """Normalized (X, Y) in [-0.5, 0.5], indexed ``[row, col]``."""

        coords = np.arange(self.resolution + 1, dtype=np.float64) / self.resolution - 0.5
        X, Y = np.meshgrid(coords, coords, indexing='xy')
        return X, Y

    def generate_heightmap(self, seed: int, zones: ZoneParameters) -> np.ndarray:
        """
        Generate a heightmap.

        Args:
            seed: World seed
            zones: Resolved zone parameters

        Returns:
            Read-only array of shape (resolution + 1, resolution + 1)
        """

        X, Y = self.coordinate_grid()
        heightmap = np.zeros_like(X)

        for generator in self.feature_generators.values():
            heightmap = generator.apply(heightmap, X, Y, zones, seed)

        heightmap = np.nan_to_num(heightmap, nan=0.0, posinf=0.0, neginf=0.0)
        heightmap.flags.writeable = False

        logger.debug(
            "heightmap_generated",
            seed=seed,
            resolution=self.resolution,
            min=float(heightmap.min()),
            max=float(heightmap.max()),
        )
        return heightmap
