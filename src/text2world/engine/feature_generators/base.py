"""
Base terrain generator and common utilities.
"""

import numpy as np
from abc import ABC, abstractmethod

from ...config import BANDS
from ...procgen.modules.noise import fbm_noise
from ...procgen.zones import ZoneParameters


class FeatureGenerator(ABC):
    """Base class for all feature generators."""

    @abstractmethod
    def apply(
        self,
        heightmap: np.ndarray,
        X: np.ndarray, Y: np.ndarray,
        zones: ZoneParameters,
        seed: int
    ) -> np.ndarray:
        """Apply this feature to existing heightmap, returning a new array."""
        pass


def lerp_toward(heightmap: np.ndarray, target: float, weight: np.ndarray) -> np.ndarray:
    """Blend heights toward ``target`` by ``weight`` in [0, 1]."""
    return heightmap + (target - heightmap) * weight


class BaseGenerator(FeatureGenerator):
    """
    Generates base terrain from seeded fBm noise.

    Provides the foundation that band scaling and carving build upon.
    """

    def __init__(self, octaves: int = 4, persistence: float = 0.5, lacunarity: float = 2.0):
        self.octaves = octaves
        self.persistence = persistence
        self.lacunarity = lacunarity

    def generate(
        self,
        X: np.ndarray, Y: np.ndarray,
        zones: ZoneParameters,
        seed: int
    ) -> np.ndarray:
        """Generate base terrain from scratch."""

        return fbm_noise(
            X * zones.noise_scale,
            Y * zones.noise_scale,
            octaves=self.octaves,
            persistence=self.persistence,
            lacunarity=self.lacunarity,
            seed=seed
        )

    def apply(
        self,
        heightmap: np.ndarray,
        X: np.ndarray, Y: np.ndarray,
        zones: ZoneParameters,
        seed: int
    ) -> np.ndarray:
        """Add base terrain to existing heightmap."""

        return heightmap + self.generate(X, Y, zones, seed)


def band_index(rows: np.ndarray, resolution: int) -> np.ndarray:
    """
    Band of each row: 0 = north, 1 = center, 2 = south.

    North is ``row < R/3``, south is ``row > 2R/3``; the boundaries belong
    to the center band.
    """

    rows = np.asarray(rows, dtype=np.float64)
    index = np.ones(rows.shape, dtype=np.int64)
    index[rows < resolution / 3.0] = 0
    index[rows > 2.0 * resolution / 3.0] = 2
    return index


class BandGenerator(FeatureGenerator):
    """Scales each row of the heightmap by its band's height factor."""

    def apply(
        self,
        heightmap: np.ndarray,
        X: np.ndarray, Y: np.ndarray,
        zones: ZoneParameters,
        seed: int
    ) -> np.ndarray:

        resolution = heightmap.shape[0] - 1
        scales = np.array([zones.band_scale(band) for band in BANDS], dtype=np.float64)
        row_scale = scales[band_index(np.arange(resolution + 1), resolution)]
        return heightmap * row_scale[:, np.newaxis]
