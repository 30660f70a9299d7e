"""
Heightmap analysis.

Summarizes a generated heightmap: overall elevation statistics, per-band
statistics and carved water coverage.
"""

import numpy as np
from typing import Any, Dict, Optional
from scipy.ndimage import label

from ..config import BANDS
from .feature_generators.base import band_index


class HeightmapAnalyzer:
    """
    Analyzes heightmaps for reporting and tests.

    Water is any cell below ``water_level``; connected water cells form one
    water body.
    """

    def __init__(self, water_level: float = 0.0):
        self.water_level = water_level

    def analyze(self, heightmap: np.ndarray) -> Dict[str, Any]:
        """
        Full terrain summary.

        Args:
            heightmap: Input heightmap, indexed ``[row, col]``

        Returns:
            Dictionary with elevation, band and water statistics
        """

        return {
            "elevation_stats": self._analyze_elevation(heightmap),
            "band_stats": self.band_statistics(heightmap),
            "water": self._analyze_water(heightmap),
            "analysis_metadata": {
                "heightmap_shape": list(heightmap.shape),
                "water_level": self.water_level,
            }
        }

    def _analyze_elevation(self, heightmap: np.ndarray) -> Dict[str, float]:
        """Analyze elevation statistics."""

        flat_heightmap = heightmap.ravel()

        return {
            "min": float(np.min(flat_heightmap)),
            "max": float(np.max(flat_heightmap)),
            "mean": float(np.mean(flat_heightmap)),
            "median": float(np.median(flat_heightmap)),
            "std": float(np.std(flat_heightmap)),
            "range": float(np.max(flat_heightmap) - np.min(flat_heightmap)),
        }

    def band_statistics(self, heightmap: np.ndarray) -> Dict[str, Optional[Dict[str, float]]]:
        """Statistics for the north, center and south bands; None for a band with no rows."""

        resolution = heightmap.shape[0] - 1
        bands = band_index(np.arange(resolution + 1), resolution)

        stats = {}
        for i, band in enumerate(BANDS):
            rows = heightmap[bands == i]
            if rows.size == 0:
                stats[band] = None
                continue
            stats[band] = {
                "min": float(rows.min()),
                "max": float(rows.max()),
                "mean": float(rows.mean()),
                "std": float(rows.std()),
                "range": float(rows.max() - rows.min()),
            }
        return stats

    def _analyze_water(self, heightmap: np.ndarray) -> Dict[str, Any]:
        water_mask = heightmap < self.water_level
        _, num_bodies = label(water_mask)

        return {
            "water_cells": int(np.count_nonzero(water_mask)),
            "water_fraction": float(np.mean(water_mask)),
            "water_bodies": int(num_bodies),
        }
