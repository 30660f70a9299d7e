"""
Grid mesh construction.

Turns a heightmap into vertex positions, per-vertex normals and a fixed
triangle index list.
"""

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Dict

import numpy as np

from ..config import RESOLUTION, TERRAIN_COLOR, TERRAIN_SIZE


@dataclass(frozen=True, eq=False)
class MeshGrid:
    """Renderable terrain mesh. Arrays are read-only."""

    positions: np.ndarray
    normals: np.ndarray
    indices: np.ndarray
    resolution: int
    size: float
    material: Dict[str, Any] = field(default_factory=lambda: {"flat_shading": True, "color": TERRAIN_COLOR})

    @property
    def vertex_count(self) -> int:
        return int(self.positions.shape[0])

    @property
    def triangle_count(self) -> int:
        return int(self.indices.shape[0])


@lru_cache(maxsize=4)
def grid_indices(resolution: int) -> np.ndarray:
    """
    Triangle indices for a (resolution x resolution) quad grid.

    Two triangles per quad, counter-clockwise when seen from +Y.
    """

    width = resolution + 1
    rows, cols = np.meshgrid(np.arange(resolution), np.arange(resolution), indexing='ij')
    v0 = (rows * width + cols).ravel()
    v1 = v0 + 1
    v2 = v0 + width
    v3 = v2 + 1

    indices = np.empty((resolution * resolution * 2, 3), dtype=np.uint32)
    indices[0::2] = np.stack([v0, v2, v1], axis=1)
    indices[1::2] = np.stack([v1, v2, v3], axis=1)
    indices.flags.writeable = False
    return indices


def vertex_normals(positions: np.ndarray, indices: np.ndarray) -> np.ndarray:
    """Area-weighted per-vertex normals, normalized to unit length."""

    positions = positions.astype(np.float64)
    a = positions[indices[:, 0]]
    b = positions[indices[:, 1]]
    c = positions[indices[:, 2]]
    face_normals = np.cross(b - a, c - a)

    normals = np.zeros_like(positions)
    for corner in range(3):
        np.add.at(normals, indices[:, corner], face_normals)

    lengths = np.linalg.norm(normals, axis=1)
    degenerate = lengths <= 1e-12
    normals[degenerate] = (0.0, 1.0, 0.0)
    lengths[degenerate] = 1.0
    return normals / lengths[:, np.newaxis]


class GridMeshBuilder:
    """Builds a planar S x S grid mesh displaced by a heightmap."""

    def __init__(self, resolution: int = RESOLUTION, size: float = TERRAIN_SIZE):
        self.resolution = resolution
        self.size = size

    def build(self, heightmap: np.ndarray) -> MeshGrid:
        expected = (self.resolution + 1, self.resolution + 1)
        if heightmap.shape != expected:
            raise ValueError(f"Heightmap shape {heightmap.shape} does not match grid {expected}")

        width = self.resolution + 1
        steps = np.arange(width, dtype=np.float64) / self.resolution - 0.5
        xs, zs = np.meshgrid(steps * self.size, steps * self.size, indexing='xy')

        positions = np.empty((width * width, 3), dtype=np.float32)
        positions[:, 0] = xs.ravel()
        positions[:, 1] = np.asarray(heightmap, dtype=np.float64).ravel()
        positions[:, 2] = zs.ravel()

        indices = grid_indices(self.resolution)
        normals = vertex_normals(positions, indices).astype(np.float32)

        positions.flags.writeable = False
        normals.flags.writeable = False

        return MeshGrid(
            positions=positions,
            normals=normals,
            indices=indices,
            resolution=self.resolution,
            size=self.size
        )
