"""
Terrain engine: heightmap synthesis, mesh construction, structure placement
and heightmap analysis.
"""

from .terrain_composer import TerrainComposer
from .mesh_builder import GridMeshBuilder, MeshGrid
from .structure_placer import FeatureInstance, FeatureKind, StructurePlacer
from .heightmap_analyzer import HeightmapAnalyzer

__all__ = [
    "TerrainComposer", "GridMeshBuilder", "MeshGrid",
    "FeatureInstance", "FeatureKind", "StructurePlacer",
    "HeightmapAnalyzer"
]
