"""
Mesh and world-record export.

Both exports are pure functions of an already built mesh. Exporting before
any mesh exists yields a "nothing to export" result instead of raising.
"""

import io
import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

import numpy as np
import structlog
import trimesh

from ..engine.mesh_builder import MeshGrid
from ..engine.structure_placer import FeatureInstance, FeatureKind

logger = structlog.get_logger(__name__)

GLB_MEDIA_TYPE = "model/gltf-binary"
JSON_MEDIA_TYPE = "application/json"
NOTHING_TO_EXPORT = "nothing to export"

CONE_SECTIONS = 16


@dataclass(frozen=True)
class ExportResult:
    """Serialized bytes, or a no-op marker when nothing was built yet."""

    data: Optional[bytes]
    media_type: str
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.data is not None

    @classmethod
    def nothing_to_export(cls, media_type: str) -> "ExportResult":
        return cls(data=None, media_type=media_type, reason=NOTHING_TO_EXPORT)


def _vertex_colors(color: str, count: int) -> np.ndarray:
    """Repeat a hex color as one RGBA row per vertex."""
    value = color.lstrip("#")
    rgba = [int(value[i:i + 2], 16) for i in (0, 2, 4)] + [255]
    return np.tile(np.array(rgba, dtype=np.uint8), (count, 1))


def _feature_mesh(feature: FeatureInstance) -> trimesh.Trimesh:
    """Primitive shape for a feature, centered on its origin."""

    sx, sy, sz = feature.size
    if feature.kind == FeatureKind.MOUNTAIN_CONE:
        mesh = trimesh.creation.cone(radius=max(sx, sz) / 2.0, height=sy, sections=CONE_SECTIONS)
        # Cone axis is +Z with its base at z=0; stand it on +Y and center it
        mesh.apply_transform(trimesh.transformations.rotation_matrix(-np.pi / 2.0, [1.0, 0.0, 0.0]))
        mesh.apply_translation([0.0, -sy / 2.0, 0.0])
    else:
        mesh = trimesh.creation.box(extents=[sx, sy, sz])

    mesh.apply_translation(feature.origin)
    mesh.visual.vertex_colors = _vertex_colors(feature.color, len(mesh.vertices))
    return mesh


def build_scene(mesh: MeshGrid, features: Sequence[FeatureInstance] = ()) -> trimesh.Scene:
    """Assemble the terrain and feature primitives into one scene."""

    terrain = trimesh.Trimesh(
        vertices=np.asarray(mesh.positions, dtype=np.float64),
        faces=np.asarray(mesh.indices, dtype=np.int64),
        vertex_normals=np.asarray(mesh.normals, dtype=np.float64),
        vertex_colors=_vertex_colors(mesh.material["color"], mesh.vertex_count),
        process=False
    )

    scene = trimesh.Scene()
    scene.add_geometry(terrain, node_name="terrain", geom_name="terrain")
    for i, feature in enumerate(features):
        name = f"feature_{i:04d}_{feature.keyword}"
        scene.add_geometry(_feature_mesh(feature), node_name=name, geom_name=name)
    return scene


def export_glb(
    mesh: Optional[MeshGrid],
    features: Sequence[FeatureInstance] = ()
) -> ExportResult:
    """
    Serialize the mesh (and optional features) as binary glTF.

    Args:
        mesh: Built terrain mesh, or None if nothing was generated yet
        features: Structure instances to include as extra nodes

    Returns:
        ExportResult with GLB bytes, or a nothing-to-export result
    """

    if mesh is None:
        logger.info("export_skipped", format="glb", reason=NOTHING_TO_EXPORT)
        return ExportResult.nothing_to_export(GLB_MEDIA_TYPE)

    scene = build_scene(mesh, features)
    data = scene.export(file_type="glb", include_normals=True)

    logger.info("export_complete", format="glb", bytes=len(data), features=len(features))
    return ExportResult(data=data, media_type=GLB_MEDIA_TYPE)


def world_record(
    mesh: MeshGrid,
    seed: int,
    features: Optional[Sequence[FeatureInstance]] = None
) -> Dict[str, Any]:
    """The ``{"seed", "terrain"}`` snapshot, with features when given."""

    record: Dict[str, Any] = {
        "seed": int(seed),
        "terrain": [
            {"x": float(x), "y": float(y), "z": float(z)}
            for x, y, z in mesh.positions.tolist()
        ],
    }
    if features is not None:
        record["features"] = [feature.to_dict() for feature in features]
    return record


def export_world_json(
    mesh: Optional[MeshGrid],
    seed: int,
    features: Optional[Sequence[FeatureInstance]] = None
) -> ExportResult:
    """Serialize the world record as UTF-8 JSON."""

    if mesh is None:
        logger.info("export_skipped", format="json", reason=NOTHING_TO_EXPORT)
        return ExportResult.nothing_to_export(JSON_MEDIA_TYPE)

    buffer = io.StringIO()
    json.dump(world_record(mesh, seed, features), buffer, separators=(",", ":"))
    data = buffer.getvalue().encode("utf-8")

    logger.info("export_complete", format="json", bytes=len(data))
    return ExportResult(data=data, media_type=JSON_MEDIA_TYPE)
