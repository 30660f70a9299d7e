"""
World sampler that runs the full text-to-world pipeline.

This is the main interface for generating worlds from a prompt and a seed:
parse, synthesize, mesh, place structures, export.
"""

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import numpy as np
import structlog

from ..compatibility.exporter import ExportResult, export_glb, export_world_json
from ..config import RESOLUTION, TERRAIN_SIZE
from ..engine import GridMeshBuilder, MeshGrid, StructurePlacer, TerrainComposer
from ..engine.structure_placer import FeatureInstance
from ..procgen.zones import OverrideResolver, ZoneOverrides, ZoneParameters
from .text2param import PromptParser

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, eq=False)
class GeneratedWorld:
    """Everything one pipeline run produces."""

    prompt: str
    seed: int
    zones: ZoneParameters
    heightmap: np.ndarray
    mesh: MeshGrid
    features: Tuple[FeatureInstance, ...]
    overrides: ZoneOverrides


class LatestRequestGate:
    """
    Last-request-wins publication.

    Every regeneration takes a ticket before it starts; its result is only
    published if no newer ticket was issued in the meantime.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._issued = 0
        self.latest: Optional[Any] = None

    def begin(self) -> int:
        with self._lock:
            self._issued += 1
            return self._issued

    def publish(self, ticket: int, value: Any) -> bool:
        with self._lock:
            if ticket != self._issued:
                return False
            self.latest = value
            return True


class WorldSampler:
    """
    Complete prompt-to-world pipeline.

    ``generate_world`` is a pure function of its inputs. ``regenerate`` also
    publishes the result as the latest world, which the export methods use.
    """

    def __init__(self, resolution: int = RESOLUTION, size: float = TERRAIN_SIZE):
        self.parser = PromptParser()
        self.composer = TerrainComposer(resolution=resolution)
        self.mesh_builder = GridMeshBuilder(resolution=resolution, size=size)
        self.placer = StructurePlacer()
        self.overrides = OverrideResolver()
        self.gate = LatestRequestGate()

    @property
    def latest(self) -> Optional[GeneratedWorld]:
        return self.gate.latest

    def resolve_overrides(self, raw: Optional[Mapping[str, Any]]) -> ZoneOverrides:
        """Merge raw override input into the last valid overrides."""
        return self.overrides.update(raw)

    def generate_world(
        self,
        prompt: str,
        seed: int,
        overrides: Optional[ZoneOverrides] = None
    ) -> GeneratedWorld:
        """
        Generate a world from a prompt.

        Args:
            prompt: Free-text world description
            seed: World seed
            overrides: Resolved manual overrides (defaults when None)

        Returns:
            GeneratedWorld with heightmap, mesh and structures
        """

        overrides = overrides or ZoneOverrides()
        zones = self.parser.parse(prompt, overrides)
        heightmap = self.composer.generate_heightmap(seed, zones)
        mesh = self.mesh_builder.build(heightmap)
        features = self.placer.place(prompt, seed)

        logger.info(
            "world_generated",
            seed=seed,
            vertices=mesh.vertex_count,
            triangles=mesh.triangle_count,
            features=len(features),
        )

        return GeneratedWorld(
            prompt=prompt,
            seed=seed,
            zones=zones,
            heightmap=heightmap,
            mesh=mesh,
            features=features,
            overrides=overrides
        )

    def regenerate(
        self,
        prompt: str,
        seed: int,
        raw_overrides: Optional[Mapping[str, Any]] = None
    ) -> Tuple[GeneratedWorld, bool]:
        """
        Generate and publish a world.

        Returns the world built for this request and whether it was
        published. A newer request started while this one was running
        leaves the world unpublished.
        """

        ticket = self.gate.begin()
        overrides = self.resolve_overrides(raw_overrides)
        world = self.generate_world(prompt, seed, overrides)

        if not self.gate.publish(ticket, world):
            logger.info("stale_world_discarded", ticket=ticket, seed=seed)
            return world, False
        return world, True

    def export_glb(self, include_features: bool = True) -> ExportResult:
        """GLB bytes of the latest published world."""

        world = self.latest
        if world is None:
            return export_glb(None)
        return export_glb(world.mesh, world.features if include_features else ())

    def export_world_json(self, include_features: bool = False) -> ExportResult:
        """JSON world record of the latest published world."""

        world = self.latest
        if world is None:
            return export_world_json(None, 0)
        return export_world_json(world.mesh, world.seed, world.features if include_features else None)

    def save_heightmap(
        self,
        heightmap: np.ndarray,
        output_path: str,
        format: str = "png"
    ):
        """
        Save heightmap to file.

        Args:
            heightmap: Height data array
            output_path: Output file path
            format: File format ("png", "npy")
        """

        output_path = Path(output_path)

        if format == "png":
            from PIL import Image
            # Normalize to [0, 65535] for 16-bit PNG
            normalized = (heightmap - heightmap.min()) / (heightmap.max() - heightmap.min() + 1e-8)
            heightmap_16bit = (normalized * 65535).astype(np.uint16)
            Image.fromarray(heightmap_16bit).save(output_path)

        elif format == "npy":
            np.save(output_path, heightmap)

        else:
            raise ValueError(f"Unsupported format: {format}")

    def get_terrain_statistics(self, heightmap: np.ndarray) -> Dict:
        """Calculate terrain statistics."""

        grad_y, grad_x = np.gradient(heightmap)
        return {
            "shape": list(heightmap.shape),
            "min_height": float(heightmap.min()),
            "max_height": float(heightmap.max()),
            "mean_height": float(heightmap.mean()),
            "std_height": float(heightmap.std()),
            "height_range": float(heightmap.max() - heightmap.min()),
            "roughness": float(np.mean(np.abs(grad_y)) + np.mean(np.abs(grad_x))),
        }
