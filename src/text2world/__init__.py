"""
text2world: deterministic terrain worlds from a text prompt and a seed.

Pipeline: prompt parsing, heightmap synthesis, grid mesh construction,
structure placement and export.
"""

from .inference import GeneratedWorld, PromptParser, WorldSampler
from .procgen import ZoneOverrides, ZoneParameters
from .compatibility import ExportResult, export_glb, export_world_json

__version__ = "0.1.0"

__all__ = [
    "GeneratedWorld",
    "PromptParser",
    "WorldSampler",
    "ZoneOverrides",
    "ZoneParameters",
    "ExportResult",
    "export_glb",
    "export_world_json",
]
