"""
Discrete structure placement.

Structures are laid out on the flat ground plane from prompt keywords,
independently of the heightmap.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

import structlog

from ..config import TERRAIN_SIZE
from ..procgen.grammar import tokenize

logger = structlog.get_logger(__name__)

Vector3 = Tuple[float, float, float]

# Left edge of the first cluster before the seed offset is added
START_X = -TERRAIN_SIZE / 2.0 + 5.0
GAP = 2.0
SEED_OFFSET_STEPS = 17
SEED_OFFSET_STEP = 0.5


class FeatureKind(str, Enum):
    BLOCK_CLUSTER = "block-cluster"
    TOWER = "tower"
    MOUNTAIN_CONE = "mountain-cone"


@dataclass(frozen=True)
class FeatureInstance:
    """One primitive shape; ``origin`` is the shape's center."""

    kind: FeatureKind
    keyword: str
    origin: Vector3
    size: Vector3
    color: str

    def to_dict(self) -> Dict[str, object]:
        return {
            "kind": self.kind.value,
            "keyword": self.keyword,
            "origin": list(self.origin),
            "size": list(self.size),
            "color": self.color,
        }


@dataclass(frozen=True)
class StructureTemplate:
    kind: FeatureKind
    count: int
    spacing: float
    size: Vector3
    color: str


_VILLAGE = StructureTemplate(FeatureKind.BLOCK_CLUSTER, 5, 1.5, (1.0, 1.0, 1.0), "#a0522d")
_CASTLE = StructureTemplate(FeatureKind.TOWER, 3, 2.5, (1.5, 6.0, 1.5), "#696969")
_TOWER = StructureTemplate(FeatureKind.TOWER, 1, 1.5, (1.0, 8.0, 1.0), "#8b8b83")
_PYRAMID = StructureTemplate(FeatureKind.MOUNTAIN_CONE, 3, 6.0, (5.0, 4.0, 5.0), "#d2b48c")

STRUCTURE_KEYWORDS: Dict[str, StructureTemplate] = {
    "village": _VILLAGE,
    "villages": _VILLAGE,
    "town": StructureTemplate(FeatureKind.BLOCK_CLUSTER, 8, 1.8, (1.2, 1.5, 1.2), "#b5651d"),
    "city": StructureTemplate(FeatureKind.BLOCK_CLUSTER, 12, 2.2, (1.6, 4.0, 1.6), "#808080"),
    "castle": _CASTLE,
    "fortress": _CASTLE,
    "tower": _TOWER,
    "towers": _TOWER,
    "volcano": StructureTemplate(FeatureKind.MOUNTAIN_CONE, 1, 10.0, (8.0, 6.0, 8.0), "#5a3d2b"),
    "pyramid": _PYRAMID,
    "pyramids": _PYRAMID,
}


def seed_offset(seed: int) -> float:
    """Starting cursor shift derived from the seed alone."""
    return (int(seed) % SEED_OFFSET_STEPS) * SEED_OFFSET_STEP


class StructurePlacer:
    """
    Places structure clusters left to right in prompt order.

    Each recognized keyword appends ``count`` shapes spaced along X from a
    running cursor, then advances the cursor by ``count * spacing + gap``.
    Spacing is never smaller than a shape's width, so clusters never overlap.
    """

    def __init__(self, templates: Dict[str, StructureTemplate] = None, gap: float = GAP):
        self.templates = templates if templates is not None else STRUCTURE_KEYWORDS
        self.gap = gap

        for keyword, template in self.templates.items():
            if template.spacing < template.size[0]:
                raise ValueError(
                    f"Template {keyword!r} spacing {template.spacing} is smaller than its width {template.size[0]}"
                )
        if gap < 0:
            raise ValueError(f"Gap must be non-negative, got {gap}")

    def place(self, prompt: str, seed: int) -> Tuple[FeatureInstance, ...]:
        cursor = START_X + seed_offset(seed)
        features = []

        for token in tokenize(prompt):
            template = self.templates.get(token)
            if template is None:
                continue

            sx, sy, sz = template.size
            for i in range(template.count):
                features.append(FeatureInstance(
                    kind=template.kind,
                    keyword=token,
                    origin=(cursor + sx / 2.0 + i * template.spacing, sy / 2.0, 0.0),
                    size=template.size,
                    color=template.color
                ))

            cursor += template.count * template.spacing + self.gap

        logger.debug("structures_placed", seed=seed, count=len(features))
        return tuple(features)
