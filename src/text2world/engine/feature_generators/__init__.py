"""
Heightmap feature generators.

Each generator takes the working heightmap and returns a new one:
base noise, band scaling, then river and lake carving.
"""

from .base import BandGenerator, BaseGenerator, FeatureGenerator
from .lakes import LakeGenerator
from .rivers import RiverGenerator

__all__ = [
    "FeatureGenerator", "BaseGenerator", "BandGenerator",
    "RiverGenerator", "LakeGenerator"
]
