"""
Procedural generation primitives.

This module provides:
- Seeded coherent noise
- Zone parameter model and override ranges
"""

from .grammar import OVERRIDE_SPEC, ParameterSpec, tokenize
from .zones import (
    LakeDescriptor,
    OverrideResolver,
    RiverDescriptor,
    ZoneOverrides,
    ZoneParameters,
)

__all__ = [
    "OVERRIDE_SPEC",
    "ParameterSpec",
    "tokenize",
    "LakeDescriptor",
    "OverrideResolver",
    "RiverDescriptor",
    "ZoneOverrides",
    "ZoneParameters",
]
