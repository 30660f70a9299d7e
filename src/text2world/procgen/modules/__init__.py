"""
Terrain generation modules.

- noise: seeded gradient noise and fBm
"""

from . import noise

__all__ = ["noise"]
