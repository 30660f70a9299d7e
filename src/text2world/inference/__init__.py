"""
Inference components for text2world.

- Prompt-to-parameter parsing
- World sampler (full pipeline with last-request-wins publication)
- FastAPI server and CLI entry points
"""

from .text2param import PromptParser
from .sampler import GeneratedWorld, LatestRequestGate, WorldSampler

__all__ = ["PromptParser", "GeneratedWorld", "LatestRequestGate", "WorldSampler"]
