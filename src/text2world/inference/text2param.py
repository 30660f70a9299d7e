"""
Text-to-parameter mapping for text2world.

Keyword-table parser that converts a free-text world description into
resolved ZoneParameters.
"""

from dataclasses import replace
from typing import Dict, List, Optional, Tuple

import structlog

from ..procgen.grammar import tokenize
from ..procgen.zones import LakeDescriptor, RiverDescriptor, ZoneOverrides, ZoneParameters

logger = structlog.get_logger(__name__)

# Height keywords name the override field that supplies their magnitude
HEIGHT_KEYWORDS: Dict[str, str] = {
    "mountain": "mountain_height",
    "mountains": "mountain_height",
    "peak": "mountain_height",
    "peaks": "mountain_height",
    "alps": "mountain_height",
    "hill": "hill_height",
    "hills": "hill_height",
    "plain": "plain_height",
    "plains": "plain_height",
    "flat": "plain_height",
    "meadow": "plain_height",
    "meadows": "plain_height",
    "lowland": "plain_height",
    "lowlands": "plain_height",
}

DIRECTION_KEYWORDS: Dict[str, str] = {
    "north": "north",
    "northern": "north",
    "south": "south",
    "southern": "south",
    "center": "center",
    "centre": "center",
    "central": "center",
    "middle": "center",
}

RIVER_KEYWORDS = frozenset({"river", "rivers", "stream", "streams"})
LAKE_KEYWORDS = frozenset({"lake", "lakes", "pond", "ponds"})

ROUGHNESS_KEYWORDS: Dict[str, float] = {
    "rugged": 2.0,
    "jagged": 2.0,
    "rough": 2.0,
    "smooth": 0.5,
    "gentle": 0.5,
    "rolling": 0.5,
}


class PromptParser:
    """
    Converts a prompt into ZoneParameters.

    Scalar fields follow last-match-wins, presence fields (river, lake) are
    OR-combined. A directional qualifier binds to the most recent unpaired
    height keyword before it, or else to the next height keyword after it.
    Height keywords without a qualifier apply to the center band.
    """

    def classify(self, token: str) -> Optional[Tuple[str, str]]:
        """Role of a token as ``(role, value)``, or None if unrecognized."""

        if token in HEIGHT_KEYWORDS:
            return "height", HEIGHT_KEYWORDS[token]
        if token in DIRECTION_KEYWORDS:
            return "direction", DIRECTION_KEYWORDS[token]
        if token in RIVER_KEYWORDS:
            return "river", token
        if token in LAKE_KEYWORDS:
            return "lake", token
        if token in ROUGHNESS_KEYWORDS:
            return "roughness", token
        return None

    def explain(self, text: str) -> List[Dict[str, str]]:
        """Recognized tokens in prompt order with their roles."""

        matches = []
        for token in tokenize(text):
            role = self.classify(token)
            if role is not None:
                matches.append({"token": token, "role": role[0], "value": role[1]})
        return matches

    def pair_directions(self, tokens: List[str]) -> List[Tuple[str, str]]:
        """
        Resolve ``(band, height_field)`` assignments in height-keyword order.
        """

        # Each entry is [height_field, band or None]
        heights: List[List[Optional[str]]] = []
        awaiting: Optional[int] = None
        pending_direction: Optional[str] = None

        for token in tokens:
            role = self.classify(token)
            if role is None:
                continue
            kind, value = role

            if kind == "height":
                if pending_direction is not None:
                    heights.append([value, pending_direction])
                    pending_direction = None
                    awaiting = None
                else:
                    heights.append([value, None])
                    awaiting = len(heights) - 1

            elif kind == "direction":
                if awaiting is not None:
                    heights[awaiting][1] = value
                    awaiting = None
                else:
                    pending_direction = value

        return [(band or "center", field) for field, band in heights]

    def parse(self, text: str, overrides: Optional[ZoneOverrides] = None) -> ZoneParameters:
        """
        Resolve a prompt into zone parameters.

        Args:
            text: Free-text world description
            overrides: Manual magnitudes for keywords and water features

        Returns:
            Fully resolved ZoneParameters (defaults when nothing matches)
        """

        overrides = overrides or ZoneOverrides()
        tokens = tokenize(text)

        magnitudes = {
            "mountain_height": overrides.mountain_height,
            "plain_height": overrides.plain_height,
            "hill_height": (overrides.mountain_height + overrides.plain_height) / 2.0,
        }

        zones = ZoneParameters()
        for band, field in self.pair_directions(tokens):
            zones = zones.with_band(band, magnitudes[field])

        has_river = False
        has_lake = False
        roughness = 1.0
        for token in tokens:
            has_river = has_river or token in RIVER_KEYWORDS
            has_lake = has_lake or token in LAKE_KEYWORDS
            if token in ROUGHNESS_KEYWORDS:
                roughness = ROUGHNESS_KEYWORDS[token]

        zones = replace(
            zones,
            noise_scale=overrides.noise_scale * roughness,
            river=RiverDescriptor(width=overrides.river_width) if has_river else None,
            lake=LakeDescriptor(radius=overrides.lake_radius, depth=overrides.lake_depth) if has_lake else None,
        )

        logger.debug("prompt_parsed", tokens=len(tokens), zones=zones.to_dict())
        return zones
