"""
Zone parameter model.

Resolved per-band height scales and optional water features, plus the
manual overrides a caller can layer on top of prompt parsing.
"""

from __future__ import annotations

import threading
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Mapping, Optional

import structlog

from ..config import BANDS
from .grammar import OVERRIDE_SPEC

logger = structlog.get_logger(__name__)

DEFAULT_BAND_HEIGHT = 2.0
RIVER_DEPTH = -1.0


@dataclass(frozen=True)
class RiverDescriptor:
    """River running west-east along the grid's center row."""

    width: float
    depth: float = RIVER_DEPTH


@dataclass(frozen=True)
class LakeDescriptor:
    """Circular lake centered on the grid."""

    radius: float
    depth: float


@dataclass(frozen=True)
class ZoneOverrides:
    """Manual values that replace the keyword table magnitudes."""

    mountain_height: float = 8.0
    plain_height: float = 0.5
    noise_scale: float = 4.0
    river_width: float = 0.08
    lake_radius: float = 0.25
    lake_depth: float = -1.5

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "ZoneOverrides":
        """Build overrides from a mapping, clamping values into range."""
        return cls(**OVERRIDE_SPEC.extract_params(values))

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class ZoneParameters:
    """Fully resolved generation parameters for one world."""

    north: float = DEFAULT_BAND_HEIGHT
    center: float = DEFAULT_BAND_HEIGHT
    south: float = DEFAULT_BAND_HEIGHT
    noise_scale: float = 4.0
    river: Optional[RiverDescriptor] = None
    lake: Optional[LakeDescriptor] = None

    def band_scale(self, band: str) -> float:
        if band not in BANDS:
            raise ValueError(f"Unknown band: {band}")
        return getattr(self, band)

    def with_band(self, band: str, value: float) -> "ZoneParameters":
        if band not in BANDS:
            raise ValueError(f"Unknown band: {band}")
        return replace(self, **{band: value})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class OverrideResolver:
    """
    Keeps the last valid override values.

    Raw input comes from sliders or request bodies and may be malformed.
    A field that does not parse to a finite number keeps its previous value.
    Updates are serialized so concurrent requests never lose each other's
    fields.
    """

    def __init__(self, initial: Optional[ZoneOverrides] = None):
        self._lock = threading.Lock()
        self.current = initial or ZoneOverrides()

    def update(self, raw: Optional[Mapping[str, Any]]) -> ZoneOverrides:
        with self._lock:
            if not raw:
                return self.current

            values = self.current.to_dict()
            for name, raw_value in raw.items():
                if name not in values:
                    continue
                value = OVERRIDE_SPEC.coerce(name, raw_value)
                if value is None:
                    logger.warning("override_rejected", field=name, value=repr(raw_value), kept=values[name])
                    continue
                values[name] = value

            self.current = ZoneOverrides.from_mapping(values)
            return self.current
