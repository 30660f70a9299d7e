"""
Prompt tokenization and parameter specification for zone overrides.

Each override field has a ``(min_val, max_val, default)`` range. Values are
clamped into range on extraction; missing values take the default.
"""

import math
from typing import Any, Dict, List, Mapping, Optional, Tuple


class ParameterSpec:
    """
    Specification for numeric parameters with validation and clamping.

    Each parameter has:
    - min_val: Minimum allowed value
    - max_val: Maximum allowed value
    - default: Default value if not specified
    """

    def __init__(self, params: Dict[str, Tuple[float, float, float]]):
        """
        Initialize parameter specification.

        Args:
            params: Dict mapping param_name -> (min_val, max_val, default)
        """
        self.params = params

    def validate(self, values: Mapping[str, float]) -> bool:
        """Check if all parameters are present and in valid ranges."""

        for param_name, (min_val, max_val, _) in self.params.items():
            if param_name not in values:
                return False

            value = values[param_name]
            if not (min_val <= value <= max_val):
                return False

        return True

    def extract_params(self, values: Mapping[str, float]) -> Dict[str, float]:
        """Extract parameters, clamping present values and defaulting missing ones."""

        result = {}
        for param_name, (min_val, max_val, default) in self.params.items():
            if param_name in values:
                result[param_name] = self.clamp(param_name, values[param_name])
            else:
                result[param_name] = default

        return result

    def clamp(self, param_name: str, value: float) -> float:
        min_val, max_val, _ = self.params[param_name]
        return max(min_val, min(max_val, float(value)))

    def coerce(self, param_name: str, raw: Any) -> Optional[float]:
        """
        Turn raw user input into a clamped float.

        Returns None when the input is not a finite number.
        """

        if isinstance(raw, bool):
            return None
        try:
            value = float(raw)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(value):
            return None
        return self.clamp(param_name, value)

    def defaults(self) -> Dict[str, float]:
        return {name: default for name, (_, _, default) in self.params.items()}

    def get_param_names(self) -> List[str]:
        """Get list of parameter names."""
        return list(self.params.keys())

    def get_param_ranges(self) -> Dict[str, Tuple[float, float]]:
        """Get parameter ranges (min, max) for each parameter."""
        return {name: (min_val, max_val) for name, (min_val, max_val, _) in self.params.items()}


OVERRIDE_SPEC = ParameterSpec({
    "mountain_height": (0.0, 32.0, 8.0),
    "plain_height": (0.0, 8.0, 0.5),
    "noise_scale": (0.5, 32.0, 4.0),
    "river_width": (0.0, 0.5, 0.08),
    "lake_radius": (0.0, 0.5, 0.25),
    "lake_depth": (-10.0, 0.0, -1.5),
})


_PUNCTUATION = ".,;:!?\"'()[]{}<>-_/\\"


def tokenize(text: str) -> List[str]:
    """Split a prompt on whitespace, lower-case it and trim punctuation."""

    tokens = []
    for raw in (text or "").lower().split():
        token = raw.strip(_PUNCTUATION)
        if token:
            tokens.append(token)
    return tokens
