"""
JSON format validator for world records.

Checks that an exported world record matches the shape consumers expect:
``{"seed": int, "terrain": [{"x", "y", "z"}, ...]}`` with an optional
``"features"`` list.
"""

import json
import math
from typing import Any, Dict, List, Tuple, Union

from ..engine.structure_placer import FeatureKind


class JSONValidator:
    """
    Validates world records produced by the exporter.

    Returns error lists rather than raising so callers can report every
    problem at once.
    """

    def __init__(self, expected_vertices: int = None):
        self.required_fields = ["seed", "terrain"]
        self.vertex_axes = ("x", "y", "z")
        self.feature_fields = ["kind", "keyword", "origin", "size", "color"]
        self.valid_kinds = [kind.value for kind in FeatureKind]
        self.expected_vertices = expected_vertices

    def validate_world_record(self, data: Union[Dict[str, Any], bytes, str]) -> Tuple[bool, List[str]]:
        """
        Validate a world record.

        Args:
            data: Parsed record, or its JSON text/bytes

        Returns:
            Tuple of (is_valid, error_messages)
        """

        if isinstance(data, (bytes, str)):
            try:
                data = json.loads(data)
            except ValueError as e:
                return False, [f"Invalid JSON: {e}"]

        if not isinstance(data, dict):
            return False, ["World record must be a JSON object"]

        errors = []

        # Check required fields
        for field in self.required_fields:
            if field not in data:
                errors.append(f"Missing required field: {field}")

        if errors:
            return False, errors

        if not isinstance(data["seed"], int) or isinstance(data["seed"], bool):
            errors.append(f"Field seed must be integer, got {type(data['seed']).__name__}")

        errors.extend(self._validate_terrain(data["terrain"]))

        if "features" in data:
            errors.extend(self._validate_features(data["features"]))

        return len(errors) == 0, errors

    def _validate_terrain(self, terrain: Any) -> List[str]:
        """Validate the vertex list."""

        if not isinstance(terrain, list):
            return ["terrain must be a list"]

        errors = []
        if len(terrain) == 0:
            errors.append("terrain cannot be empty")

        if self.expected_vertices is not None and len(terrain) != self.expected_vertices:
            errors.append(f"terrain has {len(terrain)} vertices, expected {self.expected_vertices}")

        for i, vertex in enumerate(terrain):
            if not isinstance(vertex, dict):
                errors.append(f"terrain[{i}] must be an object")
                continue
            for axis in self.vertex_axes:
                value = vertex.get(axis)
                if not self._is_number(value):
                    errors.append(f"terrain[{i}].{axis} must be a finite number")

            # Stop after a handful of bad vertices
            if len(errors) >= 10:
                errors.append("Too many terrain errors, stopping")
                break

        return errors

    def _validate_features(self, features: Any) -> List[str]:
        """Validate the optional feature list."""

        if not isinstance(features, list):
            return ["features must be a list"]

        errors = []
        for i, feature in enumerate(features):
            if not isinstance(feature, dict):
                errors.append(f"features[{i}] must be an object")
                continue

            for field in self.feature_fields:
                if field not in feature:
                    errors.append(f"features[{i}] missing field: {field}")

            if "kind" in feature and feature["kind"] not in self.valid_kinds:
                errors.append(f"features[{i}].kind = {feature['kind']!r} is not valid")

            for field in ("origin", "size"):
                vector = feature.get(field)
                if vector is not None and not (
                    isinstance(vector, list) and len(vector) == 3 and all(self._is_number(v) for v in vector)
                ):
                    errors.append(f"features[{i}].{field} must be a list of 3 numbers")

        return errors

    @staticmethod
    def _is_number(value: Any) -> bool:
        return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)
