"""
Interchange formats: GLB and JSON world-record export, plus record validation.
"""

from .exporter import ExportResult, export_glb, export_world_json, world_record
from .json_validator import JSONValidator

__all__ = ["ExportResult", "export_glb", "export_world_json", "world_record", "JSONValidator"]
