"""
Export package.

Turns generated levels into formats other tools can consume.
"""

from .graph_export import export_layout_dot, export_layout_json
from .level_export import export_level_json, level_to_dict, render_ascii
from .marker_export import (
    Marker,
    MarkerType,
    count_markers_by_type,
    export_markers_to_csv,
    export_markers_to_json,
    markers_from_spawn_points,
    markers_to_dicts,
)

__all__ = [
    'Marker',
    'MarkerType',
    'count_markers_by_type',
    'export_layout_dot',
    'export_layout_json',
    'export_level_json',
    'export_markers_to_csv',
    'export_markers_to_json',
    'level_to_dict',
    'markers_from_spawn_points',
    'markers_to_dicts',
    'render_ascii',
]
