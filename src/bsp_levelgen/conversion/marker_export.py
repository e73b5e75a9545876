"""
Marker export utilities.

Spawn points are wrapped in named markers so consumers can tell the player
start from enemy spawns. Export formats:
- JSON for external tools
- CSV for analysis/spreadsheets
"""

import csv
import io
import json
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Sequence, Tuple

from bsp_levelgen.generators.bsp.bsp_generator import Room
from bsp_levelgen.generators.layout.layout_types import SpawnPoint


class MarkerType(Enum):
    """Categories of markers that can be placed in a level."""
    SPAWN_POINT = auto()      # Player spawn location
    ENEMY = auto()            # Enemy spawn point


@dataclass
class Marker:
    """
    Named marker for content placement.

    Attributes:
        name: Unique identifier (e.g., "SpawnPoint", "Enemy3")
        marker_type: Category of marker
        position: World coordinates (x, y, z), y up
        room_id: ID of the room containing this marker (if any)
        tags: Additional metadata for content systems
    """
    name: str
    marker_type: MarkerType
    position: Tuple[float, float, float]
    room_id: Optional[int] = None
    tags: Dict[str, Any] = field(default_factory=dict)


def _room_at(rooms: Sequence[Room], x: float, z: float) -> Optional[Room]:
    for room in rooms:
        if room.contains_point(x, z):
            return room
    return None


def markers_from_spawn_points(points: Sequence[SpawnPoint], rooms: Sequence[Room],
                              marker_type: MarkerType = MarkerType.SPAWN_POINT,
                              prefix: Optional[str] = None) -> List[Marker]:
    """
    Wrap spawn points in markers, tagging each with the room it falls in.

    Args:
        points: Spawn points from LevelGenerator.get_spawn_point(s)
        rooms: Rooms of the same level
        marker_type: Type assigned to every marker
        prefix: Name prefix; defaults to "SpawnPoint" or "Enemy"

    Returns:
        One marker per point, named prefix + index
    """
    if prefix is None:
        prefix = "SpawnPoint" if marker_type == MarkerType.SPAWN_POINT else "Enemy"

    markers = []
    for i, point in enumerate(points):
        room = _room_at(rooms, point.x, point.z)
        markers.append(Marker(
            name=f"{prefix}{i}",
            marker_type=marker_type,
            position=(point.x, point.y, point.z),
            room_id=room.id if room is not None else None,
        ))
    return markers


def markers_to_dicts(markers: List[Marker], include_tags: bool = True) -> List[Dict[str, Any]]:
    output = []

    for marker in markers:
        entry = {
            'name': marker.name,
            'type': marker.marker_type.name,
            'position': {
                'x': marker.position[0],
                'y': marker.position[1],
                'z': marker.position[2],
            },
            'room_id': marker.room_id,
        }
        if include_tags and marker.tags:
            entry['tags'] = marker.tags

        output.append(entry)

    return output


def export_markers_to_json(markers: List[Marker], include_tags: bool = True) -> str:
    """
    Export markers as JSON.

    Args:
        markers: List of markers to export
        include_tags: Whether to include tag metadata

    Returns:
        JSON string with marker data
    """
    return json.dumps(markers_to_dicts(markers, include_tags), indent=2)


def export_markers_to_csv(markers: List[Marker]) -> str:
    """
    Export markers as CSV for analysis.

    Returns:
        CSV format string with a header row
    """
    output = io.StringIO()
    writer = csv.writer(output, lineterminator='\n')

    writer.writerow(['name', 'type', 'x', 'y', 'z', 'room_id', 'tags'])

    for marker in markers:
        writer.writerow([
            marker.name,
            marker.marker_type.name,
            marker.position[0],
            marker.position[1],
            marker.position[2],
            marker.room_id if marker.room_id is not None else '',
            json.dumps(marker.tags) if marker.tags else ''
        ])

    return output.getvalue()


def count_markers_by_type(markers: List[Marker]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for marker in markers:
        type_name = marker.marker_type.name
        counts[type_name] = counts.get(type_name, 0) + 1
    return counts
