"""
Graph export utilities for layout debugging.

Provides export functions to visualize level layouts in:
- DOT format (Graphviz) for visual graph inspection
- JSON format for programmatic analysis and reproducibility tracking
"""

import json
from typing import Dict, List, Tuple

from bsp_levelgen.generators.layout.layout_types import LevelData


def _endpoint_nodes(level: LevelData) -> Tuple[List[Tuple[str, str]], Dict[Tuple[float, float], str]]:
    """Name each corridor endpoint after the room it lies in, or as a junction.

    Split nodes route from the midpoint of their children's anchors, which
    often lies between rooms; those points become junction nodes.
    """
    junctions: Dict[Tuple[float, float], str] = {}
    edges = []

    def node_for(point: Tuple[float, float]) -> str:
        for room in level.rooms:
            if room.center == point:
                return f"room_{room.id}"
        if point not in junctions:
            junctions[point] = f"junction_{len(junctions)}"
        return junctions[point]

    for corridor in level.corridors:
        edges.append((node_for(corridor.start), node_for(corridor.end)))
    return edges, junctions


def export_layout_dot(level: LevelData) -> str:
    """Export a level's rooms and corridors as Graphviz DOT.

    Returns:
        DOT format string for visualization with Graphviz or online viewers
    """
    lines = ['graph LevelLayout {']
    lines.append('  node [shape=box, style=filled];')
    lines.append('')

    for room in level.rooms:
        cx, cz = room.center
        label = '\\n'.join([
            f"id: {room.id}",
            f"pos: ({cx:g}, {cz:g})",
            f"size: {room.width:g}x{room.depth:g}",
        ])
        color = '#FFD700' if room.has_pillars else '#D3D3D3'
        lines.append(f'  room_{room.id} [label="{label}" fillcolor="{color}"];')

    edges, junctions = _endpoint_nodes(level)
    for (x, z), name in junctions.items():
        lines.append(f'  {name} [shape=point, label="({x:g}, {z:g})"];')

    lines.append('')
    for a, b in edges:
        lines.append(f'  {a} -- {b};')

    lines.append('}')
    return '\n'.join(lines)


def export_layout_json(level: LevelData) -> str:
    """Export a level summary with metadata for reproducibility tracking.

    Returns:
        JSON string with seed, dimensions, statistics and the room graph
    """
    edges, junctions = _endpoint_nodes(level)
    output = {
        'metadata': {
            'seed': level.seed,
            'width': level.width,
            'depth': level.depth,
            'version': '1.0',
            'generator': 'bsp-levelgen',
        },
        'statistics': {
            'room_count': len(level.rooms),
            'corridor_count': len(level.corridors),
            'pillared_rooms': len(level.pillared_rooms),
            'wall_count': len(level.walls),
            'junction_count': len(junctions),
        },
        'edges': [list(edge) for edge in edges],
    }
    return json.dumps(output, indent=2)
