#!/usr/bin/env python3
"""
Layout Types for Level Rasterization

This module defines the grid the generator carves rooms and corridors into,
and the plain geometric records handed to consumers once generation is done.

Map space is centred on the origin: x runs over [-width/2, width/2] and z over
[-depth/2, depth/2]. The grid has one cell per integer map unit; a map-space
coordinate is turned into a cell index by adding half the map extent and
flooring.

Author: BSP Level Generator
License: MIT
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterable, List, NamedTuple, Optional, Tuple

import numpy as np

if TYPE_CHECKING:
    from bsp_levelgen.generators.bsp.bsp_generator import Corridor, Rectangle, Room
    from bsp_levelgen.generators.settings import GeneratorSettings


class CellType(Enum):
    """Contents of a grid cell"""
    EMPTY = 0  # Carved, walkable
    WALL = 1   # Solid


@dataclass(frozen=True)
class WallSegment:
    """
    A 1x1 block of wall.

    Unlike rooms and corridors, which are anchored at their top-left corner,
    ``x`` and ``z`` are the centre of the cell, which is where consumers put
    the wall mesh and its collision box.
    """
    x: float
    z: float
    width: int = 1
    depth: int = 1

    @property
    def min_x(self) -> float:
        return self.x - self.width / 2

    @property
    def min_z(self) -> float:
        return self.z - self.depth / 2


class SpawnPoint(NamedTuple):
    """A 3D position at eye height over the centre of a room."""
    x: float
    y: float
    z: float


@dataclass
class LevelData:
    """
    Result of one ``LevelGenerator.generate()`` call.

    ``walls`` and ``rooms`` are what a level builder needs. ``corridors`` is
    kept so the layout can be validated, exported or re-rasterized.
    """
    walls: List[WallSegment]
    rooms: List['Room']
    corridors: List['Corridor'] = field(default_factory=list)
    width: int = 0
    depth: int = 0
    seed: Optional[int] = None

    @property
    def corridor_rects(self) -> List['Rectangle']:
        """Every corridor path segment, in generation order."""
        return [rect for corridor in self.corridors for rect in corridor.path]

    @property
    def pillared_rooms(self) -> List['Room']:
        return [room for room in self.rooms if room.has_pillars]


class LevelGrid:
    """
    Dense WALL/EMPTY grid covering the whole map.

    The grid starts solid. Rooms and corridors are carved out of it, pillars
    are put back, and the walls that border carved space are extracted.
    Writes that fall outside the grid are dropped.
    """

    def __init__(self, map_width: float, map_depth: float):
        self.map_width = map_width
        self.map_depth = map_depth
        self.width = int(math.ceil(map_width))
        self.depth = int(math.ceil(map_depth))
        # Indexed [z, x]
        self.cells = np.full((self.depth, self.width), CellType.WALL.value, dtype=np.int8)

    @classmethod
    def rasterize(cls, map_width: float, map_depth: float,
                  rooms: Iterable['Room'], corridors: Iterable['Corridor'],
                  settings: 'GeneratorSettings') -> 'LevelGrid':
        """
        Build the grid for a finished layout.

        Rooms are carved first, then pillars are restored inside pillared
        rooms, then corridors are carved. Corridors therefore cut through any
        pillar that lies in their way.
        """
        grid = cls(map_width, map_depth)
        for room in rooms:
            grid.carve(room.x, room.z, room.width, room.depth)
            if room.has_pillars:
                grid.carve_pillars(
                    room,
                    spacing=settings.pillar_spacing,
                    margin=settings.pillar_margin,
                    clearance=settings.pillar_clearance,
                )
        for corridor in corridors:
            for rect in corridor.path:
                grid.carve(rect.x, rect.z, rect.width, rect.depth)
        return grid

    def world_to_cell(self, x: float, z: float) -> Tuple[int, int]:
        """Map-space coordinate to (gx, gz) cell index."""
        return (math.floor(x + self.map_width / 2), math.floor(z + self.map_depth / 2))

    def cell_to_world(self, gx: int, gz: int) -> Tuple[float, float]:
        """Centre of cell (gx, gz) in map space."""
        return (gx - self.map_width / 2 + 0.5, gz - self.map_depth / 2 + 0.5)

    def in_bounds(self, gx: int, gz: int) -> bool:
        return 0 <= gx < self.width and 0 <= gz < self.depth

    def is_wall(self, gx: int, gz: int) -> bool:
        """Out-of-range cells count as wall."""
        if not self.in_bounds(gx, gz):
            return True
        return self.cells[gz, gx] == CellType.WALL.value

    def set_wall(self, gx: int, gz: int):
        if self.in_bounds(gx, gz):
            self.cells[gz, gx] = CellType.WALL.value

    def carve(self, x: float, z: float, width: float, depth: float):
        """
        Mark every cell covered by a map-space rectangle as EMPTY.

        The rectangle starts at the cell containing (x, z) and spans
        ceil(width) x ceil(depth) cells, clipped to the grid.
        """
        gx0, gz0 = self.world_to_cell(x, z)
        gx1 = gx0 + math.ceil(width)
        gz1 = gz0 + math.ceil(depth)

        gx0, gx1 = max(gx0, 0), min(gx1, self.width)
        gz0, gz1 = max(gz0, 0), min(gz1, self.depth)
        if gx0 < gx1 and gz0 < gz1:
            self.cells[gz0:gz1, gx0:gx1] = CellType.EMPTY.value

    def carve_pillars(self, room: 'Room', spacing: int = 6, margin: int = 4, clearance: int = 4):
        """Put a regular lattice of 1x1 pillars back inside a carved room."""
        start_x, start_z = self.world_to_cell(room.x, room.z)
        half_w = room.width / 2
        half_d = room.depth / 2

        for px in range(margin, int(room.width) - margin, spacing):
            for pz in range(margin, int(room.depth) - margin, spacing):
                # Keep the middle of the room free for spawns
                if abs(px - half_w) < clearance and abs(pz - half_d) < clearance:
                    continue
                self.set_wall(start_x + px, start_z + pz)

    def visible_wall_mask(self) -> np.ndarray:
        """Boolean mask of WALL cells with at least one EMPTY 4-neighbour."""
        wall = self.cells == CellType.WALL.value
        padded = np.pad(wall, 1, mode='constant', constant_values=True)
        exposed = (
            ~padded[:-2, 1:-1]    # z - 1
            | ~padded[2:, 1:-1]   # z + 1
            | ~padded[1:-1, :-2]  # x - 1
            | ~padded[1:-1, 2:]   # x + 1
        )
        return wall & exposed

    def visible_wall_cells(self) -> List[Tuple[int, int]]:
        """(gx, gz) of every visible wall cell, z-major scan order."""
        return [(int(gx), int(gz)) for gz, gx in np.argwhere(self.visible_wall_mask())]

    def extract_wall_segments(self) -> List[WallSegment]:
        segments = []
        for gx, gz in self.visible_wall_cells():
            x, z = self.cell_to_world(gx, gz)
            segments.append(WallSegment(x=x, z=z))
        return segments

    @property
    def empty_count(self) -> int:
        return int(np.count_nonzero(self.cells == CellType.EMPTY.value))

    def to_ascii(self, wall: str = '#', empty: str = '.', hidden: Optional[str] = None) -> str:
        """
        Render the grid one character per cell, one row per z.

        Args:
            wall: Character for wall cells
            empty: Character for carved cells
            hidden: Character for wall cells with no carved neighbour
                (defaults to ``wall``)
        """
        visible = self.visible_wall_mask()
        hidden = wall if hidden is None else hidden
        rows = []
        for gz in range(self.depth):
            row = []
            for gx in range(self.width):
                if self.cells[gz, gx] == CellType.EMPTY.value:
                    row.append(empty)
                elif visible[gz, gx]:
                    row.append(wall)
                else:
                    row.append(hidden)
            rows.append(''.join(row))
        return '\n'.join(rows)
