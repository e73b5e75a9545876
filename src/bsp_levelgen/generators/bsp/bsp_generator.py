#!/usr/bin/env python3
"""
BSP (Binary Space Partitioning) Level Generator

This module implements the core BSP algorithm for procedural level generation.
Given map dimensions and a seed it produces a fully connected set of rooms,
the corridors that join them, and the minimal list of wall blocks needed to
bound them.

The pipeline:
- Recursively split the map into leaves no smaller than ``min_room_size``
- Carve one room into every leaf
- Join the two halves of every split with a corridor between their centres
- Rasterize rooms, pillars and corridors onto a solid grid
- Emit a wall block for every solid cell that touches carved space

The tree itself is the connectivity graph: each split contributes exactly one
corridor, so the rooms form a spanning tree and every room is reachable.

All randomness comes from one DeterministicRandom threaded through the tree,
so the same (width, depth, seed) always yields the same level.

Author: BSP Level Generator
License: MIT
"""

import logging
import math
import numbers
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Iterator, List, Optional, Tuple

from bsp_levelgen.exceptions import InvalidDimensionsError, LevelGenerationError
from bsp_levelgen.generators.layout.layout_types import LevelData, LevelGrid, SpawnPoint, WallSegment
from bsp_levelgen.generators.random_source import DeterministicRandom
from bsp_levelgen.generators.settings import GeneratorSettings

logger = logging.getLogger(__name__)


DEFAULT_SEED = 12345
DEFAULT_CORRIDOR_WIDTH = 4
MIN_PADDED_ROOM_SIZE = 4  # Floor on the padded extent a room is drawn from

Point = Tuple[float, float]


class SplitDirection(Enum):
    """Direction for BSP node splitting"""
    HORIZONTAL = auto()  # Cuts the Z axis: upper/lower pair
    VERTICAL = auto()    # Cuts the X axis: left/right pair
    NONE = auto()        # Not split


@dataclass
class Rectangle:
    """Axis-aligned rectangle anchored at its top-left (min x, min z) corner"""
    x: float
    z: float
    width: float
    depth: float

    @property
    def x2(self) -> float:
        """Right edge X coordinate"""
        return self.x + self.width

    @property
    def z2(self) -> float:
        """Far edge Z coordinate"""
        return self.z + self.depth

    @property
    def center(self) -> Point:
        """Center point of rectangle"""
        return (self.x + self.width / 2, self.z + self.depth / 2)

    @property
    def area(self) -> float:
        return self.width * self.depth

    def intersects(self, other: 'Rectangle') -> bool:
        """Check if this rectangle overlaps another (touching edges do not count)"""
        return not (self.x2 <= other.x or self.x >= other.x2 or
                    self.z2 <= other.z or self.z >= other.z2)

    def contains_point(self, x: float, z: float) -> bool:
        return self.x <= x < self.x2 and self.z <= z < self.z2

    def contains_rect(self, other: 'Rectangle') -> bool:
        return (self.x <= other.x and other.x2 <= self.x2 and
                self.z <= other.z and other.z2 <= self.z2)

    def to_dict(self) -> Dict:
        return {'x': self.x, 'z': self.z, 'width': self.width, 'depth': self.depth}


@dataclass
class Room(Rectangle):
    """A room carved inside a BSP leaf, in centred map space"""
    has_pillars: bool = False
    id: int = 0

    def to_dict(self) -> Dict:
        data = super().to_dict()
        data['has_pillars'] = self.has_pillars
        data['id'] = self.id
        return data


@dataclass
class Corridor:
    """
    Connection between the two halves of one BSP split.

    ``path`` holds one rectangle when the two centres share an axis, and two
    (a horizontal leg at the start's z and a vertical leg at the end's x)
    when they do not.
    """
    start: Point
    end: Point
    path: List[Rectangle] = field(default_factory=list)
    width: float = DEFAULT_CORRIDOR_WIDTH

    @property
    def is_l_shaped(self) -> bool:
        return len(self.path) == 2

    @property
    def length(self) -> float:
        """Manhattan length between the two centres"""
        return abs(self.end[0] - self.start[0]) + abs(self.end[1] - self.start[1])

    def to_dict(self) -> Dict:
        return {
            'start': {'x': self.start[0], 'z': self.start[1]},
            'end': {'x': self.end[0], 'z': self.end[1]},
            'width': self.width,
            'length': self.length,
            'path': [rect.to_dict() for rect in self.path],
        }


class PartitionNode:
    """
    Node in the BSP tree.

    A node is split at most once. Until then it is a leaf and may receive a
    room; after that it owns exactly two children and never a room.
    """

    def __init__(self, bounds: Rectangle, rng: DeterministicRandom, depth: int = 0):
        self.bounds = bounds
        self.rng = rng
        self.depth = depth
        self.split_direction = SplitDirection.NONE
        self.split_position = 0
        self.left_child: Optional[PartitionNode] = None
        self.right_child: Optional[PartitionNode] = None
        self.room: Optional[Room] = None

    @property
    def is_leaf(self) -> bool:
        return self.left_child is None and self.right_child is None

    def split(self, min_size: int, aspect_ratio: float = 1.25) -> bool:
        """
        Split this node into two children.

        The axis is drawn at random and then overridden for elongated regions.
        The cut position is drawn from [min_size, extent - min_size].

        Args:
            min_size: Smallest extent either child may have
            aspect_ratio: Ratio at which the longer axis is always cut

        Returns:
            True if the node was split, False if it was already split or is
            too small to split
        """
        if not self.is_leaf:
            return False

        width = self.bounds.width
        depth = self.bounds.depth

        # The axis draw always happens, even when overridden below
        split_horizontal = self.rng.next() > 0.5
        if width > depth and width / depth >= aspect_ratio:
            split_horizontal = False
        elif depth > width and depth / width >= aspect_ratio:
            split_horizontal = True

        max_split = (depth if split_horizontal else width) - min_size
        if max_split <= min_size:
            return False

        position = self.rng.range(min_size, max_split)
        x, z = self.bounds.x, self.bounds.z

        if split_horizontal:
            self.split_direction = SplitDirection.HORIZONTAL
            left_bounds = Rectangle(x, z, width, position)
            right_bounds = Rectangle(x, z + position, width, depth - position)
        else:
            self.split_direction = SplitDirection.VERTICAL
            left_bounds = Rectangle(x, z, position, depth)
            right_bounds = Rectangle(x + position, z, width - position, depth)

        self.split_position = position
        self.left_child = PartitionNode(left_bounds, self.rng, self.depth + 1)
        self.right_child = PartitionNode(right_bounds, self.rng, self.depth + 1)
        return True

    def create_room(self, map_width: float, map_depth: float,
                    settings: Optional[GeneratorSettings] = None, room_id: int = 0) -> Room:
        """
        Carve a room inside this leaf.

        The room keeps ``room_padding`` units clear on every side, fills 70-100%
        of what remains on each axis and is centred in the leaf. Rooms larger
        than ``pillar_min_room_size`` on both axes may get pillars.

        Raises:
            LevelGenerationError: If the node is split or already has a room
        """
        if not self.is_leaf:
            raise LevelGenerationError("Cannot create a room in a split node")
        if self.room is not None:
            raise LevelGenerationError("Leaf already has a room")

        settings = settings or GeneratorSettings()
        padding = settings.room_padding

        max_w = max(self.bounds.width - padding * 2, MIN_PADDED_ROOM_SIZE)
        max_d = max(self.bounds.depth - padding * 2, MIN_PADDED_ROOM_SIZE)

        w = self.rng.range(math.floor(max_w * settings.room_fill_min), max_w)
        d = self.rng.range(math.floor(max_d * settings.room_fill_min), max_d)

        x = self.bounds.x + math.floor((self.bounds.width - w) / 2)
        z = self.bounds.z + math.floor((self.bounds.depth - d) / 2)

        # Only large rooms consume the pillar draw
        large = w > settings.pillar_min_room_size and d > settings.pillar_min_room_size
        has_pillars = large and self.rng.next() > 1.0 - settings.pillar_chance

        self.room = Room(
            x=x - map_width / 2,
            z=z - map_depth / 2,
            width=w,
            depth=d,
            has_pillars=has_pillars,
            id=room_id,
        )
        return self.room

    def create_rooms(self, map_width: float, map_depth: float,
                     settings: Optional[GeneratorSettings] = None,
                     rooms: Optional[List[Room]] = None) -> List[Room]:
        """Create a room in every leaf below this node, left subtree first."""
        if rooms is None:
            rooms = []
        if self.is_leaf:
            rooms.append(self.create_room(map_width, map_depth, settings, room_id=len(rooms)))
        else:
            if self.left_child:
                self.left_child.create_rooms(map_width, map_depth, settings, rooms)
            if self.right_child:
                self.right_child.create_rooms(map_width, map_depth, settings, rooms)
        return rooms

    def get_center(self) -> Point:
        """
        Anchor point used to route corridors.

        A leaf answers with its room's centre; a split node with the midpoint
        of its children's anchors.
        """
        if self.room is not None:
            return self.room.center
        if self.left_child and self.right_child:
            lx, lz = self.left_child.get_center()
            rx, rz = self.right_child.get_center()
            return ((lx + rx) / 2, (lz + rz) / 2)
        raise LevelGenerationError("Leaf has no room yet; call create_rooms() first")

    def get_leaves(self) -> List['PartitionNode']:
        """Get all leaf nodes in this subtree"""
        if self.is_leaf:
            return [self]
        leaves = []
        if self.left_child:
            leaves.extend(self.left_child.get_leaves())
        if self.right_child:
            leaves.extend(self.right_child.get_leaves())
        return leaves

    def get_rooms(self) -> List[Room]:
        return [leaf.room for leaf in self.get_leaves() if leaf.room is not None]

    def iter_nodes(self) -> Iterator['PartitionNode']:
        """Pre-order walk of this subtree"""
        yield self
        if self.left_child:
            yield from self.left_child.iter_nodes()
        if self.right_child:
            yield from self.right_child.iter_nodes()

    def max_depth(self) -> int:
        return max(node.depth for node in self.iter_nodes())

    def __repr__(self) -> str:
        state = 'leaf' if self.is_leaf else self.split_direction.name.lower()
        return f"PartitionNode({self.bounds}, depth={self.depth}, {state})"


class LevelGenerator:
    """
    Main BSP level generator class.

    Each ``generate()`` call builds a fresh tree and grid and discards them
    once rooms and walls are extracted. Only the random stream carries over,
    so calling ``generate()`` twice on one instance gives two different
    levels, while two instances with the same seed give the same levels.
    Spawn points come from a second stream seeded the same way, so picking
    them never changes the levels that follow.
    """

    def __init__(self, width: int, depth: int, seed: int = DEFAULT_SEED,
                 settings: Optional[GeneratorSettings] = None):
        """
        Initialize the level generator.

        Args:
            width: Map extent along X, in grid units
            depth: Map extent along Z, in grid units
            seed: Seed for the deterministic random stream
            settings: Tunables; defaults to GeneratorSettings()

        Raises:
            InvalidDimensionsError: If the map is empty or smaller than a room
            SettingsError: If the settings are invalid
            LevelGenerationError: If the seed is not an integer
        """
        self.settings = settings or GeneratorSettings()
        self.settings.validate()
        self._validate_dimensions(width, depth)
        if isinstance(seed, bool) or not isinstance(seed, numbers.Integral):
            raise LevelGenerationError(f"seed must be an integer, got {seed!r}")

        self.width = int(width)
        self.depth = int(depth)
        self.seed = int(seed)
        self.rng = DeterministicRandom(self.seed)
        # Spawn picks draw from their own stream so they never shift later layouts
        self.spawn_rng = DeterministicRandom(self.seed)

        # Last generation result
        self.rooms: List[Room] = []
        self.corridors: List[Corridor] = []
        self.walls: List[WallSegment] = []
        self.tree_depth = 0

    def _validate_dimensions(self, width, depth):
        errors = []
        for name, value in (('width', width), ('depth', depth)):
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                errors.append(f"{name} must be an integer, got {value!r}")
            elif value <= 0:
                errors.append(f"{name} must be positive, got {value}")
            elif value < self.settings.min_room_size:
                errors.append(
                    f"{name} {value} is smaller than min_room_size {self.settings.min_room_size}"
                )
        if errors:
            raise InvalidDimensionsError(f"Invalid map dimensions: {'; '.join(errors)}")

    def generate(self) -> LevelData:
        """
        Generate a complete level.

        Returns:
            LevelData with walls, rooms and corridors in centred map space
        """
        logger.debug(f"Starting BSP generation with map size {self.width}x{self.depth}, seed {self.seed}")

        root = PartitionNode(Rectangle(0, 0, self.width, self.depth), self.rng)
        self._build_bsp_tree(root)

        rooms = root.create_rooms(self.width, self.depth, self.settings)
        for room in rooms:
            logger.debug(f"Placed room {room.id} at ({room.x}, {room.z}) size {room.width}x{room.depth}"
                         f"{' with pillars' if room.has_pillars else ''}")

        corridors: List[Corridor] = []
        self.generate_corridors(root, corridors)

        grid = LevelGrid.rasterize(self.width, self.depth, rooms, corridors, self.settings)
        walls = grid.extract_wall_segments()

        self.rooms = rooms
        self.corridors = corridors
        self.walls = walls
        self.tree_depth = root.max_depth()

        logger.info(
            "Generated %dx%d level (seed %d): %d rooms, %d corridors, %d wall segments",
            self.width, self.depth, self.seed, len(rooms), len(corridors), len(walls),
        )

        return LevelData(
            walls=walls,
            rooms=rooms,
            corridors=corridors,
            width=self.width,
            depth=self.depth,
            seed=self.seed,
        )

    def _build_bsp_tree(self, root: PartitionNode) -> None:
        """
        Split leaves in rounds until no leaf can be split.

        Children appended during a round are visited in that same round.
        """
        min_size = self.settings.min_room_size
        leaves = [root]
        did_split = True
        while did_split:
            did_split = False
            for leaf in leaves:
                if not leaf.is_leaf:
                    continue
                if leaf.bounds.width > min_size * 2 or leaf.bounds.depth > min_size * 2:
                    if leaf.split(min_size, self.settings.split_aspect_ratio):
                        leaves.append(leaf.left_child)
                        leaves.append(leaf.right_child)
                        did_split = True
        logger.debug(f"BSP tree built with {len(root.get_leaves())} leaves")

    def generate_corridors(self, node: PartitionNode, corridors: Optional[List[Corridor]] = None) -> List[Corridor]:
        """Add one corridor per split node in this subtree, parents before children."""
        if corridors is None:
            corridors = []
        if node.left_child and node.right_child:
            p1 = node.left_child.get_center()
            p2 = node.right_child.get_center()
            corridors.append(self._create_corridor(p1, p2))
            self.generate_corridors(node.left_child, corridors)
            self.generate_corridors(node.right_child, corridors)
        return corridors

    def _create_corridor(self, p1: Point, p2: Point) -> Corridor:
        """
        Route a corridor between two centres.

        Aligned centres get one straight segment. Otherwise an L is built from
        a horizontal leg at p1's z, widened by a corridor width so it overlaps
        the corner, and a vertical leg at p2's x.
        """
        cw = self.settings.corridor_width
        half = cw / 2
        (x1, z1), (x2, z2) = p1, p2

        if x1 == x2:
            path = [Rectangle(x1 - half, min(z1, z2), cw, abs(z1 - z2))]
        elif z1 == z2:
            path = [Rectangle(min(x1, x2), z1 - half, abs(x1 - x2), cw)]
        else:
            path = [
                Rectangle(min(x1, x2), z1 - half, abs(x1 - x2) + cw, cw),
                Rectangle(x2 - half, min(z1, z2), cw, abs(z1 - z2)),
            ]

        logger.debug(f"Corridor ({x1}, {z1}) -> ({x2}, {z2}) with {len(path)} segment(s)")
        return Corridor(start=p1, end=p2, path=path, width=cw)

    def get_spawn_point(self, rooms: Optional[List[Room]] = None) -> SpawnPoint:
        """
        Pick a random room and return its centre at eye height.

        Room centres are never covered by pillars, so the point is always in
        carved space.

        Args:
            rooms: Rooms to choose from; defaults to the last generated rooms

        Raises:
            LevelGenerationError: If there are no rooms to choose from
        """
        rooms = self.rooms if rooms is None else rooms
        if not rooms:
            raise LevelGenerationError("No rooms to spawn in; call generate() first")
        room = self.spawn_rng.choice(rooms)
        cx, cz = room.center
        return SpawnPoint(cx, self.settings.eye_height, cz)

    def get_spawn_points(self, count: int, rooms: Optional[List[Room]] = None) -> List[SpawnPoint]:
        """Pick ``count`` independent spawn points; rooms may repeat."""
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        return [self.get_spawn_point(rooms) for _ in range(count)]

    def get_layout_stats(self) -> Dict:
        """
        Get statistics about the last generated layout.

        Returns:
            Dictionary with layout statistics
        """
        total_area = sum(r.area for r in self.rooms)
        return {
            'room_count': len(self.rooms),
            'corridor_count': len(self.corridors),
            'corridor_segment_count': sum(len(c.path) for c in self.corridors),
            'l_shaped_corridors': sum(1 for c in self.corridors if c.is_l_shaped),
            'pillared_rooms': sum(1 for r in self.rooms if r.has_pillars),
            'wall_count': len(self.walls),
            'total_room_area': total_area,
            'average_room_size': total_area / len(self.rooms) if self.rooms else 0,
            'total_corridor_length': sum(c.length for c in self.corridors),
            'tree_depth': self.tree_depth,
        }

    def export_layout(self) -> Dict:
        """
        Export the last generated layout as a dictionary for serialization.

        Returns:
            Dictionary representation of the layout
        """
        return {
            'config': {
                'width': self.width,
                'depth': self.depth,
                **self.settings.to_dict(),
            },
            'seed': self.seed,
            'stats': self.get_layout_stats(),
            'rooms': [room.to_dict() for room in self.rooms],
            'corridors': [corridor.to_dict() for corridor in self.corridors],
            'walls': [{'x': w.x, 'z': w.z, 'width': w.width, 'depth': w.depth} for w in self.walls],
        }
