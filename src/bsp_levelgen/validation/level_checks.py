"""
Structural checks for generated levels.

Validates a LevelData against the guarantees the generator makes:
- Rooms inside the map (LVL-001) and pairwise disjoint (LVL-002)
- Pillars only in large rooms (LVL-003)
- Wall list is exactly the visible walls (LVL-004, LVL-008)
- All rooms reachable (LVL-005) through a tree of corridors (LVL-006)
- Room centres carved, so spawns never land in a wall (LVL-007)

Grid-based checks rebuild the grid from the level's rooms and corridors.
"""

import logging
from collections import deque
from typing import List, Optional, Set, Tuple

from bsp_levelgen.generators.bsp.bsp_generator import Rectangle
from bsp_levelgen.generators.layout.layout_types import LevelData, LevelGrid
from bsp_levelgen.generators.settings import PILLAR_ROOM_SIZE_FLOOR, GeneratorSettings

from .core import ValidationError, ValidationIssue, ValidationResult
from .rules import LVL_001, LVL_002, LVL_003, LVL_004, LVL_005, LVL_006, LVL_007, LVL_008, LVL_010

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]


def check_room_containment(level: LevelData) -> List[ValidationIssue]:
    half_w = level.width / 2
    half_d = level.depth / 2
    bounds = Rectangle(-half_w, -half_d, level.width, level.depth)
    issues = []
    for room in level.rooms:
        if not bounds.contains_rect(room):
            issues.append(LVL_001.issue(
                position=(room.x, room.z),
                room_id=room.id, x=room.x, z=room.z, width=room.width, depth=room.depth,
                half_w=half_w, half_d=half_d,
            ))
    return issues


def check_room_overlap(level: LevelData) -> List[ValidationIssue]:
    issues = []
    rooms = level.rooms
    for i, a in enumerate(rooms):
        for b in rooms[i + 1:]:
            if a.intersects(b):
                issues.append(LVL_002.issue(room_id=a.id, a=a.id, b=b.id))
    return issues


def check_pillar_flags(level: LevelData, settings: GeneratorSettings) -> List[ValidationIssue]:
    # Settings may have been changed after validation; the floor always holds
    limit = max(settings.pillar_min_room_size, PILLAR_ROOM_SIZE_FLOOR)
    issues = []
    for room in level.pillared_rooms:
        if room.width <= limit or room.depth <= limit:
            issues.append(LVL_003.issue(
                room_id=room.id, width=room.width, depth=room.depth, limit=limit,
            ))
    return issues


def check_wall_list(level: LevelData, grid: LevelGrid) -> List[ValidationIssue]:
    """Emitted walls must be exactly the grid's visible wall cells."""
    issues = []
    visible = set(grid.visible_wall_cells())
    emitted: Set[Cell] = set()

    for wall in level.walls:
        cell = grid.world_to_cell(wall.x, wall.z)
        emitted.add(cell)
        if cell not in visible:
            issues.append(LVL_004.issue(position=(wall.x, wall.z), x=wall.x, z=wall.z))

    missing = sorted(visible - emitted, key=lambda c: (c[1], c[0]))
    if missing:
        x, z = grid.cell_to_world(*missing[0])
        issues.append(LVL_008.issue(position=(x, z), count=len(missing), x=x, z=z))
    return issues


def _flood_fill(grid: LevelGrid, start: Cell) -> Set[Cell]:
    """Carved cells 4-connected to ``start``."""
    if grid.is_wall(*start):
        return set()
    seen = {start}
    queue = deque([start])
    while queue:
        gx, gz = queue.popleft()
        for dx, dz in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            nxt = (gx + dx, gz + dz)
            if nxt not in seen and not grid.is_wall(*nxt):
                seen.add(nxt)
                queue.append(nxt)
    return seen


def check_room_centres(level: LevelData, grid: LevelGrid) -> List[ValidationIssue]:
    issues = []
    for room in level.rooms:
        cx, cz = room.center
        if grid.is_wall(*grid.world_to_cell(cx, cz)):
            issues.append(LVL_007.issue(position=(cx, cz), room_id=room.id, x=cx, z=cz))
    return issues


def check_reachability(level: LevelData, grid: LevelGrid) -> List[ValidationIssue]:
    if not level.rooms:
        return []
    start_room = level.rooms[0]
    reachable = _flood_fill(grid, grid.world_to_cell(*start_room.center))

    issues = []
    for room in level.rooms[1:]:
        if grid.world_to_cell(*room.center) not in reachable:
            issues.append(LVL_005.issue(
                position=room.center, room_id=room.id, start_id=start_room.id,
            ))
    return issues


def check_corridor_tree(level: LevelData) -> List[ValidationIssue]:
    expected = max(len(level.rooms) - 1, 0)
    if len(level.corridors) != expected:
        return [LVL_006.issue(corridors=len(level.corridors), rooms=len(level.rooms), expected=expected)]
    return []


class LevelValidator:
    """Runs every LVL check against a generated level.

    Attributes:
        settings: Settings the level was generated with
    """

    def __init__(self, settings: Optional[GeneratorSettings] = None):
        self.settings = settings or GeneratorSettings()

    def validate(self, level: LevelData) -> ValidationResult:
        result = ValidationResult()
        result.extend(check_room_containment(level))
        result.extend(check_room_overlap(level))
        result.extend(check_pillar_flags(level, self.settings))
        result.extend(check_corridor_tree(level))

        grid = LevelGrid.rasterize(level.width, level.depth, level.rooms, level.corridors, self.settings)
        result.extend(check_wall_list(level, grid))
        result.extend(check_room_centres(level, grid))
        result.extend(check_reachability(level, grid))

        result.add_issue(LVL_010.issue(
            rooms=len(level.rooms), corridors=len(level.corridors),
            walls=len(level.walls), carved=grid.empty_count,
        ))

        if result.failed:
            logger.error(f"Level validation failed: {len(result.errors)} error(s)")
        return result


def validate_level(level: LevelData, settings: Optional[GeneratorSettings] = None,
                   fail_fast: bool = False) -> ValidationResult:
    """
    Validate a generated level.

    Args:
        level: Result of LevelGenerator.generate()
        settings: Settings the level was generated with
        fail_fast: If True, raise ValidationError on FAIL issues

    Returns:
        ValidationResult with every issue found
    """
    result = LevelValidator(settings).validate(level)
    if fail_fast and result.failed:
        raise ValidationError(result)
    return result
