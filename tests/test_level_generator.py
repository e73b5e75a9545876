import pytest

from bsp_levelgen import (
    GeneratorSettings,
    InvalidDimensionsError,
    LevelGenerationError,
    LevelGenerator,
    SettingsError,
    SpawnPoint,
)
from bsp_levelgen.generators.bsp import Rectangle


def room_tuple(room):
    return (room.x, room.z, room.width, room.depth)


@pytest.mark.parametrize("width,depth,seed,rooms,first_room,walls", [
    (100, 100, 12345, 24, (-47, -48, 17, 12), 1326),
    (20, 20, 12345, 1, (-6, -8, 11, 16), 54),
    (64, 48, 7, 6, (-30, -21, 13, 22), 417),
    (100, 100, -5, 22, (-47, -44, 10, 17), 1305),
    (100, 100, 0, 23, (-47, -48, 12, 26), 1330),
    (160, 120, 12345, 41, None, 2517),
    (160, 120, 2, 52, None, 2653),
    (160, 120, 7, 38, None, 2520),
    (50, 50, 456, 9, None, 387),
])
def test_known_layouts(width, depth, seed, rooms, first_room, walls):
    level = LevelGenerator(width, depth, seed=seed).generate()
    assert len(level.rooms) == rooms
    assert len(level.walls) == walls
    assert len(level.corridors) == rooms - 1
    if first_room is not None:
        assert room_tuple(level.rooms[0]) == first_room


def test_known_layout_details(level):
    assert len(level.corridor_rects) == 38
    first_wall = level.walls[0]
    assert (first_wall.x, first_wall.z) == (-46.5, -48.5)
    assert (first_wall.width, first_wall.depth) == (1, 1)
    assert level.pillared_rooms == []
    assert (level.width, level.depth, level.seed) == (100, 100, 12345)


@pytest.mark.parametrize("seed,pillared", [
    (12345, [(-75, 32, 23, 25)]),
    (2, [(40, 33, 23, 24)]),
    (7, [(57, -22, 21, 23)]),
])
def test_known_pillared_rooms(seed, pillared):
    level = LevelGenerator(160, 120, seed=seed).generate()
    assert room_tuple(level.pillared_rooms[0]) == pillared[0]


def test_pillared_room_count(pillared_generator):
    level = pillared_generator.generate()
    assert len(level.pillared_rooms) == 3
    assert len(level.corridor_rects) == 72


def test_first_corridors_of_small_map():
    level = LevelGenerator(64, 48, seed=7).generate()
    first = level.corridors[0]
    assert first.start == (-11.625, 1.375)
    assert first.end == (23.25, 0.25)
    assert first.is_l_shaped
    assert first.path == [
        Rectangle(-11.625, -0.625, 38.875, 4),
        Rectangle(21.25, 0.25, 4, 1.125),
    ]
    assert [len(c.path) for c in level.corridors] == [2, 2, 1, 2, 2]
    assert level.corridors[2].path == [Rectangle(-25.5, -10, 4, 24.5)]


def test_single_room_map(small_level):
    assert len(small_level.rooms) == 1
    assert small_level.corridors == []
    room = small_level.rooms[0]
    assert len(small_level.walls) == 2 * room.width + 2 * room.depth


def test_determinism():
    a = LevelGenerator(120, 90, seed=2024).generate()
    b = LevelGenerator(120, 90, seed=2024).generate()
    assert a.rooms == b.rooms
    assert a.walls == b.walls
    assert a.corridors == b.corridors


def test_different_seeds_differ():
    a = LevelGenerator(100, 100, seed=1).generate()
    b = LevelGenerator(100, 100, seed=2).generate()
    assert a.rooms != b.rooms


def test_second_generate_continues_stream(generator):
    first = generator.generate()
    second = generator.generate()
    assert first.rooms != second.rooms
    # The last result is what the instance reports on
    assert generator.rooms is second.rooms


@pytest.mark.parametrize("seed", [1, 9, 77, 12345])
def test_rooms_inside_map_and_disjoint(seed):
    level = LevelGenerator(140, 90, seed=seed).generate()
    bounds = Rectangle(-70, -45, 140, 90)
    for i, room in enumerate(level.rooms):
        assert bounds.contains_rect(room)
        for other in level.rooms[i + 1:]:
            assert not room.intersects(other)


@pytest.mark.parametrize("seed", [3, 12345])
def test_pillars_only_in_large_rooms(seed):
    level = LevelGenerator(200, 200, seed=seed).generate()
    for room in level.pillared_rooms:
        assert room.width > 20 and room.depth > 20


def test_walls_are_unique_cells(level):
    cells = {(w.x, w.z) for w in level.walls}
    assert len(cells) == len(level.walls)
    for wall in level.walls:
        assert -50 < wall.x < 50 and -50 < wall.z < 50


def test_room_ids_follow_list_order(level):
    assert [room.id for room in level.rooms] == list(range(len(level.rooms)))


def test_spawn_point_single_room():
    generator = LevelGenerator(20, 20, seed=12345)
    level = generator.generate()
    assert generator.get_spawn_point() == SpawnPoint(-0.5, 2.0, 0.0)


def test_spawn_point_is_room_centre(generator, level):
    centres = {room.center for room in level.rooms}
    for _ in range(10):
        point = generator.get_spawn_point()
        assert point.y == 2.0
        assert (point.x, point.z) in centres


def test_spawn_point_uses_custom_eye_height():
    generator = LevelGenerator(40, 40, seed=1, settings=GeneratorSettings(eye_height=1.5))
    generator.generate()
    assert generator.get_spawn_point().y == 1.5


def test_spawn_point_from_given_rooms(generator, level):
    room = level.rooms[5]
    point = generator.get_spawn_point([room])
    assert (point.x, point.z) == room.center


def test_spawn_points(generator, level):
    points = generator.get_spawn_points(6)
    assert len(points) == 6
    assert generator.get_spawn_points(0) == []
    with pytest.raises(ValueError):
        generator.get_spawn_points(-1)


def test_spawns_do_not_change_later_levels():
    picky = LevelGenerator(100, 100, seed=12345)
    picky.generate()
    picky.get_spawn_points(5)
    plain = LevelGenerator(100, 100, seed=12345)
    plain.generate()
    assert picky.generate().rooms == plain.generate().rooms


def test_spawn_sequence_is_reproducible():
    a = LevelGenerator(100, 100, seed=99)
    b = LevelGenerator(100, 100, seed=99)
    a.generate()
    b.generate()
    assert a.get_spawn_points(8) == b.get_spawn_points(8)


@pytest.mark.parametrize("seed", [1.9, "7", None])
def test_non_integer_seed_rejected(seed):
    with pytest.raises(LevelGenerationError, match="seed"):
        LevelGenerator(100, 100, seed=seed)


def test_spawn_before_generate_raises():
    with pytest.raises(LevelGenerationError):
        LevelGenerator(50, 50).get_spawn_point()


@pytest.mark.parametrize("width,depth", [
    (0, 100),
    (100, -4),
    (10, 100),
    (100.5, 100),
    ("100", 100),
    (True, 100),
])
def test_invalid_dimensions(width, depth):
    with pytest.raises(InvalidDimensionsError):
        LevelGenerator(width, depth)


def test_invalid_dimensions_is_generation_error():
    with pytest.raises(LevelGenerationError):
        LevelGenerator(-1, -1)


def test_invalid_settings_rejected():
    with pytest.raises(SettingsError):
        LevelGenerator(100, 100, settings=GeneratorSettings(corridor_width=0))


def test_minimum_map_is_min_room_size():
    level = LevelGenerator(15, 15, seed=4).generate()
    assert len(level.rooms) == 1


def test_layout_stats(generator, level):
    stats = generator.get_layout_stats()
    assert stats['room_count'] == 24
    assert stats['corridor_count'] == 23
    assert stats['corridor_segment_count'] == 38
    assert stats['l_shaped_corridors'] == 15
    assert stats['pillared_rooms'] == 0
    assert stats['wall_count'] == 1326
    assert stats['total_room_area'] == sum(r.width * r.depth for r in level.rooms)
    assert stats['average_room_size'] == stats['total_room_area'] / 24
    assert stats['tree_depth'] >= 4


def test_export_layout(generator, level):
    data = generator.export_layout()
    assert data['seed'] == 12345
    assert data['config']['width'] == 100
    assert data['config']['min_room_size'] == 15
    assert len(data['rooms']) == 24
    assert data['rooms'][0] == {
        'x': -47, 'z': -48, 'width': 17, 'depth': 12, 'has_pillars': False, 'id': 0,
    }
    assert len(data['walls']) == 1326
