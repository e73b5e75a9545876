import json
import logging

import pytest

from bsp_levelgen import GeneratorSettings, LevelGenerator, SettingsError
from bsp_levelgen.generators import load_settings, save_settings


def test_defaults():
    settings = GeneratorSettings()
    assert settings.min_room_size == 15
    assert settings.corridor_width == 4
    assert settings.pillar_spacing == 6
    assert settings.pillar_min_room_size == 20
    assert settings.eye_height == 2.0
    settings.validate()


@pytest.mark.parametrize("overrides,fragment", [
    ({'min_room_size': 0}, "min_room_size"),
    ({'corridor_width': 0}, "corridor_width"),
    ({'pillar_spacing': 0}, "pillar_spacing"),
    ({'pillar_margin': -1}, "pillar_margin"),
    ({'pillar_clearance': 0}, "pillar_clearance"),
    ({'pillar_min_room_size': 5}, "pillar_min_room_size"),
    ({'room_padding': -1}, "room_padding"),
    ({'room_fill_min': 0.0}, "room_fill_min"),
    ({'pillar_chance': 1.5}, "pillar_chance"),
    ({'split_aspect_ratio': 0.9}, "split_aspect_ratio"),
])
def test_validate_rejects(overrides, fragment):
    with pytest.raises(SettingsError, match=fragment):
        GeneratorSettings(**overrides).validate()


def test_validate_reports_every_error():
    with pytest.raises(SettingsError) as exc:
        GeneratorSettings(min_room_size=0, corridor_width=0).validate()
    assert "min_room_size" in str(exc.value)
    assert "corridor_width" in str(exc.value)
    assert "; " in str(exc.value)


def test_from_dict_ignores_unknown_keys(caplog):
    with caplog.at_level(logging.WARNING):
        settings = GeneratorSettings.from_dict({'min_room_size': 12, 'colour': 'red'})
    assert settings.min_room_size == 12
    assert "colour" in caplog.text


def test_save_and_load(tmp_path):
    path = save_settings(GeneratorSettings(min_room_size=10, pillar_chance=0.5), tmp_path / "cfg" / "gen.json")
    assert path.exists()
    loaded = load_settings(path)
    assert loaded == GeneratorSettings(min_room_size=10, pillar_chance=0.5)


def test_load_partial_file(tmp_path):
    path = tmp_path / "gen.json"
    path.write_text(json.dumps({'corridor_width': 6}))
    settings = load_settings(path)
    assert settings.corridor_width == 6
    assert settings.min_room_size == 15


def test_load_missing_file(tmp_path):
    with pytest.raises(SettingsError, match="not found"):
        load_settings(tmp_path / "missing.json")


def test_load_invalid_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json")
    with pytest.raises(SettingsError, match="not valid JSON"):
        load_settings(path)


def test_load_non_object(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2]")
    with pytest.raises(SettingsError, match="JSON object"):
        load_settings(path)


def test_load_bad_values(tmp_path):
    path = tmp_path / "bad_values.json"
    path.write_text(json.dumps({'min_room_size': -3}))
    with pytest.raises(SettingsError):
        load_settings(path)


def test_pillar_bounds_accept_edge_values():
    GeneratorSettings(pillar_margin=0, pillar_clearance=1, pillar_min_room_size=20).validate()
    GeneratorSettings(pillar_min_room_size=30).validate()


def test_generator_refuses_pillars_in_small_rooms():
    with pytest.raises(SettingsError, match="pillar_min_room_size"):
        LevelGenerator(100, 100, seed=12345,
                       settings=GeneratorSettings(pillar_min_room_size=5, pillar_chance=1.0))
