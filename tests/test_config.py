import json

import pytest

from config import (DEFAULT_CONFIG, ConfigFileError, InvalidConfiguration, TreemapConfig,
                    load_config, parse_orientation)
from geometry import Orientation


def test_defaults_are_valid():
    config = TreemapConfig()
    config.validate()
    assert config.squarify
    assert config.orientation is Orientation.AUTO


def test_default_sections_match_dataclass():
    config = TreemapConfig.from_sections(DEFAULT_CONFIG)
    assert config == TreemapConfig()


def test_from_dict_accepts_both_key_styles():
    config = TreemapConfig.from_dict({
        'min-tile-size': 5,
        'height_scale_factor': 0.5,
        'orientation': 'Vertical',
        'light-vector': [0, 0, 1],
        'unrelated': 'ignored',
    })
    assert config.min_tile_size == 5
    assert config.height_scale_factor == 0.5
    assert config.orientation is Orientation.VERTICAL
    assert config.light_vector == (0, 0, 1)


@pytest.mark.parametrize('params', [
    {'height-scale-factor': 0},
    {'height-scale-factor': 1.01},
    {'min-tile-size': -1},
    {'ambient-light': 256},
    {'ambient-light': -1},
    {'light-vector': [1, 2]},
    {'light-vector': [0, float('nan'), 1]},
    {'orientation': 'diagonal'},
    {'cushion-height': 0},
    {'max-depth': -2},
])
def test_invalid_values(params):
    with pytest.raises(InvalidConfiguration):
        TreemapConfig.from_dict(params)


def test_invalid_configuration_is_value_error():
    assert issubclass(InvalidConfiguration, ValueError)


def test_parse_orientation():
    assert parse_orientation('horizontal') is Orientation.HORIZONTAL
    assert parse_orientation(Orientation.AUTO) is Orientation.AUTO


def test_load_config_merges_sections(tmp_path):
    path = tmp_path / 'config.json'
    path.write_text(json.dumps({
        'layout': {'squarify': False},
        'cushion': {'ambient-light': 10},
        'extra': 1,
    }))
    config = load_config(str(path))
    assert config['layout']['squarify'] is False
    assert config['layout']['min-tile-size'] == DEFAULT_CONFIG['layout']['min-tile-size']
    assert config['cushion']['ambient-light'] == 10
    assert config['extra'] == 1
    # defaults are not modified
    assert DEFAULT_CONFIG['layout']['squarify'] is True


def test_load_config_bad_json(tmp_path):
    path = tmp_path / 'config.json'
    path.write_text('{not json')
    with pytest.raises(ConfigFileError):
        load_config(str(path))


def test_load_config_not_an_object(tmp_path):
    path = tmp_path / 'config.json'
    path.write_text('[1, 2]')
    with pytest.raises(ConfigFileError):
        load_config(str(path))


def test_load_config_missing_file(tmp_path):
    with pytest.raises(ConfigFileError):
        load_config(str(tmp_path / 'nope.json'))
