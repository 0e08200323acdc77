import copy
import json
import math
import os
import pathlib
from dataclasses import dataclass, fields

from geometry import Orientation
from logger import logger

USER_CONFIG_PATH = os.path.expanduser('~/.config/cushionmap.json')
SCRIPT_CONFIG_PATH = str(pathlib.Path(__file__).parent.resolve() / 'config.json')

DEFAULT_CONFIG = {
    'flags': {
        'exclude-dirs': [],
        'exclude-files': [],
        'exclude-filters': [],
        'skip-mount': False,
        'group-loose-files': True,
    },
    'layout': {
        'squarify': True,
        'min-tile-size': 3,
        'orientation': 'auto',
        'max-depth': None,
    },
    'cushion': {
        'cushion-shading': True,
        'ensure-contrast': True,
        'cushion-grid': False,
        'height-scale-factor': 0.8,
        'cushion-height': 1.0,
        'ambient-light': 40,
        'light-vector': [-0.3, -0.5, 0.812],
    },
    'png-renderer': {
        'width': 1200,
        'height': 800,
        'filename': None,
    },
    'svg-renderer': {
        'width': 1200,
        'height': 800,
        'max-rectangles': 1000,
        'filename': None,
    },
}


class InvalidConfiguration(ValueError):
    pass


class ConfigFileError(Exception):
    pass


@dataclass
class TreemapConfig:
    squarify: bool = True
    min_tile_size: float = 3
    height_scale_factor: float = 0.8
    cushion_height: float = 1.0
    ambient_light: int = 40
    light_vector: tuple = (-0.3, -0.5, 0.812)
    cushion_shading: bool = True
    ensure_contrast: bool = True
    cushion_grid: bool = False
    orientation: Orientation = Orientation.AUTO
    max_depth: int = None

    @classmethod
    def from_dict(cls, params):
        """build from a config section; accepts 'min-tile-size' or 'min_tile_size' style keys"""
        names = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in params.items():
            name = key.replace('-', '_')
            if name in names:
                kwargs[name] = value
        if 'orientation' in kwargs:
            kwargs['orientation'] = parse_orientation(kwargs['orientation'])
        if 'light_vector' in kwargs and isinstance(kwargs['light_vector'], list):
            kwargs['light_vector'] = tuple(kwargs['light_vector'])
        config = cls(**kwargs)
        config.validate()
        return config

    @classmethod
    def from_sections(cls, config):
        params = {}
        params.update(config.get('layout', {}))
        params.update(config.get('cushion', {}))
        return cls.from_dict(params)

    def validate(self):
        if not 0 < self.height_scale_factor <= 1:
            raise InvalidConfiguration('height_scale_factor must be in (0, 1], got %r' % self.height_scale_factor)
        if self.min_tile_size < 0:
            raise InvalidConfiguration('min_tile_size must not be negative, got %r' % self.min_tile_size)
        if self.cushion_height <= 0:
            raise InvalidConfiguration('cushion_height must be positive, got %r' % self.cushion_height)
        if not 0 <= self.ambient_light <= 255:
            raise InvalidConfiguration('ambient_light must be in 0..255, got %r' % self.ambient_light)
        if (len(self.light_vector) != 3 or
                not all(isinstance(c, (int, float)) and math.isfinite(c) for c in self.light_vector)):
            raise InvalidConfiguration('light_vector must be 3 finite numbers, got %r' % (self.light_vector, ))
        if not isinstance(self.orientation, Orientation):
            raise InvalidConfiguration('unknown orientation %r' % self.orientation)
        if self.max_depth is not None and self.max_depth < 0:
            raise InvalidConfiguration('max_depth must not be negative, got %r' % self.max_depth)


def parse_orientation(value):
    if isinstance(value, Orientation):
        return value
    try:
        return Orientation(str(value).lower())
    except ValueError:
        raise InvalidConfiguration('unknown orientation %r' % value) from None


def find_config_file():
    if os.path.exists(USER_CONFIG_PATH):
        return USER_CONFIG_PATH
    if os.path.exists(SCRIPT_CONFIG_PATH):
        return SCRIPT_CONFIG_PATH
    return None


def load_config(path=None):
    """defaults, updated section by section with the config file contents"""
    config = copy.deepcopy(DEFAULT_CONFIG)
    path = path or find_config_file()
    if path is None:
        logger.debug('no config file found, using defaults')
        return config

    logger.debug('using config file: %s' % path)
    try:
        with open(path) as f:
            loaded = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigFileError('failed to read config file %s: %s' % (path, exc)) from exc
    if not isinstance(loaded, dict):
        raise ConfigFileError('config file %s must contain a json object' % path)

    for section, values in loaded.items():
        if isinstance(values, dict) and isinstance(config.get(section), dict):
            config[section].update(values)
        else:
            config[section] = values
    return config
