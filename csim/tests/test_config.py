import dataclasses

import pytest

from csim.core.config import CacheConfig
from csim.core.errors import ConfigurationError


def test_derived_geometry():
    cfg = CacheConfig(set_index_bits=4, block_offset_bits=5, lines_per_set=2)
    assert cfg.set_count == 16
    assert cfg.block_size == 32


def test_config_is_immutable():
    cfg = CacheConfig(set_index_bits=1, block_offset_bits=1, lines_per_set=1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.lines_per_set = 4


@pytest.mark.parametrize('s,b,E', [
    (-1, 0, 1),
    (0, -1, 1),
    (0, 0, 0),
    (0, 0, -3),
    (32, 32, 1),
    (64, 0, 1),
    (0, 64, 1),
    (1.5, 0, 1),
    (0, 0, True),
])
def test_invalid_geometry_rejected(s, b, E):
    with pytest.raises(ConfigurationError):
        CacheConfig(set_index_bits=s, block_offset_bits=b, lines_per_set=E)


def test_largest_accepted_width():
    cfg = CacheConfig(set_index_bits=0, block_offset_bits=63, lines_per_set=1)
    assert cfg.block_size == 2 ** 63


@pytest.mark.parametrize('missing', ['-s', '-E', '-b'])
def test_from_options_names_missing_option(missing):
    values = {'-s': 1, '-E': 2, '-b': 3}
    values[missing] = None
    with pytest.raises(ConfigurationError, match=missing):
        CacheConfig.from_options(values['-s'], values['-E'], values['-b'])


def test_from_options_maps_flags():
    cfg = CacheConfig.from_options(1, 2, 3)
    assert (cfg.set_index_bits, cfg.lines_per_set, cfg.block_offset_bits) == (1, 2, 3)
