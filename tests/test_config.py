import json
from dataclasses import FrozenInstanceError
from pathlib import Path

import numpy as np
import pytest

from diffgrowth import ConfigurationError, GrowthConfig, load_config, save_config


def test_defaults_are_reference_values():
    config = GrowthConfig()
    assert (config.max_force, config.max_speed, config.desired_separation,
            config.cohesion_weight, config.max_edge_length) == (1.5, 1.0, 14.0, 1.1, 5.0)
    assert config.alignment_weight == 0.0
    assert config.damping == 0.0
    assert config.falloff == 'linear'


def test_config_is_immutable():
    config = GrowthConfig()
    with pytest.raises(FrozenInstanceError):
        config.max_force = 3.0


def test_numpy_scalars_accepted():
    config = GrowthConfig(max_force=np.float32(2.0), max_speed=np.float64(0.5))
    assert config.max_force == 2.0


@pytest.mark.parametrize("field, value", [
    ('max_force', -1.0),
    ('max_speed', float('nan')),
    ('desired_separation', float('-inf')),
    ('cohesion_weight', -0.5),
    ('separation_weight', -1.0),
    ('max_edge_length', 0.0),
    ('damping', 1.01),
    ('max_force', 'fast'),
    ('max_force', True),
    ('falloff', 'cubic'),
    ('start_radius', 0.0),
    ('start_radius', float('inf')),
    ('start_points', 0),
    ('start_points', 1),
    ('start_points', 10.5),
    ('iterations', -1),
    ('frame_skip', 0),
    ('log_interval', 0),
    ('log_interval', True),
])
def test_invalid_values(field, value):
    with pytest.raises(ConfigurationError) as excinfo:
        GrowthConfig(**{field: value})
    assert excinfo.value.parameter == field


def test_callable_falloff_accepted():
    config = GrowthConfig(falloff=lambda d: 1.0 / d ** 3)
    assert callable(config.falloff)


def test_engine_params_round_trip():
    config = GrowthConfig(max_force=2.0, alignment_weight=0.4)
    params = config.engine_params
    assert params['max_force'] == 2.0
    assert params['alignment_weight'] == 0.4
    assert 'output_dir' not in params


def test_load_missing_file_gives_defaults(tmp_path):
    assert load_config(str(tmp_path / 'nope.json')) == GrowthConfig()


def test_save_and_load(tmp_path):
    path = tmp_path / 'cfg' / 'growth.json'
    config = GrowthConfig(max_force=2.5, start_center=(3.0, 4.0), falloff='inverse_square')
    save_config(config, str(path))

    with open(path) as f:
        data = json.load(f)
    assert data['start_center'] == [3.0, 4.0]

    loaded = load_config(str(path))
    assert loaded == config
    assert loaded.start_center == (3.0, 4.0)


def test_load_partial_file(tmp_path):
    path = tmp_path / 'growth.json'
    path.write_text(json.dumps({'max_speed': 0.25, 'iterations': 10}))
    config = load_config(str(path))
    assert config.max_speed == 0.25
    assert config.iterations == 10
    assert config.max_force == 1.5


def test_load_rejects_unknown_keys(tmp_path):
    path = tmp_path / 'growth.json'
    path.write_text(json.dumps({'max_sped': 0.25}))
    with pytest.raises(ConfigurationError, match='max_sped'):
        load_config(str(path))


def test_load_validates_values(tmp_path):
    path = tmp_path / 'growth.json'
    path.write_text(json.dumps({'max_edge_length': -1}))
    with pytest.raises(ConfigurationError):
        load_config(str(path))


def test_save_rejects_callable_falloff(tmp_path):
    with pytest.raises(ConfigurationError):
        save_config(GrowthConfig(falloff=lambda d: d), str(tmp_path / 'x.json'))


def test_load_rejects_zero_frame_skip(tmp_path):
    path = tmp_path / 'growth.json'
    path.write_text(json.dumps({'frame_skip': 0}))
    with pytest.raises(ConfigurationError) as excinfo:
        load_config(str(path))
    assert excinfo.value.parameter == 'frame_skip'


def test_shipped_config_is_valid():
    path = Path(__file__).parent.parent / 'config' / 'growth.json'
    assert path.exists()
    assert load_config(str(path)) == GrowthConfig()
