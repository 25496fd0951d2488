"""Tests for pipeline configuration"""

import pytest
import yaml

from bril_cfg.errors import ConfigError
from bril_cfg.pipeline import PipelineConfig


def test_defaults():
    config = PipelineConfig()
    assert config.output_format == 'dot'
    assert config.n_jobs == 1
    assert config.functions == []


def test_yaml_round_trip(tmp_path):
    path = tmp_path / 'nested' / 'config.yaml'
    PipelineConfig(output_format='json', n_jobs=3, functions=['main']).save(str(path))

    loaded = PipelineConfig.from_yaml(str(path))
    assert loaded.output_format == 'json'
    assert loaded.n_jobs == 3
    assert loaded.functions == ['main']


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / 'empty.yaml'
    path.write_text('')
    assert PipelineConfig.from_yaml(str(path)) == PipelineConfig()


def test_unknown_key_rejected(tmp_path):
    path = tmp_path / 'bad.yaml'
    path.write_text(yaml.dump({'n_jobs': 2, 'colour': 'red'}))
    with pytest.raises(ConfigError, match='colour'):
        PipelineConfig.from_yaml(str(path))


@pytest.mark.parametrize('kwargs', [
    {'output_format': 'svg'},
    {'n_jobs': 0},
    {'chunk_size': -1},
])
def test_invalid_values(kwargs):
    with pytest.raises(ConfigError):
        PipelineConfig(**kwargs)


def test_update_skips_none_and_validates():
    config = PipelineConfig(n_jobs=2)
    config.update(n_jobs=None, output_format='json')
    assert config.n_jobs == 2
    assert config.output_format == 'json'

    with pytest.raises(ConfigError):
        config.update(n_jobs=0)
    with pytest.raises(ConfigError):
        config.update(verbose=True)
