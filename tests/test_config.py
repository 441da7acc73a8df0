"""
Tests for YAML run configuration.
"""

from pathlib import Path

import pytest

from primekit.config import DEFAULTS, load_config
from primekit.errors import InvalidArgument

DEFAULT_CONFIG = Path(__file__).parent.parent / "config" / "default.yaml"


def write(tmp_path, text: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(text)
    return path


class TestLoadConfig:

    def test_defaults_without_file(self):
        config = load_config()
        assert config == DEFAULTS
        config['seed'] = -1
        assert DEFAULTS['seed'] != -1, "load_config must return a copy"

    def test_shipped_default_file(self):
        config = load_config(DEFAULT_CONFIG)
        assert set(config) == set(DEFAULTS)
        assert 100 in config['limits']
        assert config['workers'] is None

    def test_override(self, tmp_path):
        config = load_config(write(tmp_path, "limits: [50]\nworkers: 2\n"))
        assert config['limits'] == [50]
        assert config['workers'] == 2
        assert config['seed'] == DEFAULTS['seed']

    def test_empty_file(self, tmp_path):
        assert load_config(write(tmp_path, "")) == DEFAULTS

    def test_unknown_key(self, tmp_path):
        with pytest.raises(InvalidArgument, match="unknown config keys"):
            load_config(write(tmp_path, "limt: [10]\n"))

    def test_not_a_mapping(self, tmp_path):
        with pytest.raises(InvalidArgument):
            load_config(write(tmp_path, "- 1\n- 2\n"))

    @pytest.mark.parametrize("text", [
        "limits: [10, -1]\n",
        "workers: 0\n",
        "sieves: [atkin, quadratic]\n",
    ])
    def test_invalid_values(self, tmp_path, text):
        with pytest.raises(InvalidArgument):
            load_config(write(tmp_path, text))
