"""
Tests for configuration loading.
"""
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from blast.config import ConfigError, GameConfig, load_config, save_config

DEFAULT_CONFIG = Path(__file__).parent.parent / "config" / "default.yaml"


class TestGameConfig:
    """Test config values and validation."""

    def test_defaults(self):
        config = GameConfig()
        assert (config.rows, config.cols, config.colors_count) == (9, 9, 5)
        assert config.min_group_size == 2
        assert config.moves == 30
        assert config.target_score == 20000
        assert config.max_reshuffles == 3
        assert config.bomb_booster_charges == 5
        assert config.teleport_booster_charges == 5
        assert config.bomb_radius == 1
        assert config.seed is None

    def test_validate_ok(self):
        config = GameConfig(rows=1, cols=1, colors_count=1)
        assert config.validate() is config

    @pytest.mark.parametrize("overrides", [
        {"rows": 0},
        {"cols": -1},
        {"colors_count": 0},
        {"moves": 0},
        {"min_group_size": 0},
        {"bomb_radius": -1},
        {"max_reshuffles": -2},
        {"teleport_booster_charges": -1},
    ])
    def test_validate_rejects(self, overrides):
        with pytest.raises(ConfigError):
            GameConfig(**overrides).validate()

    def test_from_dict_unknown_key(self):
        with pytest.raises(ConfigError):
            GameConfig.from_dict({"rows": 5, "lives": 3})


class TestLoadConfig:
    """Test YAML loading."""

    def test_load_default_file(self):
        """The shipped config matches the dataclass defaults."""
        assert load_config(DEFAULT_CONFIG) == GameConfig()

    def test_load_partial(self, tmp_path):
        path = tmp_path / "small.yaml"
        path.write_text("game:\n  rows: 4\n  cols: 5\n  seed: 11\n")
        config = load_config(path)
        assert config.rows == 4
        assert config.cols == 5
        assert config.seed == 11
        assert config.colors_count == 5

    def test_load_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == GameConfig()

    def test_load_invalid_values(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("game:\n  rows: 0\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_load_bad_layout(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "saved.yaml"
        config = GameConfig(rows=6, bomb_radius=2, seed=3)
        save_config(config, path)
        assert load_config(path) == config
