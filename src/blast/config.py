"""
Game configuration.

Configs are plain dataclasses that can be loaded from (and saved to) YAML
files. A config file holds the fields under a top-level ``game`` key:

    game:
      rows: 9
      cols: 9
      colors_count: 5
      ...
"""
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml


class ConfigError(ValueError):
    """Raised for malformed or out-of-range configuration."""


@dataclass
class GameConfig:
    """Parameters of a single game session."""
    rows: int = 9
    cols: int = 9
    colors_count: int = 5
    min_group_size: int = 2
    moves: int = 30
    target_score: int = 20000
    max_reshuffles: int = 3
    bomb_booster_charges: int = 5
    teleport_booster_charges: int = 5
    bomb_radius: int = 1
    seed: Optional[int] = None

    def validate(self) -> "GameConfig":
        """
        Check that the values describe a playable board.

        Returns:
            self, so calls can be chained

        Raises:
            ConfigError: If any value is out of range
        """
        for name in ("rows", "cols", "colors_count", "moves"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive, got {getattr(self, name)}")
        if self.min_group_size < 1:
            raise ConfigError(f"min_group_size must be >= 1, got {self.min_group_size}")
        for name in ("target_score", "max_reshuffles", "bomb_booster_charges",
                     "teleport_booster_charges", "bomb_radius"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must be >= 0, got {getattr(self, name)}")
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameConfig":
        """Create from dictionary, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**data)


def load_config(config_path: Union[str, Path]) -> GameConfig:
    """
    Load and validate a game configuration from a YAML file.

    Args:
        config_path: Path to the YAML file

    Returns:
        Validated GameConfig
    """
    with open(config_path, 'r') as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ConfigError(f"{config_path}: expected a mapping at top level")

    game = raw.get('game', {}) or {}
    if not isinstance(game, dict):
        raise ConfigError(f"{config_path}: 'game' must be a mapping")

    return GameConfig.from_dict(game).validate()


def save_config(config: GameConfig, config_path: Union[str, Path]) -> None:
    """Write a configuration to a YAML file."""
    with open(config_path, 'w') as f:
        yaml.safe_dump({'game': config.to_dict()}, f, sort_keys=False)
