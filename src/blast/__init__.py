"""Rules engine for the tile blast puzzle."""
from .tile import Tile
from .types import BoosterType, GridPos, MovedTile, RemovedTileInfo, SpawnedTile, Step
from .config import ConfigError, GameConfig, load_config, save_config
from .board import Board
from .session import GameSession, GameStatus, Outcome, new_session, play_random_game
from .controller import InputController
from .renderer import Renderer

__all__ = [
    "Tile",
    "BoosterType",
    "GridPos",
    "MovedTile",
    "RemovedTileInfo",
    "SpawnedTile",
    "Step",
    "ConfigError",
    "GameConfig",
    "load_config",
    "save_config",
    "Board",
    "GameSession",
    "GameStatus",
    "Outcome",
    "new_session",
    "play_random_game",
    "InputController",
    "Renderer",
]
