"""
Blast Gymnasium Environment.

This module exposes a game session as a Gymnasium-compatible environment so
agents can be trained or evaluated against the rules engine.
"""
from dataclasses import replace
from typing import Dict, Tuple, Any, Optional, List
import numpy as np
import gymnasium as gym
from gymnasium import spaces

from blast.config import GameConfig
from blast.session import GameSession, Outcome
from blast.types import BoosterType


class BlastEnv(gym.Env):
    """
    Gymnasium environment for the blast puzzle.

    Observation Space:
        Dictionary with:
        - 'board': (rows, cols) int8 array of tile colors
        - 'counters': (3,) float32 array [moves_left, bomb charges, teleport charges]
        - 'action_mask': (2 * rows * cols,) int8 array, valid actions

    Action Space:
        Discrete(2 * rows * cols)
        Action = mode * rows * cols + row * cols + col
        mode 0 taps a group, mode 1 drops a bomb. Teleport is not exposed.
    """

    metadata = {"render_modes": ["human", "ansi"]}

    NUM_MODES = 2

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        reward_config: Optional[Dict[str, float]] = None,
        seed: Optional[int] = None,
    ):
        """
        Initialize the environment.

        Args:
            config: Game configuration (defaults to GameConfig())
            render_mode: 'human' for console output, 'ansi' for string return
            reward_config: Custom reward configuration
            seed: Random seed for reproducibility
        """
        super().__init__()

        self.config = config or GameConfig()
        self.render_mode = render_mode
        self.seed_value = seed if seed is not None else self.config.seed

        self.reward_config = {
            'score_scale': 0.01,
            'win_bonus': 10.0,
            'loss_penalty': -10.0,
            'invalid_action': -1.0,
        }
        if reward_config:
            self.reward_config.update(reward_config)

        self.rows = self.config.rows
        self.cols = self.config.cols
        self.num_cells = self.rows * self.cols
        self.action_space_size = self.NUM_MODES * self.num_cells

        self.session = self._new_session()

        self.observation_space = spaces.Dict({
            'board': spaces.Box(
                low=0, high=max(self.config.colors_count - 1, 0),
                shape=(self.rows, self.cols),
                dtype=np.int8
            ),
            'counters': spaces.Box(
                low=0.0, high=np.inf,
                shape=(3,),
                dtype=np.float32
            ),
            'action_mask': spaces.Box(
                low=0, high=1,
                shape=(self.action_space_size,),
                dtype=np.int8
            ),
        })
        self.action_space = spaces.Discrete(self.action_space_size)

    def _new_session(self) -> GameSession:
        config = replace(self.config, seed=self.seed_value)
        return GameSession(config)

    def _action_to_move(self, action: int) -> Tuple[BoosterType, int, int]:
        """Convert flat action index to (booster, row, col)."""
        mode, cell = divmod(int(action), self.num_cells)
        row, col = divmod(cell, self.cols)
        booster = BoosterType.BOMB if mode == 1 else BoosterType.NONE
        return booster, row, col

    def _move_to_action(self, booster: BoosterType, row: int, col: int) -> int:
        mode = 1 if booster == BoosterType.BOMB else 0
        return mode * self.num_cells + row * self.cols + col

    def get_action_mask(self) -> np.ndarray:
        """
        Get the current action mask.

        Returns:
            Boolean array of shape (2 * rows * cols,) where True = valid action
        """
        mask = np.zeros(self.action_space_size, dtype=bool)
        session = self.session
        if session.is_game_over() or session.moves_left <= 0:
            return mask

        for group in session.board.groups():
            if len(group) >= session.cfg.min_group_size:
                for tile in group:
                    mask[tile.row * self.cols + tile.col] = True

        if session.get_bomb_charges() > 0:
            mask[self.num_cells:] = True

        return mask

    def _get_observation(self) -> Dict[str, np.ndarray]:
        session = self.session
        return {
            'board': session.board.get_state(),
            'counters': np.array([
                session.moves_left,
                session.get_bomb_charges(),
                session.get_teleport_charges(),
            ], dtype=np.float32),
            'action_mask': self.get_action_mask().astype(np.int8),
        }

    def _calculate_reward(self, outcome: Outcome) -> float:
        reward = outcome.score_delta * self.reward_config['score_scale']
        if outcome.ended:
            reward += self.reward_config['win_bonus'] if outcome.win else self.reward_config['loss_penalty']
        return reward

    def reset(
        self,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Start a new game.

        Args:
            seed: Random seed
            options: Additional options (unused)

        Returns:
            Tuple of (observation, info)
        """
        super().reset(seed=seed)

        if seed is not None:
            self.seed_value = seed

        self.session = self._new_session()
        opening = self.session.opening_check()

        info = self._get_info()
        info['opening_ended'] = opening.ended
        return self._get_observation(), info

    def step(
        self, action: int
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Take a step in the environment.

        Args:
            action: Flat action index

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        if not 0 <= int(action) < self.action_space_size:
            raise ValueError(f"Action {action} outside [0, {self.action_space_size})")

        if self.session.is_game_over():
            return self._get_observation(), 0.0, True, False, self._get_info()

        if not self.get_action_mask()[action]:
            info = self._get_info()
            info['invalid_action'] = True
            return self._get_observation(), self.reward_config['invalid_action'], False, False, info

        booster, row, col = self._action_to_move(action)
        outcome = self.session.play_at(row, col, booster)

        reward = self._calculate_reward(outcome)
        terminated = outcome.ended
        truncated = False

        observation = self._get_observation()
        info = self._get_info(outcome)

        if self.render_mode == "human":
            self.render()

        return observation, reward, terminated, truncated, info

    def _get_info(self, outcome: Optional[Outcome] = None) -> Dict[str, Any]:
        stats = self.session.get_statistics()
        info = {
            'score': stats['score'],
            'moves': stats['moves_made'],
            'moves_left': stats['moves_left'],
            'tiles_removed': stats['tiles_removed'],
            'reshuffles_left': self.session.reshuffles_left,
            'status': stats['status'],
            'invalid_action': False,
        }

        if outcome is not None:
            info['last_move'] = {
                'removed_count': outcome.removed_count,
                'score_delta': outcome.score_delta,
                'reshuffled': outcome.reshuffled,
                'reason': outcome.reason,
            }

        return info

    def render(self) -> Optional[str]:
        """Render the current game state."""
        if self.render_mode == "ansi":
            return str(self.session)
        elif self.render_mode == "human":
            print("\033[2J\033[H")
            print(self.session)
        return None

    def close(self) -> None:
        pass

    def get_valid_actions(self) -> List[int]:
        """Get list of valid action indices."""
        return np.flatnonzero(self.get_action_mask()).tolist()

    def sample_valid_action(self) -> int:
        """Sample a random valid action."""
        valid_actions = self.get_valid_actions()
        if not valid_actions:
            return 0
        return int(self.np_random.choice(valid_actions))


gym.register(
    id='Blast-v0',
    entry_point='environment.blast_env:BlastEnv',
    max_episode_steps=10000,
)
