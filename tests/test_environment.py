"""
Tests for the Gymnasium environment.
"""
import pytest
import numpy as np
import gymnasium as gym
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from blast.config import GameConfig
from blast.types import BoosterType
from environment.blast_env import BlastEnv


SMALL = GameConfig(rows=3, cols=3, colors_count=2, moves=5, target_score=99999)


def make_env(colors):
    """Small environment with a fixed, playable board."""
    env = BlastEnv(config=SMALL)
    env.reset(seed=0)
    # Undo a possible dead opening deal before fixing the colors
    env.session.reset()
    env.session.board.set_state(colors)
    return env


class TestEnvironmentCreation:
    """Test environment creation."""

    def test_create_env(self):
        env = BlastEnv()
        assert env.num_cells == 81
        assert env.action_space.n == 162
        assert 'board' in env.observation_space.spaces
        assert 'counters' in env.observation_space.spaces
        assert 'action_mask' in env.observation_space.spaces

    def test_registered(self):
        assert 'Blast-v0' in gym.registry

    def test_action_round_trip(self):
        env = BlastEnv(config=SMALL)
        assert env._action_to_move(0) == (BoosterType.NONE, 0, 0)
        assert env._action_to_move(5) == (BoosterType.NONE, 1, 2)
        assert env._action_to_move(9 + 4) == (BoosterType.BOMB, 1, 1)
        assert env._move_to_action(BoosterType.BOMB, 2, 2) == 17


class TestEnvironmentReset:
    """Test environment reset."""

    def test_reset_shapes(self):
        env = BlastEnv()
        obs, info = env.reset()
        assert obs['board'].shape == (9, 9)
        assert obs['counters'].shape == (3,)
        assert obs['action_mask'].shape == (162,)
        assert info['score'] == 0
        assert 'opening_ended' in info

    def test_reset_with_seed(self):
        """Same seed deals the same board."""
        env = BlastEnv()
        obs1, _ = env.reset(seed=42)
        obs2, _ = env.reset(seed=42)
        assert np.array_equal(obs1['board'], obs2['board'])

    def test_seeded_envs_match(self):
        obs1, _ = BlastEnv(seed=7).reset()
        obs2, _ = BlastEnv(seed=7).reset()
        assert np.array_equal(obs1['board'], obs2['board'])


class TestEnvironmentStep:
    """Test stepping."""

    def test_action_mask_matches_groups(self):
        """Tap actions are valid exactly on qualifying groups."""
        env = make_env([[0, 0, 1], [1, 0, 1], [0, 1, 0]])

        mask = env.get_action_mask()

        taps = mask[:9].reshape(3, 3)
        expected = np.array([
            [True, True, True],
            [False, True, True],
            [False, False, False],
        ])
        assert np.array_equal(taps, expected)
        assert mask[9:].all()

    def test_invalid_action(self):
        """Masked actions are penalised without changing the game."""
        env = make_env([[0, 1, 0], [1, 0, 1], [0, 1, 0]])
        before = env.session.board.get_state()

        obs, reward, terminated, truncated, info = env.step(0)

        assert reward == env.reward_config['invalid_action']
        assert not terminated
        assert info['invalid_action']
        assert env.session.moves_left == 5
        assert np.array_equal(obs['board'], before)

    def test_bomb_step(self):
        env = make_env([[0, 1, 0], [0, 1, 1], [1, 0, 0]])

        obs, reward, terminated, truncated, info = env.step(9 + 4)

        assert info['last_move']['removed_count'] == 9
        assert info['last_move']['score_delta'] == 810
        assert obs['counters'][0] == 4
        assert obs['counters'][1] == 4
        if not terminated:
            assert reward == pytest.approx(8.1)

    def test_out_of_range_action(self):
        env = BlastEnv(config=SMALL)
        env.reset(seed=0)
        with pytest.raises(ValueError):
            env.step(18)

    def test_episode_terminates(self):
        """Random valid play ends within the move budget."""
        env = BlastEnv(config=SMALL)
        env.reset(seed=1)

        terminated = False
        steps = 0
        while not terminated and steps < 20:
            _, _, terminated, _, _ = env.step(env.sample_valid_action())
            steps += 1

        assert terminated
        assert steps <= 5

    def test_step_after_end(self):
        env = BlastEnv(config=SMALL)
        env.reset(seed=1)
        while not env.step(env.sample_valid_action())[2]:
            pass
        obs, reward, terminated, truncated, info = env.step(0)
        assert terminated
        assert reward == 0.0

    def test_render_ansi(self):
        env = BlastEnv(config=SMALL, render_mode="ansi")
        env.reset(seed=0)
        assert "Score:" in env.render()
