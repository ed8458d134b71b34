"""
Tests for the input controller.
"""
import numpy as np
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from blast.config import GameConfig
from blast.controller import InputController
from blast.session import GameSession
from blast.types import BoosterType


def make_controller(colors, colors_count=2, **overrides):
    colors = np.asarray(colors)
    params = dict(rows=colors.shape[0], cols=colors.shape[1], colors_count=colors_count,
                  moves=10, target_score=99999)
    params.update(overrides)
    session = GameSession(GameConfig(**params), rng=np.random.default_rng(0))
    session.board.set_state(colors)
    return InputController(session)


CHECKERBOARD = [
    [0, 1, 0],
    [1, 0, 1],
    [0, 1, 0],
]


class TestTeleportSelection:
    """Test two-click teleport assembly."""

    def test_two_clicks_swap(self):
        """First click waits, second click teleports."""
        controller = make_controller(CHECKERBOARD)
        controller.select(BoosterType.TELEPORT)

        assert controller.click(0, 0) is None
        assert controller.pending == (0, 0)

        outcome = controller.click(0, 1)

        assert outcome is not None
        assert outcome.ok
        assert controller.pending is None
        assert controller.selected == BoosterType.NONE
        assert controller.session.get_teleport_charges() == 4

    def test_same_cell_cancels(self):
        """Clicking the pending cell again clears it."""
        controller = make_controller(CHECKERBOARD)
        controller.select(BoosterType.TELEPORT)

        controller.click(1, 1)
        assert controller.click(1, 1) is None

        assert controller.pending is None
        assert controller.selected == BoosterType.TELEPORT
        assert controller.session.get_teleport_charges() == 5
        assert controller.session.moves_left == 10

    def test_failed_teleport_keeps_booster(self):
        controller = make_controller(CHECKERBOARD, teleport_booster_charges=0)
        controller.select(BoosterType.TELEPORT)
        controller.click(0, 0)
        outcome = controller.click(0, 1)
        assert not outcome.ok
        assert controller.selected == BoosterType.TELEPORT
        assert controller.pending is None

    def test_select_clears_pending(self):
        controller = make_controller(CHECKERBOARD)
        controller.select(BoosterType.TELEPORT)
        controller.click(0, 0)
        controller.select(BoosterType.BOMB)
        assert controller.pending is None


class TestClicks:
    """Test plain and bomb clicks."""

    def test_plain_click(self):
        controller = make_controller([[0, 0], [1, 1]], colors_count=2)
        outcome = controller.click(0, 0)
        assert outcome.ok
        assert outcome.removed_count == 2
        assert controller.selected == BoosterType.NONE

    def test_bomb_consumed_after_use(self):
        """Booster selection resets after a successful bomb."""
        controller = make_controller(CHECKERBOARD)
        controller.select(BoosterType.BOMB)

        outcome = controller.click(1, 1)

        assert outcome.ok
        assert outcome.removed_count == 9
        assert controller.selected == BoosterType.NONE
        assert controller.session.get_bomb_charges() == 4

    def test_ignored_after_game_over(self):
        """Clicks do nothing once the session has ended."""
        controller = make_controller([[0, 0], [0, 0]], colors_count=1, moves=1)
        assert controller.click(0, 0).ended
        assert controller.click(0, 0) is None
